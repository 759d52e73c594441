from django import forms

from accounts.forms import JsonErrorsMixin
from catalog.models import Accessory, FeeType, Material
from customers.models import Customer
from payments.models import PaymentMethod

from .models import QuoteStatus


class QuoteCreateForm(JsonErrorsMixin, forms.Form):
    customer = forms.ModelChoiceField(queryset=Customer.objects.filter(is_active=True), label="Ügyfél")
    comment = forms.CharField(required=False, widget=forms.Textarea(attrs={"rows": 2}), label="Megjegyzés")


class FeeLineForm(JsonErrorsMixin, forms.Form):
    fee_type = forms.ModelChoiceField(queryset=FeeType.objects.filter(is_active=True), label="Díjtípus")
    quantity = forms.DecimalField(min_value=1, max_digits=10, decimal_places=2, initial=1, label="Mennyiség")
    unit_price_net = forms.DecimalField(
        required=False,
        max_digits=12,
        decimal_places=2,
        label="Nettó egységár",
        help_text="Üresen hagyva a díjtípus ára; negatív érték jóváírás",
    )
    comment = forms.CharField(max_length=255, required=False, label="Megjegyzés")


class AccessoryLineForm(JsonErrorsMixin, forms.Form):
    accessory = forms.ModelChoiceField(queryset=Accessory.objects.filter(is_active=True), label="Kiegészítő")
    quantity = forms.IntegerField(min_value=1, initial=1, label="Mennyiség")


class MaterialPricingForm(JsonErrorsMixin, forms.Form):
    boards_used = forms.IntegerField(min_value=0, initial=0, label="Teljes táblák")
    usage_percentage = forms.DecimalField(min_value=0, max_value=100, decimal_places=2, label="Kihasználtság (%)")
    charged_sqm = forms.DecimalField(min_value=0, decimal_places=3, initial=0, label="Számlázott m²")
    cutting_length_m = forms.DecimalField(min_value=0, decimal_places=2, initial=0, required=False, label="Vágási hossz (m)")
    cutting_fee_per_m = forms.DecimalField(min_value=0, decimal_places=2, initial=0, required=False, label="Vágási díj (Ft/m)")


class DiscountForm(JsonErrorsMixin, forms.Form):
    discount_percent = forms.DecimalField(min_value=0, max_value=100, decimal_places=2, label="Kedvezmény (%)")


class CreateOrderForm(JsonErrorsMixin, forms.Form):
    initial_payment = forms.DecimalField(required=False, max_digits=12, decimal_places=2, label="Előleg")
    payment_method = forms.ChoiceField(choices=PaymentMethod.choices, initial=PaymentMethod.CASH, label="Fizetési mód")
    comment = forms.CharField(max_length=255, required=False, label="Megjegyzés")


class StatusChangeForm(JsonErrorsMixin, forms.Form):
    status = forms.ChoiceField(choices=QuoteStatus.choices, label="Új állapot")
    note = forms.CharField(required=False, widget=forms.Textarea(attrs={"rows": 2}), label="Megjegyzés")


class PanelForm(JsonErrorsMixin, forms.Form):
    material = forms.ModelChoiceField(queryset=Material.objects.filter(is_active=True), label="Anyag")
    length_mm = forms.IntegerField(min_value=1, label="Hossz (mm)")
    width_mm = forms.IntegerField(min_value=1, label="Szélesség (mm)")
    quantity = forms.IntegerField(min_value=1, initial=1, label="Darab")
    label = forms.CharField(max_length=100, required=False, label="Jelölés")
