from django import forms

from accounts.forms import JsonErrorsMixin

from .models import Shipment, ShipmentItem


class ShipmentForm(JsonErrorsMixin, forms.ModelForm):
    class Meta:
        model = Shipment
        fields = ["supplier_name", "supplier_reference", "comment"]
        widgets = {
            "comment": forms.Textarea(attrs={"rows": 2}),
        }


class ShipmentItemForm(JsonErrorsMixin, forms.ModelForm):
    class Meta:
        model = ShipmentItem
        fields = ["material", "linear_material", "accessory", "description", "quantity_received", "net_price", "vat_percent"]

    def clean(self):
        cleaned = super().clean()
        targets = [cleaned.get(f) for f in ("material", "linear_material", "accessory")]
        if sum(t is not None for t in targets) != 1:
            raise forms.ValidationError("Pontosan egy anyagot, szálanyagot vagy kiegészítőt válasszon.")
        if cleaned.get("quantity_received") is not None and cleaned["quantity_received"] < 0:
            self.add_error("quantity_received", "A mennyiség nem lehet negatív.")
        return cleaned


class ShipmentItemUpdateForm(JsonErrorsMixin, forms.Form):
    quantity_received = forms.DecimalField(min_value=0, max_digits=12, decimal_places=3, label="Beérkezett mennyiség")
    net_price = forms.DecimalField(min_value=0, max_digits=12, decimal_places=2, label="Nettó beszerzési ár")
