from decimal import Decimal

from django import forms

from accounts.forms import JsonErrorsMixin

from .models import Machine


class ProductionAssignForm(JsonErrorsMixin, forms.Form):
    machine = forms.ModelChoiceField(queryset=Machine.objects.filter(is_active=True), label="Gép")
    production_date = forms.DateField(label="Gyártás napja", widget=forms.DateInput(attrs={"type": "date"}))
    barcode = forms.CharField(max_length=50, label="Vonalkód")


class ThresholdForm(JsonErrorsMixin, forms.Form):
    threshold = forms.DecimalField(
        max_digits=6,
        decimal_places=3,
        min_value=Decimal("0.001"),
        label="Küszöb (m²/alkatrész)",
    )
