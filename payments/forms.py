from django import forms

from accounts.forms import JsonErrorsMixin

from .models import PaymentMethod


class PaymentForm(JsonErrorsMixin, forms.Form):
    amount = forms.DecimalField(max_digits=12, decimal_places=2, label="Összeg")
    method = forms.ChoiceField(choices=PaymentMethod.choices, initial=PaymentMethod.CASH, label="Fizetési mód")
    comment = forms.CharField(max_length=255, required=False, label="Megjegyzés")
