from django import forms

from accounts.forms import JsonErrorsMixin
from .models import Customer


class CustomerForm(JsonErrorsMixin, forms.ModelForm):
    class Meta:
        model = Customer
        fields = [
            "name",
            "email",
            "phone",
            "tax_number",
            "billing_postal_code",
            "billing_city",
            "billing_street",
            "default_discount_percent",
            "notes",
        ]
        widgets = {
            "notes": forms.Textarea(attrs={"rows": 2}),
        }
