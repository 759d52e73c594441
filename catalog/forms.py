from django import forms

from accounts.forms import JsonErrorsMixin


class PiecePriceForm(JsonErrorsMixin, forms.Form):
    """Whole-piece prices as typed by staff; either one may be left empty."""

    purchase_price = forms.DecimalField(
        required=False, min_value=0, decimal_places=2, label="Beszerzési nettó ár / db"
    )
    selling_price = forms.DecimalField(
        required=False, min_value=0, decimal_places=0, label="Eladási bruttó ár / db"
    )

    def clean(self):
        cleaned = super().clean()
        if cleaned.get("purchase_price") is None and cleaned.get("selling_price") is None:
            raise forms.ValidationError("Adjon meg legalább egy árat.")
        return cleaned
