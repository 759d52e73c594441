"""
Hungarian number formatting filters.

Usage in templates:
    {% load money_filters %}
    {{ 27|percent }}                         → "27%"
    {{ "7.5"|percent }}                      → "7,5%"
"""

from decimal import InvalidOperation

from django import template

from pricing.rounding import to_decimal

register = template.Library()


@register.filter
def percent(value):
    if value is None or value == "":
        return ""
    try:
        amount = to_decimal(value).normalize()
    except (InvalidOperation, TypeError, ValueError):
        return str(value)
    text = format(amount, "f").replace(".", ",")
    return f"{text}%"
