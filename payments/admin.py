from django.contrib import admin
from unfold.admin import ModelAdmin

from .models import QuotePayment


@admin.register(QuotePayment)
class QuotePaymentAdmin(ModelAdmin):
    list_display = ("quote", "amount", "method", "created_by", "created_at")
    list_filter = ("method",)
    search_fields = ("quote__quote_number", "quote__order_number", "quote__customer__name", "comment")
    readonly_fields = ("created_at",)
    date_hierarchy = "created_at"
