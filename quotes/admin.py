from django.contrib import admin
from unfold.admin import ModelAdmin, TabularInline

from .models import Quote, QuoteAccessory, QuoteFee, QuoteMaterialPricing, QuotePanel, QuoteStatusHistory


class QuotePanelInline(TabularInline):
    model = QuotePanel
    extra = 0


class QuoteMaterialPricingInline(TabularInline):
    model = QuoteMaterialPricing
    extra = 0
    fields = (
        "material", "boards_used", "usage_percentage", "charged_sqm", "price_per_sqm",
        "cutting_length_m", "cutting_fee_per_m", "net_total", "vat_amount", "gross_total",
    )
    readonly_fields = ("price_per_sqm", "net_total", "vat_amount", "gross_total")


class QuoteFeeInline(TabularInline):
    model = QuoteFee
    extra = 0
    fields = ("fee_type", "name", "quantity", "unit_price_net", "vat_percent", "net_total", "vat_amount", "gross_total")
    readonly_fields = ("net_total", "vat_amount", "gross_total")


class QuoteAccessoryInline(TabularInline):
    model = QuoteAccessory
    extra = 0
    fields = ("accessory", "name", "quantity", "unit_price_net", "vat_percent", "net_total", "vat_amount", "gross_total")
    readonly_fields = ("net_total", "vat_amount", "gross_total")


class QuoteStatusHistoryInline(TabularInline):
    model = QuoteStatusHistory
    extra = 0
    readonly_fields = ("from_status", "to_status", "changed_by", "note", "changed_at")
    can_delete = False

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Quote)
class QuoteAdmin(ModelAdmin):
    list_display = (
        "quote_number", "order_number", "customer", "status", "payment_status",
        "final_total", "production_machine", "production_date", "created_at",
    )
    list_filter = ("status", "payment_status", "production_machine")
    search_fields = ("quote_number", "order_number", "customer__name", "barcode")
    readonly_fields = (
        "quote_number", "order_number", "status", "materials_gross", "fees_gross", "accessories_gross",
        "subtotal", "discount_amount", "final_total", "payment_status", "ordered_at",
        "created_at", "updated_at",
    )
    date_hierarchy = "created_at"
    inlines = [
        QuotePanelInline,
        QuoteMaterialPricingInline,
        QuoteFeeInline,
        QuoteAccessoryInline,
        QuoteStatusHistoryInline,
    ]

    def save_related(self, request, form, formsets, change):
        super().save_related(request, form, formsets, change)
        form.instance.recalculate_totals()
