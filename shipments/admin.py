from django.contrib import admin
from unfold.admin import ModelAdmin, TabularInline

from .models import Shipment, ShipmentItem


class ShipmentItemInline(TabularInline):
    model = ShipmentItem
    extra = 0
    fields = ("material", "linear_material", "accessory", "description", "quantity_received", "net_price",
              "vat_percent", "net_total", "vat_amount", "gross_total")
    readonly_fields = ("net_total", "vat_amount", "gross_total")


@admin.register(Shipment)
class ShipmentAdmin(ModelAdmin):
    list_display = ("shipment_number", "supplier_name", "status", "created_at", "received_at", "received_by")
    list_filter = ("status",)
    search_fields = ("shipment_number", "supplier_name", "supplier_reference")
    readonly_fields = ("shipment_number", "status", "created_at", "received_at", "received_by")
    exclude = ("created_by",)
    inlines = [ShipmentItemInline]
    actions = ["receive_selected"]

    def save_model(self, request, obj, form, change):
        if not change:
            obj.created_by = request.user
        super().save_model(request, obj, form, change)

    @admin.action(description="Kijelöltek bevételezése")
    def receive_selected(self, request, queryset):
        received = 0
        for shipment in queryset:
            try:
                shipment.receive(request.user)
                received += 1
            except ValueError as e:
                self.message_user(request, str(e), level="warning")
        if received:
            self.message_user(request, f"{received} szállítmány bevételezve.")
