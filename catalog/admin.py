from django.contrib import admin
from unfold.admin import ModelAdmin, TabularInline

from .models import (
    Accessory,
    FeeType,
    InventoryTransaction,
    LinearMaterial,
    Material,
    MaterialPriceHistory,
    VatRate,
)


@admin.register(VatRate)
class VatRateAdmin(ModelAdmin):
    list_display = ("name", "percent", "is_active")
    list_editable = ("is_active",)


class MaterialPriceHistoryInline(TabularInline):
    model = MaterialPriceHistory
    extra = 0
    can_delete = False
    readonly_fields = ("old_base_price", "new_base_price", "old_multiplier", "new_multiplier", "changed_by", "changed_at")

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Material)
class MaterialAdmin(ModelAdmin):
    list_display = (
        "name", "length_mm", "width_mm", "thickness_mm", "base_price", "multiplier",
        "board_selling_price", "quantity_in_stock", "on_stock", "is_active",
    )
    list_filter = ("on_stock", "is_active", "vat")
    search_fields = ("name",)
    readonly_fields = ("created_at", "updated_at")
    inlines = [MaterialPriceHistoryInline]

    def save_model(self, request, obj, form, change):
        obj.save(changed_by=request.user)

    @admin.display(description="Tábla bruttó ár")
    def board_selling_price(self, obj):
        return obj.board_selling_price


@admin.register(LinearMaterial)
class LinearMaterialAdmin(ModelAdmin):
    list_display = ("name", "length_mm", "base_price", "multiplier", "quantity_in_stock", "on_stock", "is_active")
    list_filter = ("on_stock", "is_active")
    search_fields = ("name",)


@admin.register(Accessory)
class AccessoryAdmin(ModelAdmin):
    list_display = ("name", "sku", "base_price", "multiplier", "gross_price", "quantity_in_stock", "is_active")
    list_filter = ("is_active",)
    search_fields = ("name", "sku")

    @admin.display(description="Bruttó ár")
    def gross_price(self, obj):
        return obj.gross_price


@admin.register(FeeType)
class FeeTypeAdmin(ModelAdmin):
    list_display = ("name", "net_price", "vat", "unit", "is_active")
    list_editable = ("is_active",)
    search_fields = ("name",)


@admin.register(MaterialPriceHistory)
class MaterialPriceHistoryAdmin(ModelAdmin):
    list_display = ("material", "old_base_price", "new_base_price", "old_multiplier", "new_multiplier", "changed_by", "changed_at")
    list_filter = ("material",)
    readonly_fields = ("changed_at",)
    date_hierarchy = "changed_at"


@admin.register(InventoryTransaction)
class InventoryTransactionAdmin(ModelAdmin):
    list_display = ("material", "transaction_type", "quantity", "unit_price", "reference_type", "reference_id", "created_at")
    list_filter = ("transaction_type", "reference_type", "material")
    search_fields = ("material__name", "comment")
    readonly_fields = ("created_at",)
    date_hierarchy = "created_at"
