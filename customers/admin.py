from django.contrib import admin
from unfold.admin import ModelAdmin

from .models import Customer


@admin.register(Customer)
class CustomerAdmin(ModelAdmin):
    list_display = ("name", "phone", "email", "tax_number", "default_discount_percent", "is_active", "created_at")
    list_filter = ("is_active",)
    search_fields = ("name", "phone", "tax_number", "email")
    readonly_fields = ("created_at", "updated_at")

    fieldsets = (
        ("Alapadatok", {"fields": ("name", "phone", "email")}),
        (
            "Számlázási adatok",
            {
                "fields": ("tax_number", "billing_postal_code", "billing_city", "billing_street"),
                "classes": ["collapse"],
            },
        ),
        ("Kedvezmény és megjegyzés", {"fields": ("default_discount_percent", "notes")}),
        ("Állapot", {"fields": ("is_active", "created_at", "updated_at")}),
    )
