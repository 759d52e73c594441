from django.contrib import admin
from unfold.admin import ModelAdmin

from .models import Machine


@admin.register(Machine)
class MachineAdmin(ModelAdmin):
    list_display = ("name", "role", "comment", "usage_limit_per_day", "is_active", "created_at")
    list_filter = ("role", "is_active")
    list_editable = ("is_active",)
    search_fields = ("name", "comment")
    readonly_fields = ("created_at",)
