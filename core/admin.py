from django.contrib import admin
from unfold.admin import ModelAdmin

from .models import Setting


@admin.register(Setting)
class SettingAdmin(ModelAdmin):
    list_display = ("key", "value", "description", "updated_at")
    search_fields = ("key", "description")
    readonly_fields = ("updated_at",)
