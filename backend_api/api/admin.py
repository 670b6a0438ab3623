from django.contrib import admin

from .models import Word


@admin.register(Word)
class WordAdmin(admin.ModelAdmin):
    list_display = ("text", "length", "is_active", "created_at")
    list_filter = ("is_active", "length")
    search_fields = ("text",)
    ordering = ("length", "text")
    readonly_fields = ("length", "created_at", "updated_at")
