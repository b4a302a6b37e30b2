"""
Registrace modelů do Django admin rozhraní.

Umožňuje správu katalogu, povolených uživatelů a výsledků přes Django admin panel.
"""
from django.contrib import admin

from .models import AuthorizedUser, OfficialTestSettings, QuizResult, Species


@admin.register(Species)
class SpeciesAdmin(admin.ModelAdmin):
    list_display = ("name_local", "name_latin", "group", "image_count")
    list_filter = ("group",)
    search_fields = ("name_local", "name_latin")


@admin.register(AuthorizedUser)
class AuthorizedUserAdmin(admin.ModelAdmin):
    list_display = ("email", "role", "created_at")
    list_filter = ("role",)
    search_fields = ("email",)


@admin.register(QuizResult)
class QuizResultAdmin(admin.ModelAdmin):
    list_display = ("user_email", "quiz_type", "is_official", "total_points", "question_count", "created_at")
    list_filter = ("quiz_type", "is_official")
    search_fields = ("user_email",)
    # Výsledky se po uložení nemění
    readonly_fields = ("user_email", "quiz_type", "is_official", "total_points", "question_count", "breakdown", "created_at")


# Nastavení oficiálního testu je jediný řádek
admin.site.register(OfficialTestSettings)
