"""
RecipeVault Admin: basic Django admin for Account, Recipe, Ingredient.

The admin is a staff tool and is not ownership scoped.
"""

from django.contrib import admin

from recipevault.models import Account, Ingredient, Recipe


# ── Account ──


@admin.register(Account)
class AccountAdmin(admin.ModelAdmin):
    """Admin for accounts. The password hash is never editable here."""

    list_display = ("id", "name", "email")
    search_fields = ("name", "email")
    readonly_fields = ("password",)


# ── Recipe ──


class IngredientInline(admin.TabularInline):
    """Inline for recipe ingredients."""

    model = Ingredient
    extra = 1
    fields = ("name", "quantity", "unit", "notes")


@admin.register(Recipe)
class RecipeAdmin(admin.ModelAdmin):
    """Admin for recipes."""

    list_display = ("title", "user", "category", "servings", "created_at")
    list_filter = ("category",)
    search_fields = ("title", "user__email")
    raw_id_fields = ("user",)
    inlines = [IngredientInline]
    readonly_fields = ("created_at",)


# ── Ingredient ──


@admin.register(Ingredient)
class IngredientAdmin(admin.ModelAdmin):
    """Admin for individual ingredients."""

    list_display = ("name", "quantity", "unit", "recipe")
    search_fields = ("name", "recipe__title")
    raw_id_fields = ("recipe",)
