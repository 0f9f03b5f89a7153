"""
Recipe and Ingredient models.

Recipe = owned by exactly one Account.
Ingredient = belongs to exactly one Recipe; its owner is the recipe's owner.
"""

from django.core.exceptions import ValidationError
from django.db import models
from django.utils.translation import gettext_lazy as _

from recipevault.models.account import Account


class Recipe(models.Model):
    """
    A user's recipe.

    ``user`` is set once at creation from the authenticated caller and
    never changes afterwards.
    """

    user = models.ForeignKey(
        Account,
        on_delete=models.CASCADE,
        related_name="recipes",
        verbose_name=_("Owner"),
    )

    title = models.CharField(
        max_length=255,
        verbose_name=_("Title"),
    )
    description = models.TextField(
        null=True,
        blank=True,
        verbose_name=_("Description"),
    )
    category = models.CharField(
        max_length=100,
        null=True,
        blank=True,
        verbose_name=_("Category"),
        help_text=_("Free-form, e.g. Dessert, Soup"),
    )

    # Times in minutes
    prep_time = models.PositiveIntegerField(
        null=True,
        blank=True,
        verbose_name=_("Prep time (minutes)"),
    )
    cook_time = models.PositiveIntegerField(
        null=True,
        blank=True,
        verbose_name=_("Cook time (minutes)"),
    )
    servings = models.PositiveIntegerField(
        null=True,
        blank=True,
        default=1,
        verbose_name=_("Servings"),
    )

    created_at = models.DateTimeField(auto_now_add=True, verbose_name=_("created at"))

    class Meta:
        db_table = "recipevault_recipe"
        verbose_name = _("Recipe")
        verbose_name_plural = _("Recipes")
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["user", "-created_at"], name="rv_recipe_owner_created_idx"),
        ]

    def clean(self):
        super().clean()
        if not (self.title or "").strip():
            raise ValidationError({"title": _("Title is required.")})

    def __str__(self) -> str:
        return self.title


class Ingredient(models.Model):
    """
    An ingredient line of a recipe.

    Carries no owner of its own: ownership is always derived through
    ``recipe.user``. Deleting the recipe deletes its ingredients.
    """

    # The database deletes ingredients with their recipe (ON DELETE CASCADE,
    # migration 0002); the ORM must not collect them itself.
    recipe = models.ForeignKey(
        Recipe,
        on_delete=models.DO_NOTHING,
        related_name="ingredients",
        verbose_name=_("Recipe"),
    )

    name = models.CharField(
        max_length=255,
        verbose_name=_("Name"),
    )
    # Free text: "2", "1/2", "a pinch"
    quantity = models.CharField(
        max_length=50,
        null=True,
        blank=True,
        verbose_name=_("Quantity"),
    )
    unit = models.CharField(
        max_length=50,
        null=True,
        blank=True,
        verbose_name=_("Unit"),
        help_text=_("g, kg, ml, cup, tbsp..."),
    )
    notes = models.TextField(
        null=True,
        blank=True,
        verbose_name=_("Notes"),
    )

    class Meta:
        db_table = "recipevault_ingredient"
        verbose_name = _("Ingredient")
        verbose_name_plural = _("Ingredients")
        ordering = ["id"]
        indexes = [
            models.Index(fields=["recipe", "id"], name="rv_ingredient_recipe_idx"),
        ]

    def clean(self):
        super().clean()
        if not (self.name or "").strip():
            raise ValidationError({"name": _("Ingredient name is required.")})

    def __str__(self) -> str:
        parts = [p for p in (self.quantity, self.unit) if p]
        if parts:
            return f"{self.name} ({' '.join(parts)})"
        return self.name
