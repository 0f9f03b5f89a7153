"""
Ownership-scoped access to recipes and ingredients.

Every operation takes the caller's Identity explicitly. A recipe is
reachable only by its owner; an ingredient only by the owner of its
recipe. Whatever the caller cannot prove ownership of does not exist
for them: the error is NotFoundError, never "forbidden".

Mutations never rely on an earlier check: updates and deletes are
conditional statements (``... WHERE id = ? AND <owned by caller>``), so
the check and the action cannot be separated by a concurrent change.

Usage:
    vault = build_vault()

    recipe_id = vault.create_recipe(identity, {"title": "Soup"})
    ingredient_id = vault.create_ingredient(identity, recipe_id, {"name": "Salt"})

    detail = vault.get_recipe(identity, recipe_id)
    detail.recipe.servings     # 1
    len(detail.ingredients)    # 1
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from recipevault.exceptions import NotFoundError, ValidationError, translate_store_errors
from recipevault.models import Ingredient, Recipe
from recipevault.protocols.store import (
    IngredientFields,
    IngredientStore,
    RecipeFields,
    RecipeStore,
)
from recipevault.results import Identity, RecipeDetail

logger = logging.getLogger(__name__)

RECIPE_NOT_FOUND = "Recipe not found."
INGREDIENT_NOT_FOUND = "Ingredient not found."

DEFAULT_SERVINGS = 1


# ══════════════════════════════════════════════════════════════
# FIELD CLEANING
# ══════════════════════════════════════════════════════════════


def _required_text(fields: Mapping[str, Any], name: str, message: str) -> str:
    value = fields.get(name)
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(message)
    return value.strip()


def _optional(fields: Mapping[str, Any], name: str):
    """Absent, None and blank strings all become None."""
    value = fields.get(name)
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return value


def clean_recipe_fields(fields: Mapping[str, Any], *, apply_defaults: bool) -> RecipeFields:
    """
    Build the full column set for a recipe write.

    Any owner field in ``fields`` is ignored: the owner always comes
    from the verified identity.
    """
    servings = _optional(fields, "servings")
    # On create, 0 servings means "not given"; an update writes it as is
    if not servings and apply_defaults:
        servings = DEFAULT_SERVINGS

    return RecipeFields(
        title=_required_text(fields, "title", "Title is required."),
        description=_optional(fields, "description"),
        category=_optional(fields, "category"),
        prep_time=_optional(fields, "prep_time"),
        cook_time=_optional(fields, "cook_time"),
        servings=servings,
    )


def clean_ingredient_fields(fields: Mapping[str, Any]) -> IngredientFields:
    """Build the full column set for an ingredient write."""
    return IngredientFields(
        name=_required_text(fields, "name", "Ingredient name is required."),
        quantity=_optional(fields, "quantity"),
        unit=_optional(fields, "unit"),
        notes=_optional(fields, "notes"),
    )


# ══════════════════════════════════════════════════════════════
# ACCESS LAYER
# ══════════════════════════════════════════════════════════════


class RecipeVault:
    """
    The ownership-scoped access layer.

    Built per request around injected stores; holds no state of its own
    between calls.
    """

    def __init__(self, recipes: RecipeStore, ingredients: IngredientStore):
        self.recipes = recipes
        self.ingredients = ingredients

    # ── Ownership ──

    def verify_recipe_ownership(self, recipe_id: int, user_id: int) -> bool:
        """
        The single ownership predicate for anything addressed by recipe id.

        Evaluated fresh on every call; never cache the answer.
        """
        return self.recipes.is_owned(recipe_id, user_id)

    # ── Recipes ──

    def list_recipes(self, identity: Identity) -> list[Recipe]:
        """Caller's recipes, newest first."""
        with translate_store_errors("list_recipes", user_id=identity.user_id):
            return self.recipes.list_owned(identity.user_id)

    def get_recipe(self, identity: Identity, recipe_id: int) -> RecipeDetail:
        """
        One recipe with its ingredients (ascending id).

        Nonexistent and foreign ids fail the same way.
        """
        with translate_store_errors(
            "get_recipe", user_id=identity.user_id, recipe_id=recipe_id
        ):
            recipe = self.recipes.get_owned(recipe_id, identity.user_id)
            if recipe is None:
                raise NotFoundError(
                    RECIPE_NOT_FOUND, recipe_id=recipe_id, user_id=identity.user_id
                )
            ingredients = self.ingredients.list_for_recipe(recipe.pk)

        return RecipeDetail(recipe=recipe, ingredients=ingredients)

    def create_recipe(self, identity: Identity, fields: Mapping[str, Any]) -> int:
        """Create a recipe owned by the caller and return its id."""
        cleaned = clean_recipe_fields(fields, apply_defaults=True)

        with translate_store_errors("create_recipe", user_id=identity.user_id):
            recipe_id = self.recipes.insert(identity.user_id, cleaned)

        logger.info(f"Recipe {recipe_id} created by account {identity.user_id}")
        return recipe_id

    def update_recipe(
        self, identity: Identity, recipe_id: int, fields: Mapping[str, Any]
    ) -> None:
        """
        Full replace of a recipe's columns.

        Fields left out of ``fields`` are written as null.
        """
        cleaned = clean_recipe_fields(fields, apply_defaults=False)

        with translate_store_errors(
            "update_recipe", user_id=identity.user_id, recipe_id=recipe_id
        ):
            updated = self.recipes.update_owned(recipe_id, identity.user_id, cleaned)

        if not updated:
            raise NotFoundError(
                RECIPE_NOT_FOUND, recipe_id=recipe_id, user_id=identity.user_id
            )

    def delete_recipe(self, identity: Identity, recipe_id: int) -> None:
        """Delete a recipe; its ingredients go with it."""
        with translate_store_errors(
            "delete_recipe", user_id=identity.user_id, recipe_id=recipe_id
        ):
            deleted = self.recipes.delete_owned(recipe_id, identity.user_id)

        if not deleted:
            raise NotFoundError(
                RECIPE_NOT_FOUND, recipe_id=recipe_id, user_id=identity.user_id
            )

        logger.info(f"Recipe {recipe_id} deleted by account {identity.user_id}")

    # ── Ingredients ──

    def list_ingredients(self, identity: Identity, recipe_id: int) -> list[Ingredient]:
        """Ingredients of one of the caller's recipes, ascending id."""
        with translate_store_errors(
            "list_ingredients", user_id=identity.user_id, recipe_id=recipe_id
        ):
            if not self.verify_recipe_ownership(recipe_id, identity.user_id):
                raise NotFoundError(
                    RECIPE_NOT_FOUND, recipe_id=recipe_id, user_id=identity.user_id
                )
            return self.ingredients.list_for_recipe(recipe_id)

    def get_ingredient(self, identity: Identity, ingredient_id: int) -> Ingredient:
        with translate_store_errors(
            "get_ingredient", user_id=identity.user_id, ingredient_id=ingredient_id
        ):
            ingredient = self.ingredients.get_owned(ingredient_id, identity.user_id)

        if ingredient is None:
            raise NotFoundError(
                INGREDIENT_NOT_FOUND,
                ingredient_id=ingredient_id,
                user_id=identity.user_id,
            )
        return ingredient

    def create_ingredient(
        self, identity: Identity, recipe_id: int, fields: Mapping[str, Any]
    ) -> int:
        """Add an ingredient to one of the caller's recipes and return its id."""
        cleaned = clean_ingredient_fields(fields)

        with translate_store_errors(
            "create_ingredient", user_id=identity.user_id, recipe_id=recipe_id
        ):
            if not self.verify_recipe_ownership(recipe_id, identity.user_id):
                raise NotFoundError(
                    RECIPE_NOT_FOUND, recipe_id=recipe_id, user_id=identity.user_id
                )
            ingredient_id = self.ingredients.insert(recipe_id, cleaned)

        logger.info(
            f"Ingredient {ingredient_id} added to recipe {recipe_id} "
            f"by account {identity.user_id}"
        )
        return ingredient_id

    def update_ingredient(
        self, identity: Identity, ingredient_id: int, fields: Mapping[str, Any]
    ) -> None:
        """Full replace of an ingredient's columns, gated on the parent's owner."""
        cleaned = clean_ingredient_fields(fields)

        with translate_store_errors(
            "update_ingredient", user_id=identity.user_id, ingredient_id=ingredient_id
        ):
            updated = self.ingredients.update_owned(
                ingredient_id, identity.user_id, cleaned
            )

        if not updated:
            raise NotFoundError(
                INGREDIENT_NOT_FOUND,
                ingredient_id=ingredient_id,
                user_id=identity.user_id,
            )

    def delete_ingredient(self, identity: Identity, ingredient_id: int) -> None:
        with translate_store_errors(
            "delete_ingredient", user_id=identity.user_id, ingredient_id=ingredient_id
        ):
            deleted = self.ingredients.delete_owned(ingredient_id, identity.user_id)

        if not deleted:
            raise NotFoundError(
                INGREDIENT_NOT_FOUND,
                ingredient_id=ingredient_id,
                user_id=identity.user_id,
            )
