"""
Tests for the ownership-scoped access layer (recipevault.services.access).

Verifies cross-tenant isolation, transitive ingredient ownership,
cascade on delete, full-replace updates and the store-failure boundary.
"""

from unittest.mock import MagicMock

import pytest
from django.db import OperationalError

from recipevault.exceptions import InternalError, NotFoundError, ValidationError
from recipevault.models import Account, Ingredient, Recipe
from recipevault.results import Identity
from recipevault.services import RecipeVault, build_vault


# ═══════════════════════════════════════════════════════════════════
# Fixtures
# ═══════════════════════════════════════════════════════════════════


@pytest.fixture
def vault(db):
    return build_vault()


@pytest.fixture
def owner(db):
    account = Account.objects.create(name="Ana", email="ana@example.com", password="x")
    return Identity(user_id=account.pk, email=account.email)


@pytest.fixture
def intruder(db):
    account = Account.objects.create(name="Bruno", email="bruno@example.com", password="x")
    return Identity(user_id=account.pk, email=account.email)


@pytest.fixture
def recipe_id(vault, owner):
    return vault.create_recipe(
        owner,
        {
            "title": "Pancakes",
            "description": "Fluffy",
            "category": "Breakfast",
            "prep_time": 10,
            "cook_time": 15,
            "servings": 4,
        },
    )


@pytest.fixture
def ingredient_ids(vault, owner, recipe_id):
    return [
        vault.create_ingredient(owner, recipe_id, {"name": "Flour", "quantity": "200", "unit": "g"}),
        vault.create_ingredient(owner, recipe_id, {"name": "Milk", "quantity": "300", "unit": "ml"}),
        vault.create_ingredient(owner, recipe_id, {"name": "Egg", "quantity": "2"}),
    ]


# ═══════════════════════════════════════════════════════════════════
# Recipes
# ═══════════════════════════════════════════════════════════════════


class TestCreateRecipe:
    """Tests for RecipeVault.create_recipe."""

    def test_create_then_get_matches_fields(self, vault, owner):
        """A created recipe is immediately readable with defaults applied."""
        recipe_id = vault.create_recipe(owner, {"title": "Soup"})

        detail = vault.get_recipe(owner, recipe_id)

        assert detail.recipe.title == "Soup"
        assert detail.recipe.servings == 1
        assert detail.recipe.description is None
        assert detail.recipe.prep_time is None
        assert detail.ingredients == []

    def test_owner_comes_from_identity(self, vault, owner, intruder):
        """A client-supplied owner field is ignored."""
        recipe_id = vault.create_recipe(
            owner, {"title": "Soup", "user_id": intruder.user_id, "user": intruder.user_id}
        )

        assert Recipe.objects.get(pk=recipe_id).user_id == owner.user_id

    def test_explicit_servings_kept(self, vault, owner):
        recipe_id = vault.create_recipe(owner, {"title": "Stew", "servings": 6})

        assert vault.get_recipe(owner, recipe_id).recipe.servings == 6

    def test_zero_servings_defaults_to_one(self, vault, owner):
        recipe_id = vault.create_recipe(owner, {"title": "Stew", "servings": 0})

        assert vault.get_recipe(owner, recipe_id).recipe.servings == 1

    def test_update_keeps_zero_servings(self, vault, owner):
        recipe_id = vault.create_recipe(owner, {"title": "Stew"})

        vault.update_recipe(owner, recipe_id, {"title": "Stew", "servings": 0})

        assert Recipe.objects.get(pk=recipe_id).servings == 0

    @pytest.mark.parametrize("fields", [{}, {"title": ""}, {"title": "   "}, {"title": None}])
    def test_title_required(self, vault, owner, fields):
        with pytest.raises(ValidationError) as exc_info:
            vault.create_recipe(owner, fields)

        assert exc_info.value.message == "Title is required."
        assert Recipe.objects.count() == 0

    def test_blank_optional_text_stored_as_null(self, vault, owner):
        recipe_id = vault.create_recipe(owner, {"title": "Tea", "description": "  ", "category": ""})

        recipe = Recipe.objects.get(pk=recipe_id)
        assert recipe.description is None
        assert recipe.category is None


class TestListRecipes:
    """Tests for RecipeVault.list_recipes."""

    def test_newest_first(self, vault, owner):
        first = vault.create_recipe(owner, {"title": "First"})
        second = vault.create_recipe(owner, {"title": "Second"})
        third = vault.create_recipe(owner, {"title": "Third"})

        ids = [r.pk for r in vault.list_recipes(owner)]

        assert ids == [third, second, first]

    def test_only_own_recipes(self, vault, owner, intruder, recipe_id):
        vault.create_recipe(intruder, {"title": "Not yours"})

        assert [r.pk for r in vault.list_recipes(owner)] == [recipe_id]
        assert [r.title for r in vault.list_recipes(intruder)] == ["Not yours"]

    def test_empty_for_new_account(self, vault, intruder, recipe_id):
        assert vault.list_recipes(intruder) == []


class TestGetRecipe:
    """Tests for RecipeVault.get_recipe."""

    def test_ingredients_attached_in_id_order(self, vault, owner, recipe_id, ingredient_ids):
        detail = vault.get_recipe(owner, recipe_id)

        assert [i.pk for i in detail.ingredients] == sorted(ingredient_ids)
        assert [i.name for i in detail.ingredients] == ["Flour", "Milk", "Egg"]

    def test_foreign_and_missing_are_indistinguishable(self, vault, intruder, recipe_id):
        """Another user's id and a nonexistent id fail the same way."""
        with pytest.raises(NotFoundError) as foreign:
            vault.get_recipe(intruder, recipe_id)
        with pytest.raises(NotFoundError) as missing:
            vault.get_recipe(intruder, recipe_id + 1000)

        assert foreign.value.as_dict() == missing.value.as_dict() == {"error": "Recipe not found."}


class TestUpdateRecipe:
    """Tests for RecipeVault.update_recipe (full replace)."""

    def test_supplied_fields_overwrite(self, vault, owner, recipe_id):
        vault.update_recipe(
            owner,
            recipe_id,
            {
                "title": "Crepes",
                "description": "Thin",
                "category": "Dessert",
                "prep_time": 5,
                "cook_time": 20,
                "servings": 2,
            },
        )

        recipe = Recipe.objects.get(pk=recipe_id)
        assert recipe.title == "Crepes"
        assert recipe.description == "Thin"
        assert recipe.servings == 2

    def test_missing_fields_become_null(self, vault, owner, recipe_id):
        """No partial-merge: fields not supplied are cleared."""
        vault.update_recipe(owner, recipe_id, {"title": "Plain"})

        recipe = Recipe.objects.get(pk=recipe_id)
        assert recipe.title == "Plain"
        assert recipe.description is None
        assert recipe.category is None
        assert recipe.prep_time is None
        assert recipe.cook_time is None
        assert recipe.servings is None

    def test_owner_unchanged(self, vault, owner, intruder, recipe_id):
        vault.update_recipe(owner, recipe_id, {"title": "Plain", "user_id": intruder.user_id})

        assert Recipe.objects.get(pk=recipe_id).user_id == owner.user_id

    def test_foreign_recipe_not_found(self, vault, intruder, recipe_id):
        with pytest.raises(NotFoundError):
            vault.update_recipe(intruder, recipe_id, {"title": "Hijacked"})

        assert Recipe.objects.get(pk=recipe_id).title == "Pancakes"

    def test_missing_recipe_not_found(self, vault, owner):
        with pytest.raises(NotFoundError):
            vault.update_recipe(owner, 999, {"title": "Ghost"})

    def test_title_required(self, vault, owner, recipe_id):
        with pytest.raises(ValidationError):
            vault.update_recipe(owner, recipe_id, {"description": "no title"})

        assert Recipe.objects.get(pk=recipe_id).title == "Pancakes"


class TestDeleteRecipe:
    """Tests for RecipeVault.delete_recipe."""

    def test_delete_own_recipe(self, vault, owner, recipe_id):
        vault.delete_recipe(owner, recipe_id)

        assert not Recipe.objects.filter(pk=recipe_id).exists()
        with pytest.raises(NotFoundError):
            vault.get_recipe(owner, recipe_id)

    def test_cascade_makes_ingredients_unreachable(self, vault, owner, recipe_id, ingredient_ids):
        vault.delete_recipe(owner, recipe_id)

        for ingredient_id in ingredient_ids:
            with pytest.raises(NotFoundError):
                vault.get_ingredient(owner, ingredient_id)
        assert not Ingredient.objects.filter(pk__in=ingredient_ids).exists()

    def test_cascade_leaves_other_recipes_alone(self, vault, owner, recipe_id, ingredient_ids):
        other = vault.create_recipe(owner, {"title": "Other"})
        kept = vault.create_ingredient(owner, other, {"name": "Sugar"})

        vault.delete_recipe(owner, recipe_id)

        assert vault.get_ingredient(owner, kept).name == "Sugar"

    def test_foreign_recipe_not_found(self, vault, intruder, recipe_id, ingredient_ids):
        with pytest.raises(NotFoundError):
            vault.delete_recipe(intruder, recipe_id)

        assert Recipe.objects.filter(pk=recipe_id).exists()
        assert Ingredient.objects.filter(recipe_id=recipe_id).count() == 3

    def test_second_delete_not_found(self, vault, owner, recipe_id):
        vault.delete_recipe(owner, recipe_id)

        with pytest.raises(NotFoundError):
            vault.delete_recipe(owner, recipe_id)


# ═══════════════════════════════════════════════════════════════════
# Ingredients
# ═══════════════════════════════════════════════════════════════════


class TestVerifyRecipeOwnership:
    """Tests for the shared ownership predicate."""

    def test_owner(self, vault, owner, recipe_id):
        assert vault.verify_recipe_ownership(recipe_id, owner.user_id) is True

    def test_other_user(self, vault, intruder, recipe_id):
        assert vault.verify_recipe_ownership(recipe_id, intruder.user_id) is False

    def test_missing_recipe(self, vault, owner):
        assert vault.verify_recipe_ownership(12345, owner.user_id) is False

    def test_reevaluated_every_call(self, vault, owner, recipe_id):
        """No cached answer survives a delete."""
        assert vault.verify_recipe_ownership(recipe_id, owner.user_id) is True

        Recipe.objects.filter(pk=recipe_id).delete()

        assert vault.verify_recipe_ownership(recipe_id, owner.user_id) is False


class TestListIngredients:
    """Tests for RecipeVault.list_ingredients."""

    def test_ascending_id(self, vault, owner, recipe_id, ingredient_ids):
        assert [i.pk for i in vault.list_ingredients(owner, recipe_id)] == sorted(ingredient_ids)

    def test_foreign_recipe_not_found(self, vault, intruder, recipe_id, ingredient_ids):
        with pytest.raises(NotFoundError) as exc_info:
            vault.list_ingredients(intruder, recipe_id)

        assert exc_info.value.message == "Recipe not found."

    def test_goes_through_ownership_predicate(self, owner):
        """Ingredient listing asks the recipe store, never the ingredient store, for ownership."""
        recipes = MagicMock()
        recipes.is_owned.return_value = False
        ingredients = MagicMock()
        vault = RecipeVault(recipes=recipes, ingredients=ingredients)

        with pytest.raises(NotFoundError):
            vault.list_ingredients(owner, 7)

        recipes.is_owned.assert_called_once_with(7, owner.user_id)
        ingredients.list_for_recipe.assert_not_called()


class TestCreateIngredient:
    """Tests for RecipeVault.create_ingredient."""

    def test_optional_fields_default_to_null(self, vault, owner, recipe_id):
        ingredient_id = vault.create_ingredient(owner, recipe_id, {"name": "Salt"})

        ingredient = vault.get_ingredient(owner, ingredient_id)
        assert ingredient.recipe_id == recipe_id
        assert ingredient.quantity is None
        assert ingredient.unit is None
        assert ingredient.notes is None

    def test_visible_in_recipe_detail(self, vault, owner, recipe_id):
        vault.create_ingredient(owner, recipe_id, {"name": "Salt"})

        assert len(vault.get_recipe(owner, recipe_id).ingredients) == 1

    def test_foreign_recipe_not_found(self, vault, intruder, recipe_id):
        with pytest.raises(NotFoundError):
            vault.create_ingredient(intruder, recipe_id, {"name": "Poison"})

        assert Ingredient.objects.count() == 0

    def test_name_required(self, vault, owner, recipe_id):
        with pytest.raises(ValidationError) as exc_info:
            vault.create_ingredient(owner, recipe_id, {"quantity": "1"})

        assert exc_info.value.message == "Ingredient name is required."

    def test_validation_before_ownership(self, vault, intruder, recipe_id):
        """A missing name is reported even on someone else's recipe (reveals nothing)."""
        with pytest.raises(ValidationError):
            vault.create_ingredient(intruder, recipe_id, {"name": ""})


class TestIngredientIsolation:
    """Every by-id ingredient operation joins through the parent recipe."""

    def test_get_foreign_not_found(self, vault, intruder, ingredient_ids):
        for ingredient_id in ingredient_ids:
            with pytest.raises(NotFoundError) as exc_info:
                vault.get_ingredient(intruder, ingredient_id)
            assert exc_info.value.message == "Ingredient not found."

    def test_update_foreign_not_found(self, vault, intruder, ingredient_ids):
        with pytest.raises(NotFoundError):
            vault.update_ingredient(intruder, ingredient_ids[0], {"name": "Changed"})

        assert Ingredient.objects.get(pk=ingredient_ids[0]).name == "Flour"

    def test_delete_foreign_not_found(self, vault, intruder, ingredient_ids):
        with pytest.raises(NotFoundError):
            vault.delete_ingredient(intruder, ingredient_ids[0])

        assert Ingredient.objects.filter(pk=ingredient_ids[0]).exists()

    def test_missing_id_same_error(self, vault, owner, intruder, ingredient_ids):
        with pytest.raises(NotFoundError) as foreign:
            vault.get_ingredient(intruder, ingredient_ids[0])
        with pytest.raises(NotFoundError) as missing:
            vault.get_ingredient(owner, 99999)

        assert foreign.value.as_dict() == missing.value.as_dict()


class TestUpdateIngredient:
    """Tests for RecipeVault.update_ingredient (full replace)."""

    def test_full_replace(self, vault, owner, ingredient_ids):
        vault.update_ingredient(owner, ingredient_ids[0], {"name": "Whole wheat flour"})

        ingredient = Ingredient.objects.get(pk=ingredient_ids[0])
        assert ingredient.name == "Whole wheat flour"
        assert ingredient.quantity is None
        assert ingredient.unit is None

    def test_recipe_unchanged(self, vault, owner, recipe_id, ingredient_ids):
        other = vault.create_recipe(owner, {"title": "Other"})

        vault.update_ingredient(owner, ingredient_ids[0], {"name": "Flour", "recipe_id": other})

        assert Ingredient.objects.get(pk=ingredient_ids[0]).recipe_id == recipe_id

    def test_name_required(self, vault, owner, ingredient_ids):
        with pytest.raises(ValidationError):
            vault.update_ingredient(owner, ingredient_ids[0], {"name": "  "})


class TestDeleteIngredient:
    """Tests for RecipeVault.delete_ingredient."""

    def test_delete_own(self, vault, owner, recipe_id, ingredient_ids):
        vault.delete_ingredient(owner, ingredient_ids[1])

        remaining = [i.pk for i in vault.list_ingredients(owner, recipe_id)]
        assert remaining == [ingredient_ids[0], ingredient_ids[2]]

    def test_recipe_survives(self, vault, owner, recipe_id, ingredient_ids):
        for ingredient_id in ingredient_ids:
            vault.delete_ingredient(owner, ingredient_id)

        assert vault.get_recipe(owner, recipe_id).ingredients == []


# ═══════════════════════════════════════════════════════════════════
# Store failures
# ═══════════════════════════════════════════════════════════════════


class TestStoreFailures:
    """Raw store errors never escape the access layer."""

    def _broken_vault(self):
        recipes = MagicMock()
        ingredients = MagicMock()
        for store in (recipes, ingredients):
            for name in ("is_owned", "list_owned", "get_owned", "insert",
                         "update_owned", "delete_owned", "list_for_recipe"):
                getattr(store, name).side_effect = OperationalError("connection lost")
        return RecipeVault(recipes=recipes, ingredients=ingredients)

    def test_list_recipes(self, owner):
        with pytest.raises(InternalError) as exc_info:
            self._broken_vault().list_recipes(owner)

        assert exc_info.value.as_dict() == {"error": "Internal server error"}
        assert isinstance(exc_info.value.__cause__, OperationalError)

    def test_create_recipe(self, owner):
        with pytest.raises(InternalError):
            self._broken_vault().create_recipe(owner, {"title": "Soup"})

    def test_delete_ingredient(self, owner):
        with pytest.raises(InternalError):
            self._broken_vault().delete_ingredient(owner, 1)

    def test_validation_runs_before_store(self, owner):
        """Validation is local: a broken store is never reached."""
        with pytest.raises(ValidationError):
            self._broken_vault().create_ingredient(owner, 1, {})
