"""
Django ORM Stores.

Implements AccountStore, RecipeStore and IngredientStore on top of the
Django ORM. Each store is bound to a database alias (``using``) at
construction time.

Ownership mapping:
    owned_recipes(user_id)   →  WHERE recipe.user_id = ?
    ingredient *_owned()     →  WHERE ingredient.recipe_id IN (owned_recipes)
    update_owned()           →  single UPDATE ... WHERE <pk> AND <owned>
    delete_owned()           →  single DELETE ... WHERE <pk> AND <owned>

Every ownership-scoped query is derived from ``owned_recipes`` so the
rule lives in exactly one place.
"""

import logging

from django.db import IntegrityError, transaction
from django.db.models import QuerySet

from recipevault.exceptions import ConflictError
from recipevault.models import Account, Ingredient, Recipe
from recipevault.protocols.store import IngredientFields, RecipeFields

logger = logging.getLogger(__name__)


def owned_recipes(user_id: int, using: str = "default") -> QuerySet:
    """Recipes belonging to user_id. The one definition of recipe ownership."""
    return Recipe.objects.using(using).filter(user_id=user_id)


class AccountORMStore:
    """Credential store backed by the recipevault_user table."""

    def __init__(self, using: str = "default"):
        self.using = using

    def _accounts(self) -> QuerySet:
        return Account.objects.using(self.using)

    def email_exists(self, email: str) -> bool:
        return self._accounts().filter(email=email).exists()

    def get_by_email(self, email: str) -> Account | None:
        return self._accounts().filter(email=email).first()

    def insert(self, name: str, email: str, password_hash: str) -> int:
        # Own savepoint: a unique violation must not break an outer transaction
        try:
            with transaction.atomic(using=self.using):
                account = self._accounts().create(
                    name=name,
                    email=email,
                    password=password_hash,
                )
        except IntegrityError:
            logger.info("Account insert lost a race on a duplicate email")
            raise ConflictError("An account with that email already exists.")
        return account.pk


class RecipeORMStore:
    """
    Recipe store backed by the recipevault_recipe table.

    Usage:
        from recipevault.conf import get_recipe_store

        store = get_recipe_store()
        if store.is_owned(recipe_id, identity.user_id):
            ...
    """

    def __init__(self, using: str = "default"):
        self.using = using

    def _owned(self, user_id: int) -> QuerySet:
        return owned_recipes(user_id, using=self.using)

    def is_owned(self, recipe_id: int, user_id: int) -> bool:
        return self._owned(user_id).filter(pk=recipe_id).exists()

    def list_owned(self, user_id: int) -> list[Recipe]:
        return list(self._owned(user_id).order_by("-created_at", "-id"))

    def get_owned(self, recipe_id: int, user_id: int) -> Recipe | None:
        return self._owned(user_id).filter(pk=recipe_id).first()

    def insert(self, user_id: int, fields: RecipeFields) -> int:
        recipe = Recipe.objects.using(self.using).create(
            user_id=user_id,
            **fields.as_dict(),
        )
        return recipe.pk

    def update_owned(self, recipe_id: int, user_id: int, fields: RecipeFields) -> int:
        return self._owned(user_id).filter(pk=recipe_id).update(**fields.as_dict())

    def delete_owned(self, recipe_id: int, user_id: int) -> int:
        # Ingredients go with it through ON DELETE CASCADE, in the same statement
        _, per_model = self._owned(user_id).filter(pk=recipe_id).delete()
        return per_model.get(Recipe._meta.label, 0)


class IngredientORMStore:
    """Ingredient store backed by the recipevault_ingredient table."""

    def __init__(self, using: str = "default"):
        self.using = using

    def _ingredients(self) -> QuerySet:
        return Ingredient.objects.using(self.using)

    def _owned(self, user_id: int) -> QuerySet:
        return self._ingredients().filter(
            recipe__in=owned_recipes(user_id, using=self.using)
        )

    def list_for_recipe(self, recipe_id: int) -> list[Ingredient]:
        return list(self._ingredients().filter(recipe_id=recipe_id).order_by("id"))

    def get_owned(self, ingredient_id: int, user_id: int) -> Ingredient | None:
        return self._owned(user_id).filter(pk=ingredient_id).first()

    def insert(self, recipe_id: int, fields: IngredientFields) -> int:
        ingredient = self._ingredients().create(
            recipe_id=recipe_id,
            **fields.as_dict(),
        )
        return ingredient.pk

    def update_owned(
        self, ingredient_id: int, user_id: int, fields: IngredientFields
    ) -> int:
        return self._owned(user_id).filter(pk=ingredient_id).update(**fields.as_dict())

    def delete_owned(self, ingredient_id: int, user_id: int) -> int:
        _, per_model = self._owned(user_id).filter(pk=ingredient_id).delete()
        return per_model.get(Ingredient._meta.label, 0)
