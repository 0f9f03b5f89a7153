"""
Store Protocols.

Defines the persistence interface the services talk to. Every store is
constructed with a database handle (``using``) and never reaches for a
global connection on its own.

Ownership vocabulary:
    owned        → row whose recipe.user_id equals the caller
    *_owned()    → the ownership check and the action in one statement
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from recipevault.models import Account, Ingredient, Recipe


# ══════════════════════════════════════════════════════════════
# DATA TYPES
# ══════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class RecipeFields:
    """Cleaned recipe columns. Every field is written, absent ones as None."""

    title: str
    description: str | None = None
    category: str | None = None
    prep_time: int | None = None
    cook_time: int | None = None
    servings: int | None = None

    def as_dict(self) -> dict:
        return {
            "title": self.title,
            "description": self.description,
            "category": self.category,
            "prep_time": self.prep_time,
            "cook_time": self.cook_time,
            "servings": self.servings,
        }


@dataclass(frozen=True)
class IngredientFields:
    """Cleaned ingredient columns. Every field is written, absent ones as None."""

    name: str
    quantity: str | None = None
    unit: str | None = None
    notes: str | None = None

    def as_dict(self) -> dict:
        return {
            "name": self.name,
            "quantity": self.quantity,
            "unit": self.unit,
            "notes": self.notes,
        }


# ══════════════════════════════════════════════════════════════
# PROTOCOLS
# ══════════════════════════════════════════════════════════════


@runtime_checkable
class AccountStore(Protocol):
    """
    Credential store.

    Implementations:
        - AccountORMStore: Django ORM (recipevault_user table)
    """

    def email_exists(self, email: str) -> bool:
        ...

    def get_by_email(self, email: str) -> Account | None:
        ...

    def insert(self, name: str, email: str, password_hash: str) -> int:
        """
        Persist a new account and return its id.

        Must raise ConflictError when the email is already taken, even if
        the caller checked beforehand (concurrent registrations).
        """
        ...


@runtime_checkable
class RecipeStore(Protocol):
    """
    Recipe persistence, always scoped to an owner.

    Implementations:
        - RecipeORMStore: Django ORM (recipevault_recipe table)
    """

    def is_owned(self, recipe_id: int, user_id: int) -> bool:
        """True when the recipe exists and belongs to user_id."""
        ...

    def list_owned(self, user_id: int) -> list[Recipe]:
        """Owned recipes, newest first."""
        ...

    def get_owned(self, recipe_id: int, user_id: int) -> Recipe | None:
        ...

    def insert(self, user_id: int, fields: RecipeFields) -> int:
        ...

    def update_owned(self, recipe_id: int, user_id: int, fields: RecipeFields) -> int:
        """Conditional full replace. Returns the number of rows written (0 or 1)."""
        ...

    def delete_owned(self, recipe_id: int, user_id: int) -> int:
        """Conditional delete, cascading to ingredients. Returns recipes deleted."""
        ...


@runtime_checkable
class IngredientStore(Protocol):
    """
    Ingredient persistence.

    Rows carry no owner; ``*_owned`` methods join through the parent recipe.

    Implementations:
        - IngredientORMStore: Django ORM (recipevault_ingredient table)
    """

    def list_for_recipe(self, recipe_id: int) -> list[Ingredient]:
        """Ingredients of a recipe, ascending id. Caller checks ownership first."""
        ...

    def get_owned(self, ingredient_id: int, user_id: int) -> Ingredient | None:
        ...

    def insert(self, recipe_id: int, fields: IngredientFields) -> int:
        ...

    def update_owned(
        self, ingredient_id: int, user_id: int, fields: IngredientFields
    ) -> int:
        ...

    def delete_owned(self, ingredient_id: int, user_id: int) -> int:
        ...
