"""
RecipeVault Result Types.

Value objects handed between the session layer, the services and the API.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from recipevault.models import Ingredient, Recipe


@dataclass(frozen=True)
class Identity:
    """
    Verified caller, decoded from a session token.

    Doubles as DRF's ``request.user`` so permission classes work,
    but services only ever receive it as an explicit argument.
    """

    user_id: int
    email: str

    is_authenticated = True
    is_anonymous = False

    @property
    def pk(self) -> int:
        return self.user_id


@dataclass(frozen=True)
class PublicUser:
    """Public-safe projection of an account (never the hash)."""

    id: int
    name: str
    email: str

    def as_dict(self) -> dict:
        return {"id": self.id, "name": self.name, "email": self.email}


@dataclass(frozen=True)
class LoginResult:
    """Outcome of a successful login."""

    token: str
    user: PublicUser


@dataclass
class RecipeDetail:
    """A recipe together with its ingredients, ordered by ascending id."""

    recipe: Recipe
    ingredients: list[Ingredient] = field(default_factory=list)
