"""
RecipeVault Adapters.

Implementations of the store protocols. The ORM stores are the defaults;
swap them through the RECIPEVAULT settings (see recipevault.conf).
"""

from recipevault.adapters.orm import (
    AccountORMStore,
    IngredientORMStore,
    RecipeORMStore,
    owned_recipes,
)

__all__ = [
    "AccountORMStore",
    "RecipeORMStore",
    "IngredientORMStore",
    "owned_recipes",
]
