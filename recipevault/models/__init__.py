"""
RecipeVault Models.

- Account: credential store (name, unique email, password hash)
- Recipe: owned by exactly one Account
- Ingredient: belongs to exactly one Recipe (ownership derived through it)
"""

from recipevault.models.account import Account
from recipevault.models.recipe import Ingredient, Recipe

__all__ = [
    "Account",
    "Recipe",
    "Ingredient",
]
