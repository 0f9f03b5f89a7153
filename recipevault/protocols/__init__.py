"""
RecipeVault Protocols.

Defines interfaces for the persistence layer.
"""

from recipevault.protocols.store import (
    AccountStore,
    IngredientFields,
    IngredientStore,
    RecipeFields,
    RecipeStore,
)

__all__ = [
    # Store Protocols
    "AccountStore",
    "RecipeStore",
    "IngredientStore",
    # Input types
    "RecipeFields",
    "IngredientFields",
]
