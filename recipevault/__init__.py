"""
Django RecipeVault - Multi-tenant recipe management API.

Every recipe belongs to exactly one account; every ingredient belongs to
exactly one recipe. Whoever cannot prove ownership sees "not found".

Usage:
    from recipevault import build_vault, VaultError

    vault = build_vault()
    recipe_id = vault.create_recipe(identity, {"title": "Soup"})
    vault.create_ingredient(identity, recipe_id, {"name": "Salt"})

    detail = vault.get_recipe(identity, recipe_id)
    for ingredient in detail.ingredients:
        print(ingredient.name, ingredient.quantity, ingredient.unit)
"""

from recipevault.exceptions import VaultError


def __getattr__(name):
    """Lazy import to avoid AppRegistryNotReady errors."""
    if name in ("build_vault", "RecipeVault"):
        from recipevault import services

        return getattr(services, name)
    if name in ("build_auth_service", "AuthService"):
        from recipevault import services

        return getattr(services, name)
    if name == "Identity":
        from recipevault.results import Identity

        return Identity
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "build_vault",
    "RecipeVault",
    "build_auth_service",
    "AuthService",
    "Identity",
    "VaultError",
]
__version__ = "0.1.0"
