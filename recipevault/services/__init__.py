"""
RecipeVault Services.

Business logic that doesn't belong in models:
- access: ownership-scoped CRUD for recipes and ingredients
- auth: register and login
- sessions: session token issuing and verification

The builders wire services to the stores configured in recipevault.conf.
Nothing is cached between calls.
"""

from recipevault.conf import (
    get_account_store,
    get_ingredient_store,
    get_recipe_store,
)
from recipevault.services.access import RecipeVault
from recipevault.services.auth import AuthService
from recipevault.services.sessions import SessionVerifier


def build_session_verifier() -> SessionVerifier:
    return SessionVerifier()


def build_vault(using: str | None = None) -> RecipeVault:
    """Access layer bound to the configured recipe and ingredient stores."""
    return RecipeVault(
        recipes=get_recipe_store(using),
        ingredients=get_ingredient_store(using),
    )


def build_auth_service(using: str | None = None) -> AuthService:
    """Auth service bound to the configured credential store."""
    return AuthService(
        accounts=get_account_store(using),
        sessions=build_session_verifier(),
    )


__all__ = [
    "RecipeVault",
    "AuthService",
    "SessionVerifier",
    "build_vault",
    "build_auth_service",
    "build_session_verifier",
]
