"""
RecipeVault Settings.

Supports two formats (dict takes priority):

    # Option 1: Dict
    RECIPEVAULT = {
        "TOKEN_MAX_AGE": 60 * 60 * 24,
        "PASSWORD_HASHER": "bcrypt_sha256",
    }

    # Option 2: Flat
    RECIPEVAULT_TOKEN_MAX_AGE = 60 * 60 * 24
    RECIPEVAULT_PASSWORD_HASHER = "bcrypt_sha256"

All settings have sensible defaults; zero configuration required.
The token signing secret is Django's own SECRET_KEY.
"""

from django.conf import settings
from django.utils.module_loading import import_string


# ── Defaults ──

DEFAULTS = {
    # Session tokens
    "TOKEN_MAX_AGE": 60 * 60 * 24,
    "TOKEN_SALT": "recipevault.session",
    # Name of a hasher listed in PASSWORD_HASHERS (bcrypt, cost 12)
    "PASSWORD_HASHER": "bcrypt_sha256",
    # Stores
    "DATABASE": "default",
    "ACCOUNT_STORE": "recipevault.adapters.orm.AccountORMStore",
    "RECIPE_STORE": "recipevault.adapters.orm.RecipeORMStore",
    "INGREDIENT_STORE": "recipevault.adapters.orm.IngredientORMStore",
}


# ── Accessors ──

_sentinel = object()


def get_setting(name, default=_sentinel):
    """
    Get a recipevault setting.

    Looks up in order:
    1. RECIPEVAULT dict (e.g. RECIPEVAULT = {"TOKEN_MAX_AGE": 3600})
    2. Flat setting (e.g. RECIPEVAULT_TOKEN_MAX_AGE = 3600)
    3. DEFAULTS
    """
    vault_dict = getattr(settings, "RECIPEVAULT", {})
    if name in vault_dict:
        return vault_dict[name]

    flat_value = getattr(settings, f"RECIPEVAULT_{name}", _sentinel)
    if flat_value is not _sentinel:
        return flat_value

    if default is not _sentinel:
        return default

    return DEFAULTS.get(name)


def _build_store(setting_name, using=None):
    store_class = import_string(get_setting(setting_name))
    return store_class(using=using or get_setting("DATABASE"))


def get_account_store(using=None):
    """Return a fresh credential store bound to the configured database."""
    return _build_store("ACCOUNT_STORE", using)


def get_recipe_store(using=None):
    """Return a fresh recipe store bound to the configured database."""
    return _build_store("RECIPE_STORE", using)


def get_ingredient_store(using=None):
    """Return a fresh ingredient store bound to the configured database."""
    return _build_store("INGREDIENT_STORE", using)
