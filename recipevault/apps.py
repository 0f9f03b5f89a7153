"""
Django RecipeVault app configuration.
"""

from django.apps import AppConfig
from django.utils.translation import gettext_lazy as _


class RecipeVaultConfig(AppConfig):
    """RecipeVault application configuration."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "recipevault"
    verbose_name = _("Recipe Vault")
