"""
Account model (credential store).

Deliberately independent of django.contrib.auth's user model: an account
is only a name, a unique email and a password hash. No update or delete
operation is exposed by the API.
"""

from django.db import models
from django.utils.translation import gettext_lazy as _


class Account(models.Model):
    """A registered RecipeVault user."""

    name = models.CharField(
        max_length=150,
        verbose_name=_("Name"),
    )
    # Uniqueness is enforced by the database, not only by the register() pre-check
    email = models.EmailField(
        max_length=254,
        unique=True,
        verbose_name=_("Email"),
    )
    password = models.CharField(
        max_length=128,
        verbose_name=_("Password hash"),
    )

    class Meta:
        db_table = "recipevault_user"
        verbose_name = _("Account")
        verbose_name_plural = _("Accounts")
        ordering = ["id"]

    def __str__(self) -> str:
        return f"{self.name} <{self.email}>"
