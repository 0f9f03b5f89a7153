"""
Auth service -- register and login.

Passwords are hashed with django.contrib.auth.hashers (bcrypt_sha256 by
default, cost 12). Neither the plaintext nor the hash is ever returned
or logged.
"""

import logging
from functools import lru_cache

from django.contrib.auth.hashers import check_password, make_password
from django.utils.crypto import get_random_string

from recipevault.conf import get_setting
from recipevault.exceptions import (
    AuthError,
    ConflictError,
    ValidationError,
    translate_store_errors,
)
from recipevault.protocols.store import AccountStore
from recipevault.results import LoginResult, PublicUser
from recipevault.services.sessions import SessionVerifier

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password."


@lru_cache(maxsize=None)
def dummy_password_hash(hasher: str) -> str:
    """Encoded hash of a throwaway password, computed once per hasher."""
    return make_password(get_random_string(32), hasher=hasher)


def _filled(value) -> bool:
    return isinstance(value, str) and value.strip() != ""


class AuthService:
    """
    Account registration and login.

    Usage:
        auth = build_auth_service()
        user_id = auth.register("Ana", "ana@example.com", "s3cret")
        result = auth.login("ana@example.com", "s3cret")
        result.token  # signed, 24h
    """

    def __init__(
        self,
        accounts: AccountStore,
        sessions: SessionVerifier,
        hasher: str | None = None,
    ):
        self.accounts = accounts
        self.sessions = sessions
        self.hasher = hasher or get_setting("PASSWORD_HASHER")

    def register(self, name: str, email: str, password: str) -> int:
        """
        Create an account and return its id.

        The existence check and the insert are two round trips; a
        concurrent duplicate is still caught by the unique constraint
        on email, which the store reports as ConflictError.
        """
        if not (_filled(name) and _filled(email) and _filled(password)):
            raise ValidationError("Name, email, and password are required.")

        email = email.strip()
        with translate_store_errors("register"):
            if self.accounts.email_exists(email):
                raise ConflictError("An account with that email already exists.")

            password_hash = make_password(password, hasher=self.hasher)
            user_id = self.accounts.insert(name.strip(), email, password_hash)

        logger.info(f"Registered account {user_id}")
        return user_id

    def login(self, email: str, password: str) -> LoginResult:
        """
        Check credentials and issue a session token.

        Unknown email and wrong password fail with the same AuthError.
        """
        if not (_filled(email) and _filled(password)):
            raise ValidationError("Email and password are required.")

        with translate_store_errors("login"):
            account = self.accounts.get_by_email(email.strip())

        if account is None:
            # Compare against a dummy hash so both failure paths take similar time
            check_password(password, dummy_password_hash(self.hasher))
            logger.warning("Failed login for unknown email")
            raise AuthError(INVALID_CREDENTIALS)

        if not check_password(password, account.password):
            logger.warning(f"Failed login for account {account.pk}")
            raise AuthError(INVALID_CREDENTIALS)

        token = self.sessions.issue(account.pk, account.email)
        logger.info(f"Account {account.pk} logged in")

        return LoginResult(
            token=token,
            user=PublicUser(id=account.pk, name=account.name, email=account.email),
        )
