"""
Session tokens -- issue and verify.

Tokens are ``django.core.signing`` payloads: compressed JSON
``{"userId": ..., "email": ...}``, timestamped and HMAC-signed with
SECRET_KEY under a dedicated salt. Expiry is enforced on verification
through ``max_age``.

Usage:
    verifier = build_session_verifier()
    token = verifier.issue(user_id=1, email="a@x.com")
    identity = verifier.verify(f"Bearer {token}")
"""

import logging

from django.core import signing

from recipevault.conf import get_setting
from recipevault.exceptions import AuthError
from recipevault.results import Identity

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "

NO_TOKEN = "Access denied. No token provided."
INVALID_TOKEN = "Invalid or expired token."


class SessionVerifier:
    """
    Gate in front of every resource operation.

    ``verify`` never touches a store: a failure short-circuits the
    request before any recipe or ingredient is read.
    """

    def __init__(self, max_age: int | None = None, salt: str | None = None):
        self.max_age = max_age if max_age is not None else get_setting("TOKEN_MAX_AGE")
        self.salt = salt or get_setting("TOKEN_SALT")

    def issue(self, user_id: int, email: str) -> str:
        """Mint a signed token for a freshly authenticated account."""
        return signing.dumps(
            {"userId": user_id, "email": email},
            salt=self.salt,
            compress=True,
        )

    def verify(self, raw_header_value: str | None) -> Identity:
        """
        Resolve an ``Authorization`` header value to an Identity.

        Raises:
            AuthError: header missing or not ``Bearer <token>``, bad
                signature, expired token or malformed payload.
        """
        if not raw_header_value or not raw_header_value.startswith(BEARER_PREFIX):
            raise AuthError(NO_TOKEN)

        token = raw_header_value[len(BEARER_PREFIX):].strip()
        if not token:
            raise AuthError(NO_TOKEN)

        try:
            payload = signing.loads(token, salt=self.salt, max_age=self.max_age)
        except signing.SignatureExpired:
            logger.info("Rejected expired session token")
            raise AuthError(INVALID_TOKEN)
        except signing.BadSignature:
            logger.warning("Rejected session token with a bad signature")
            raise AuthError(INVALID_TOKEN)

        user_id = payload.get("userId") if isinstance(payload, dict) else None
        email = payload.get("email") if isinstance(payload, dict) else None
        if not isinstance(user_id, int) or isinstance(user_id, bool) or not isinstance(email, str):
            logger.warning("Rejected session token with a malformed payload")
            raise AuthError(INVALID_TOKEN)

        return Identity(user_id=user_id, email=email)
