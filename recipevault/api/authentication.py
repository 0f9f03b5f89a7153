"""
DRF authentication backed by the session verifier.

The resolved Identity becomes ``request.user`` so DRF permission classes
work; views hand it to the services explicitly.
"""

from rest_framework import exceptions
from rest_framework.authentication import BaseAuthentication

from recipevault.exceptions import AuthError
from recipevault.services import build_session_verifier


class BearerTokenAuthentication(BaseAuthentication):
    """
    ``Authorization: Bearer <token>``.

    Unlike DRF's stock classes this never returns None: a request without
    a valid token is rejected here, before any view code runs.
    """

    keyword = "Bearer"

    def authenticate(self, request):
        header = request.META.get("HTTP_AUTHORIZATION")
        try:
            identity = build_session_verifier().verify(header)
        except AuthError as exc:
            raise exceptions.AuthenticationFailed(exc.message) from exc
        return (identity, None)

    def authenticate_header(self, request):
        return self.keyword
