# backend/auth/identity.py
"""
Caller identity for routes that need one.

Deployments pick a verifier with AUTH_MODE:
- "header": trusts the raw `user-id` header set by an upstream gateway.
  This does not verify anything and only belongs behind such a gateway.
- "jwt": expects `Authorization: Bearer <token>` signed with JWT_SECRET and
  takes the `sub` claim as the user id.
"""
from fastapi import Request
from config import settings
from exceptions import AuthenticationError
from .models import Identity
from .utils import decode_access_token
import logging

logger = logging.getLogger("auth.identity")


class IdentityVerifier:
    def verify_identity(self, request: Request) -> Identity:
        raise NotImplementedError


class HeaderIdentityVerifier(IdentityVerifier):
    header_name = "user-id"

    def verify_identity(self, request: Request) -> Identity:
        user_id = request.headers.get(self.header_name)
        if not user_id:
            raise AuthenticationError()
        return Identity(user_id=user_id)


class BearerTokenIdentityVerifier(IdentityVerifier):
    def verify_identity(self, request: Request) -> Identity:
        scheme, _, token = request.headers.get("authorization", "").partition(" ")
        if scheme.lower() != "bearer" or not token:
            raise AuthenticationError()
        claims = decode_access_token(token.strip())
        if not claims or not claims.get("sub"):
            logger.warning("⚠️ Rejected bearer token")
            raise AuthenticationError("Invalid or expired token")
        return Identity(user_id=str(claims["sub"]))


VERIFIERS = {
    "header": HeaderIdentityVerifier,
    "jwt": BearerTokenIdentityVerifier,
}


def get_identity_verifier() -> IdentityVerifier:
    try:
        return VERIFIERS[settings.AUTH_MODE]()
    except KeyError:
        raise RuntimeError(f"Unknown AUTH_MODE: {settings.AUTH_MODE}")


# =====================================================
# 🔹 FastAPI dependency
# =====================================================
def require_identity(request: Request) -> Identity:
    identity = get_identity_verifier().verify_identity(request)
    request.state.user_id = identity.user_id
    return identity
