"""
Access control: bearer-token verification, role checks and the nutritionist
allowlist.

The gate is built once in ``create_application`` from settings and stored on
``app.state``; request handlers reach it through ``wellness.api.deps``.
"""

import logging
from datetime import timedelta
from typing import Iterable, Optional

from wellness.core import security
from wellness.core.errors import Forbidden, InternalFailure, Unauthorized
from wellness.schemas.auth import Principal

logger = logging.getLogger(__name__)

BEARER_PREFIX = "bearer "


def normalize_email(email: Optional[str]) -> str:
    return (email or "").strip().lower()


class NutritionistAllowlist:
    """Immutable set of emails allowed to register or log in as nutritionist."""

    def __init__(self, emails: Iterable[str] = ()):
        self._emails = frozenset(normalize_email(e) for e in emails if normalize_email(e))

    def __contains__(self, email: object) -> bool:
        return isinstance(email, str) and normalize_email(email) in self._emails

    def __len__(self) -> int:
        return len(self._emails)

    def __repr__(self) -> str:
        return f"NutritionistAllowlist({len(self._emails)} emails)"


class AccessGate:
    def __init__(
        self,
        *,
        secret_key: Optional[str],
        allowlist: NutritionistAllowlist,
        expire_minutes: int,
    ):
        self._secret_key = secret_key
        self.allowlist = allowlist
        self.expire_minutes = expire_minutes

    def _require_secret(self) -> str:
        if not self._secret_key:
            logger.error("SECRET_KEY is not configured; refusing to handle credentials")
            raise InternalFailure("Server misconfigured")
        return self._secret_key

    def issue_token(self, user) -> str:
        return security.create_access_token(
            user.id,
            role=user.role,
            name=user.name,
            email=user.email,
            secret_key=self._require_secret(),
            expires_delta=timedelta(minutes=self.expire_minutes),
        )

    def authenticate(self, authorization: Optional[str]) -> Principal:
        """Turn an ``Authorization`` header value into a principal, or raise 401."""
        secret_key = self._require_secret()
        token = (authorization or "").strip()
        if token.lower().startswith(BEARER_PREFIX):
            token = token[len(BEARER_PREFIX):].strip()
        if not token:
            raise Unauthorized("No token")

        try:
            claims = security.decode_access_token(token, secret_key)
        except security.JWTError:
            raise Unauthorized("Invalid token")

        if not claims.get("role"):
            raise Unauthorized("Unauthorized")
        try:
            return Principal(
                id=int(claims.get("sub")),
                role=claims["role"],
                name=claims.get("name") or "",
                email=claims.get("email") or "",
            )
        except (TypeError, ValueError):
            raise Unauthorized("Invalid token")

    @staticmethod
    def authorize(principal: Principal, roles: Iterable[str]) -> Principal:
        if principal.role not in tuple(roles):
            raise Forbidden("Forbidden")
        return principal

    def may_act_as_nutritionist(self, email: str) -> bool:
        return email in self.allowlist
