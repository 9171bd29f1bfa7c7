"""Shared-password check for the client app."""

import hmac
from dataclasses import dataclass

from nutrition_ai.errors import AuthError


@dataclass
class AuthService:
    password: str | None

    def validate(self, candidate: str | None) -> None:
        """Raise AuthError unless the candidate matches the configured password."""
        if not self.password:
            raise AuthError("Authentication not configured", status_code=500)
        if not hmac.compare_digest(
            (candidate or "").encode("utf-8"), self.password.encode("utf-8")
        ):
            raise AuthError("Invalid password")
