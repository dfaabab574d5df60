"""Password hashing and bearer-token helpers."""

from __future__ import annotations

import base64
import hashlib
import secrets
from datetime import UTC, datetime, timedelta

import jwt

from travel_backend.settings import BackendSettings, get_settings
from travel_backend.shared import Actor, ErrorCode, UnauthenticatedError

PBKDF2_ITERATIONS = 100_000


class AuthService:
    """Handles password hashing and actor token encoding."""

    def __init__(
        self,
        *,
        secret_key: str | None = None,
        algorithm: str | None = None,
        access_token_ttl_minutes: int = 60,
        settings: BackendSettings | None = None,
    ) -> None:
        config = settings or get_settings()
        self._secret_key = secret_key or config.auth_secret_key
        self._algorithm = algorithm or config.auth_algorithm
        self._access_token_ttl = timedelta(minutes=access_token_ttl_minutes)

    def hash_password(self, password: str) -> str:
        """Hash a password using PBKDF2 with a random salt."""

        salt = secrets.token_bytes(16)
        digest = hashlib.pbkdf2_hmac(
            "sha256", password.encode("utf-8"), salt, PBKDF2_ITERATIONS
        )
        return f"{base64.b64encode(salt).decode()}:{base64.b64encode(digest).decode()}"

    def create_access_token(self, actor: Actor) -> str:
        expires_at = datetime.now(tz=UTC) + self._access_token_ttl
        payload = {"sub": str(actor.id), "name": actor.name, "exp": expires_at}
        return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)

    def decode_access_token(self, token: str) -> Actor:
        """Return the actor encoded in *token*."""

        try:
            data = jwt.decode(token, self._secret_key, algorithms=[self._algorithm])
        except jwt.ExpiredSignatureError as exc:
            raise UnauthenticatedError(
                "token has expired", code=ErrorCode.TOKEN_EXPIRED
            ) from exc
        except jwt.InvalidTokenError as exc:
            raise UnauthenticatedError("invalid token") from exc

        try:
            return Actor(id=int(data["sub"]), name=str(data.get("name", "")))
        except (KeyError, ValueError) as exc:
            raise UnauthenticatedError("invalid token subject") from exc
