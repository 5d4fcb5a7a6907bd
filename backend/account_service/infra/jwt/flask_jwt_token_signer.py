from __future__ import annotations

from dataclasses import dataclass
from typing import Any, cast

from flask_jwt_extended.exceptions import JWTExtendedException
from jwt.exceptions import PyJWTError

from account_service.services._shared.errors import InvalidTokenError
from account_service.services._shared.ports import TokenSigner


@dataclass(slots=True)
class JWTTokenSigner(TokenSigner):
    """
    Adapter for Flask-JWT-Extended.

    Decoding only accepts ``JWT_DECODE_ALGORITHMS`` (HS256), so tokens whose
    header names another family, or ``none``, fail signature checks.

    .. note::
       Requires an active Flask app context with proper JWT settings.
    """

    def issue(self, subject_id: int) -> str:
        from flask_jwt_extended import create_access_token

        return cast(str, create_access_token(identity=str(subject_id)))

    def decode(self, token: str) -> dict[str, Any]:
        from flask_jwt_extended import decode_token

        try:
            return cast(dict[str, Any], decode_token(token))
        except (PyJWTError, JWTExtendedException, KeyError, ValueError, TypeError) as exc:
            raise InvalidTokenError() from exc

    def verify(self, token: str) -> int:
        if not token:
            raise InvalidTokenError()
        claims = self.decode(token)
        # Flask-JWT-Extended sets "type": "access" | "refresh"
        if claims.get("type") != "access":
            raise InvalidTokenError()
        try:
            return int(claims["sub"])
        except (KeyError, TypeError, ValueError) as exc:
            raise InvalidTokenError() from exc
