"""
JWT token management utilities.

Handles JWT creation and validation for the two token classes. Access and
refresh tokens are signed with distinct secrets so a leaked access secret
cannot be used to mint refresh tokens, and vice versa.
"""

import jwt
import logging
import secrets
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from app.config.settings import TokenSettings

logger = logging.getLogger(__name__)

ACCESS_TOKEN_TYPE = "access"
REFRESH_TOKEN_TYPE = "refresh"


class JWTManager:
    """
    JWT token manager for authentication.

    Every token carries ``user_id``, ``token_type``, ``iat``, ``exp`` and a
    random ``jti`` so two tokens issued in the same second still differ.
    """

    def __init__(self, token_settings: TokenSettings):
        """
        Initialize JWT manager.

        Args:
            token_settings: Secrets, algorithm and lifetimes for both token classes
        """
        self._settings = token_settings

        logger.debug(
            f"JWT Manager initialized with algorithm {token_settings.algorithm}, "
            f"access token expires in {token_settings.access_ttl}, "
            f"refresh token expires in {token_settings.refresh_ttl}"
        )

    def _secret_for(self, token_type: str) -> str:
        if token_type == ACCESS_TOKEN_TYPE:
            return self._settings.access_secret
        if token_type == REFRESH_TOKEN_TYPE:
            return self._settings.refresh_secret
        raise ValueError(f"Unknown token type: {token_type}")

    def _encode(self, user_id: str, token_type: str) -> str:
        now = datetime.now(timezone.utc)
        ttl = (
            self._settings.access_ttl
            if token_type == ACCESS_TOKEN_TYPE
            else self._settings.refresh_ttl
        )
        payload = {
            "user_id": str(user_id),
            "token_type": token_type,
            "iat": now,
            "exp": now + ttl,
            "jti": secrets.token_hex(16),
        }
        return jwt.encode(
            payload, self._secret_for(token_type), algorithm=self._settings.algorithm
        )

    def create_access_token(self, user_id: str) -> str:
        """Create a short-lived access token for ``user_id``."""
        return self._encode(user_id, ACCESS_TOKEN_TYPE)

    def create_refresh_token(self, user_id: str) -> str:
        """Create a long-lived refresh token for ``user_id``."""
        return self._encode(user_id, REFRESH_TOKEN_TYPE)

    def verify_token(self, token: str, token_type: str) -> Dict[str, Any]:
        """
        Verify and decode a JWT of the given class.

        Args:
            token: JWT token to verify
            token_type: Expected ``token_type`` claim

        Returns:
            Decoded token payload

        Raises:
            jwt.ExpiredSignatureError: If token is expired
            jwt.InvalidTokenError: If token is invalid or of the wrong class
        """
        payload = jwt.decode(
            token,
            self._secret_for(token_type),
            algorithms=[self._settings.algorithm],
            options={"require": ["exp", "iat"]},
        )
        if payload.get("token_type") != token_type:
            raise jwt.InvalidTokenError(f"Expected a {token_type} token")
        if not payload.get("user_id"):
            raise jwt.InvalidTokenError("Token carries no subject")
        return payload

    def get_user_id(self, token: str, token_type: str) -> Optional[str]:
        """
        Return the subject of a valid token, or None for any invalid input.
        """
        if not token or not isinstance(token, str):
            return None
        try:
            return str(self.verify_token(token, token_type)["user_id"])
        except jwt.ExpiredSignatureError:
            logger.info(f"Rejected expired {token_type} token")
            return None
        except jwt.InvalidTokenError as e:
            logger.warning(f"Rejected {token_type} token: {e}")
            return None
