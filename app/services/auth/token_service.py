"""
Token management service: issuance, validation, rotation and revocation.

Access tokens are stateless. Refresh tokens are tied to a single stored
value per user: the SHA-256 digest of the one refresh token currently
valid. Presenting any other well-signed refresh token fails.
"""

import hashlib
import logging
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.config.settings import TokenSettings
from app.core.security.jwt_handler import ACCESS_TOKEN_TYPE, REFRESH_TOKEN_TYPE, JWTManager
from app.models.user.user import User
from app.repositories.user import UserRepository
from app.services.base import BaseService, ServiceResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TokenPair:
    """Access and refresh token issued together."""

    access_token: str
    refresh_token: str
    token_type: str = "bearer"


def hash_refresh_token(token: str) -> str:
    """Digest stored in place of the refresh token itself."""
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


class TokenService(BaseService[User, UserRepository]):
    """
    Token lifecycle management.

    Features:
    - Access and refresh token issuance with distinct signing secrets
    - Stateless access token verification
    - Refresh rotation as a compare-and-swap on the stored digest
    - Revocation (logout)
    """

    resource_name = "User"

    def __init__(
        self,
        user_repository: UserRepository,
        db_session: Session,
        token_settings: TokenSettings,
    ):
        super().__init__(user_repository, db_session)
        self.jwt = JWTManager(token_settings)

    # -------------------------------------------------------------------------
    # Issuance
    # -------------------------------------------------------------------------

    def _mint_pair(self, user_id: str) -> TokenPair:
        return TokenPair(
            access_token=self.jwt.create_access_token(user_id),
            refresh_token=self.jwt.create_refresh_token(user_id),
        )

    def issue_token_pair(self, user_id: str) -> ServiceResult[TokenPair]:
        """
        Issue a new token pair and make its refresh token the only valid one.

        Any refresh token issued earlier for the user stops working.

        Args:
            user_id: Subject of both tokens

        Returns:
            ServiceResult with the token pair, or NOT_FOUND for an unknown user
        """
        pair = self._mint_pair(user_id)
        try:
            with self.transaction():
                stored = self.repository.set_refresh_token_hash(
                    user_id, hash_refresh_token(pair.refresh_token)
                )
        except SQLAlchemyError as e:
            return self._handle_exception(e, "issue tokens", user_id)

        if not stored:
            return ServiceResult.not_found(self.resource_name, user_id)

        logger.debug(f"Token pair issued for user {user_id}")
        return ServiceResult.success(pair)

    # -------------------------------------------------------------------------
    # Verification
    # -------------------------------------------------------------------------

    def verify_access(self, token: str) -> Optional[str]:
        """
        Return the user id carried by a valid access token.

        Checks signature, expiry and token class only; never touches the
        database and never raises for malformed input.
        """
        return self.jwt.get_user_id(token, ACCESS_TOKEN_TYPE)

    # -------------------------------------------------------------------------
    # Rotation / Revocation
    # -------------------------------------------------------------------------

    def rotate_refresh(self, refresh_token: str) -> ServiceResult[TokenPair]:
        """
        Exchange a refresh token for a new pair, invalidating the old one.

        The presented token must be correctly signed, unexpired, of the
        refresh class, and equal to the value currently stored for its user.
        The stored value is replaced in a single conditional UPDATE, so a
        token can be redeemed at most once even under concurrent requests.

        Args:
            refresh_token: Refresh token previously issued to the client

        Returns:
            ServiceResult with the new pair, or UNAUTHORIZED
        """
        user_id = self.jwt.get_user_id(refresh_token, REFRESH_TOKEN_TYPE)
        if user_id is None:
            return ServiceResult.unauthorized("Invalid or expired refresh token")

        pair = self._mint_pair(user_id)
        try:
            with self.transaction():
                swapped = self.repository.swap_refresh_token_hash(
                    user_id,
                    expected_hash=hash_refresh_token(refresh_token),
                    new_hash=hash_refresh_token(pair.refresh_token),
                )
        except SQLAlchemyError as e:
            return self._handle_exception(e, "refresh tokens", user_id)

        if not swapped:
            logger.warning(
                "Refresh token rejected: not the active token for user",
                extra={"user_id": user_id},
            )
            return ServiceResult.unauthorized("Invalid refresh token")

        logger.info("Token refreshed", extra={"user_id": user_id})
        return ServiceResult.success(pair)

    def revoke(self, user_id: str) -> ServiceResult[bool]:
        """
        Clear the stored refresh token so no refresh token for the user works.
        """
        try:
            with self.transaction():
                self.repository.set_refresh_token_hash(user_id, None)
        except SQLAlchemyError as e:
            return self._handle_exception(e, "revoke tokens", user_id)

        logger.info("Refresh token revoked", extra={"user_id": user_id})
        return ServiceResult.success(True)
