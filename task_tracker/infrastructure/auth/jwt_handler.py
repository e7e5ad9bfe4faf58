"""
JWT token handler.
Validates JWT tokens and extracts user information.
"""

from typing import Optional, Dict, Any
from datetime import timedelta
from jose import JWTError, jwt

from task_tracker.config import Settings, get_settings
from task_tracker.domain.models.base import ValidationError, utc_now


class JWTHandler:
    """Handles JWT token creation, validation and user extraction."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self.jwt_secret = self.settings.jwt_secret_key
        self.jwt_algorithm = self.settings.jwt_algorithm

    def create_access_token(
        self,
        user_id: str,
        expires_minutes: Optional[int] = None,
        extra_claims: Optional[Dict[str, Any]] = None,
    ) -> str:
        """
        Issue a signed access token for a user.

        Args:
            user_id: User ID stored in the sub claim
            expires_minutes: Lifetime, defaults to the configured value
            extra_claims: Additional claims merged into the payload

        Returns:
            JWT token string
        """
        now = utc_now()
        lifetime = expires_minutes
        if lifetime is None:
            lifetime = self.settings.jwt_access_token_expire_minutes

        payload = {
            "sub": str(user_id),
            "iat": int(now.timestamp()),
            "exp": int((now + timedelta(minutes=lifetime)).timestamp()),
        }
        if extra_claims:
            payload.update(extra_claims)

        return jwt.encode(payload, self.jwt_secret, algorithm=self.jwt_algorithm)

    def verify_token(self, token: str) -> Dict[str, Any]:
        """
        Verify and decode a JWT token.

        Args:
            token: JWT token string, with or without the Bearer prefix

        Returns:
            Dict containing token payload

        Raises:
            ValidationError: If token is invalid or expired
        """
        if token.startswith('Bearer '):
            token = token[7:]

        try:
            # jose rejects expired tokens while decoding
            payload = jwt.decode(
                token,
                self.jwt_secret,
                algorithms=[self.jwt_algorithm],
                options={"verify_aud": False},
            )
        except JWTError as e:
            raise ValidationError(f"Invalid JWT token: {str(e)}", "token")

        if not payload.get('sub'):
            raise ValidationError("Token missing user ID (sub claim)", "token")

        if 'exp' not in payload:
            raise ValidationError("Token missing expiration (exp claim)", "token")

        return payload

    def get_user_id(self, token: str) -> str:
        """
        Extract user ID from JWT token.

        Raises:
            ValidationError: If token is invalid
        """
        payload = self.verify_token(token)
        return str(payload['sub'])

    def is_token_valid(self, token: str) -> bool:
        """Check if token is valid without raising exceptions."""
        try:
            self.verify_token(token)
            return True
        except ValidationError:
            return False
