"""
Session token service.

Issues and verifies HS256-signed tokens carrying the user id and username.
Verification never raises: any failure means "no identity".
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional
import jwt


from .interfaces import ITokenService
from .models import TokenPayload
from .exceptions import TokenConfigurationError

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"
DEFAULT_TTL = timedelta(hours=12)

Clock = Callable[[], datetime]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TokenService(ITokenService):
    """
    Issues and verifies session tokens.

    Validity is: signature verifies against the secret AND now < exp.
    The clock is injectable so expiry can be checked at any instant.
    """

    def __init__(
        self,
        secret: str,
        ttl: timedelta = DEFAULT_TTL,
        clock: Clock = _utcnow,
    ):
        self._secret = secret
        self._ttl = ttl
        self._clock = clock

    def issue(self, user_id: str, username: str) -> str:
        """
        Sign a new session token.

        Args:
            user_id: Stable user ID
            username: Username to embed

        Returns:
            Encoded token string

        Raises:
            TokenConfigurationError: If no signing secret is configured
        """
        if not self._secret:
            raise TokenConfigurationError()

        now = self._clock()
        payload = {
            "id": user_id,
            "username": username,
            "iat": int(now.timestamp()),
            "exp": int((now + self._ttl).timestamp()),
        }
        return jwt.encode(payload, self._secret, algorithm=ALGORITHM)

    def verify(self, token: Optional[str]) -> Optional[TokenPayload]:
        """
        Verify a session token.

        Returns:
            The decoded payload, or None if the token is missing, malformed,
            wrongly signed or expired.
        """
        if not token or not self._secret:
            return None

        try:
            # Expiry is checked against our own clock below
            claims = jwt.decode(
                token,
                self._secret,
                algorithms=[ALGORITHM],
                options={
                    "verify_exp": False,
                    "verify_iat": False,
                    "require": ["exp", "iat"],
                },
            )
            payload = TokenPayload(**claims)
        except (jwt.InvalidTokenError, ValueError, TypeError) as e:
            logger.debug(f"Rejected session token: {e}")
            return None

        if self._clock().timestamp() >= payload.exp:
            logger.debug(f"Session token for {payload.username} has expired")
            return None

        return payload
