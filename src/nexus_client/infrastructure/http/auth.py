"""IdentityManager - bearer identity attached to outgoing requests"""

from loguru import logger

from nexus_client.core.config import mask_secret
from nexus_client.shared.exceptions import ValidationError


class IdentityManager:
    """Holds the single bearer value used to authorize requests

    Responsibilities:
    - Start from the configured long-lived API key
    - Swap in a session token via set_identity()
    - Restore the API key via clear_identity()

    The transport reads current at send time, so a change affects every
    request sent afterwards and none already in flight.
    """

    def __init__(self, api_key: str) -> None:
        self._api_key = api_key
        self._session_token: str | None = None

    @property
    def current(self) -> str:
        """Get the active bearer value"""
        return self._session_token or self._api_key

    @property
    def is_session(self) -> bool:
        """True while a session token overrides the API key"""
        return self._session_token is not None

    def set_identity(self, token: str) -> None:
        """Replace the active bearer value

        Args:
            token: Session token

        Raises:
            ValidationError: If token is empty
        """
        if not token:
            raise ValidationError("Token is required", "INVALID_TOKEN")
        self._session_token = token
        logger.info(f"Session identity set ({mask_secret(token)})")

    def clear_identity(self) -> None:
        """Restore the configured API key as the active bearer value"""
        self._session_token = None
        logger.info("Session identity cleared, using API key")

    def authorization_header(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.current}"}
