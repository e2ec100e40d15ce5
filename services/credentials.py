"""
Credential selection
The host environment may offer API key selection; without one, every call is authorized
"""

import logging
from typing import Optional, Protocol

from services.errors import CredentialSelectionError


logger = logging.getLogger(__name__)


class KeySelectionHost(Protocol):
    async def has_selected_api_key(self) -> bool: ...

    async def open_select_key(self) -> None: ...


class CredentialProvider(Protocol):
    async def has_selected_api_key(self) -> bool: ...

    async def open_select_key(self) -> None: ...

    def invalidate(self) -> None: ...


class AlwaysAuthorized:
    """Stub for environments without a key selection host"""

    async def has_selected_api_key(self) -> bool:
        return True

    async def open_select_key(self) -> None:
        return None

    def invalidate(self) -> None:
        # Nothing to reset, the environment key is the only key
        return None


class HostCredentialProvider:
    """Delegates key selection to the host and remembers when a key was revoked"""

    def __init__(self, host: KeySelectionHost):
        self.host = host
        self._invalidated = False

    async def has_selected_api_key(self) -> bool:
        if self._invalidated:
            return False
        try:
            return bool(await self.host.has_selected_api_key())
        except Exception as e:
            logger.error("API key check failed: %s", e)
            return False

    async def open_select_key(self) -> None:
        try:
            await self.host.open_select_key()
        except Exception as e:
            logger.error("API key selection failed: %s", e)
            raise CredentialSelectionError(
                "An error occurred while selecting the API key. Please try again."
            ) from e
        self._invalidated = False

    def invalidate(self) -> None:
        logger.warning("Credential invalidated, key selection required")
        self._invalidated = True


def resolve_credential_provider(host: Optional[KeySelectionHost] = None) -> CredentialProvider:
    if host is None:
        return AlwaysAuthorized()
    return HostCredentialProvider(host)
