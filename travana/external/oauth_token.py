from __future__ import annotations

import time
from typing import Optional

# Refresh a little before the provider's stated expiry
_EXPIRY_MARGIN_SECONDS = 60


class TokenCache:
    """One client-credentials access token, held until it expires."""

    def __init__(self):
        self._token: Optional[str] = None
        self._expires_at: float = 0.0

    def get(self) -> Optional[str]:
        if self._token and time.monotonic() < self._expires_at:
            return self._token
        return None

    def store(self, token: str, expires_in: float) -> str:
        self._token = token
        self._expires_at = time.monotonic() + max(float(expires_in) - _EXPIRY_MARGIN_SECONDS, 0.0)
        return token

    def clear(self) -> None:
        self._token = None
        self._expires_at = 0.0
