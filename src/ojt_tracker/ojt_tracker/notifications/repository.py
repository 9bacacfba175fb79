from __future__ import annotations

from typing import Optional, Protocol


class DeviceTokenRepository(Protocol):
    def get_token(self, intern_id: int) -> Optional[str]:
        raise NotImplementedError

    def save_token(self, *, intern_id: int, token: str) -> None:
        raise NotImplementedError
