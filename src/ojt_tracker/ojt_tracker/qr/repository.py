from __future__ import annotations

from typing import Optional, Protocol


class QRCodeRepository(Protocol):
    def get_payload(self, intern_id: int) -> Optional[str]:
        raise NotImplementedError

    def save_payload(self, *, intern_id: int, payload: str) -> int:
        raise NotImplementedError
