from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import InternStatus
from .model import Intern, NewIntern


class InternRepository(Protocol):
    """Repository interface for interns.

    Services depend on this protocol, never on a concrete database.
    """

    def get_by_id(self, intern_id: int) -> Optional[Intern]:
        raise NotImplementedError

    def get_by_user_id(self, user_id: int) -> Optional[Intern]:
        raise NotImplementedError

    def list_interns(
        self,
        *,
        status: Optional[InternStatus] = None,
        supervisor_id: Optional[int] = None,
        search: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> Sequence[Intern]:
        raise NotImplementedError

    def create_intern(self, *, user_id: int, data: NewIntern) -> int:
        raise NotImplementedError

    def update_intern(self, intern_id: int, *, data: NewIntern) -> bool:
        raise NotImplementedError

    def set_status(self, intern_id: int, *, status: InternStatus, custom_intern_id: Optional[str] = None) -> bool:
        raise NotImplementedError

    def latest_custom_id(self, *, year: int) -> Optional[str]:
        """Highest ``Intern-<year>-NNN`` assigned so far, if any."""

        raise NotImplementedError

    def update_rendered(self, intern_id: int, *, rendered_seconds: int) -> bool:
        raise NotImplementedError

    def school_counts(self) -> Sequence[dict]:
        raise NotImplementedError
