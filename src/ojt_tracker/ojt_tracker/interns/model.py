from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import InternStatus


@dataclass(frozen=True)
class Intern:
    """Domain entity: an intern joined with the owning user's name fields.

    ``ojt_hours_rendered`` is kept in seconds; it is a cache of the DTR sum
    and is always rewritten by a full recompute.
    """

    intern_id: int
    user_id: int
    student_id: str
    school_name: str
    course: str
    address: str
    supervisor_id: Optional[int]
    handler_id: Optional[int]
    ojt_hours_required: int
    ojt_hours_rendered: int
    status: InternStatus
    custom_intern_id: Optional[str] = None
    first_name: str = ""
    middle_name: str = ""
    last_name: str = ""
    suffix_name: str = ""
    email: str = ""

    @property
    def full_name(self) -> str:
        middle_initial = f"{self.middle_name[0]}." if self.middle_name else ""
        parts = [self.first_name, middle_initial, self.last_name, self.suffix_name]
        return " ".join(p for p in parts if p)


@dataclass(frozen=True)
class NewIntern:
    student_id: str
    school_name: str
    course: str
    address: str
    supervisor_id: Optional[int]
    handler_id: Optional[int]
    ojt_hours_required: int
