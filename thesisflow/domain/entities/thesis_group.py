"""Domain entity representing a thesis group."""

from dataclasses import dataclass, field


@dataclass
class ThesisGroup:
    """A thesis group with its adviser and student members."""

    id: int | None
    title: str
    program: str | None = None
    term: str | None = None
    adviser_id: int | None = None
    student_member_ids: list[int] = field(default_factory=list)


__all__ = ["ThesisGroup"]
