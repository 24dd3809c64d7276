"""Render notification copy from a template and its resolved context.

Everything here is a pure function of its arguments: no clock, no I/O.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from thesisflow.domain.entities import (
    IncludeField,
    NotificationContent,
    NotificationDetail,
    NotificationTemplate,
    ResolvedContext,
)

from .templates import INCLUDE_OPTIONS

OFFICE_SIGNATURE = "Thesis Management Office"


@dataclass(frozen=True)
class _Copy:
    title: str
    summary: str
    subject: str
    greeting: str
    closing: tuple[str, ...]


_DEFAULT_COPY = _Copy(
    title="New notification",
    summary="You have received a new official update.",
    subject="Official System Notice",
    greeting="Dear User,",
    closing=("Please check your dashboard for more details.",),
)

_TEMPLATE_COPY: dict[str, _Copy] = {
    "evaluation_submitted": _Copy(
        title="Evaluation submitted",
        summary="A thesis evaluation has been submitted and recorded successfully.",
        subject="Official Notice: Evaluation Submitted",
        greeting="Dear User,",
        closing=("Please log in to the system for the complete details.",),
    ),
    "evaluation_locked": _Copy(
        title="Evaluation finalized",
        summary="The evaluation has been finalized and is now locked for edits.",
        subject="Official Notice: Evaluation Finalized",
        greeting="Dear User,",
        closing=(
            "No further edits can be made unless officially reopened by the authorized office.",
        ),
    ),
    "defense_schedule_updated": _Copy(
        title="Defense schedule update",
        summary="Please review the updated defense schedule details.",
        subject="Official Notice: Updated Thesis Defense Schedule",
        greeting="Dear Student,",
        closing=(
            "Kindly review the updated schedule and prepare accordingly.",
            "If you have questions, please coordinate with your adviser or your department office.",
        ),
    ),
    "general_update": _Copy(
        title="General announcement",
        summary="You have received a new official update from the system.",
        subject="Official System Notice",
        greeting="Dear User,",
        closing=("Please check your dashboard for more details.",),
    ),
}


def detail_label(field: IncludeField) -> str:
    return INCLUDE_OPTIONS[field][0]


def build_details(
    template: NotificationTemplate,
    context: ResolvedContext,
    include_fields: Iterable[IncludeField],
) -> tuple[NotificationDetail, ...]:
    """Return ``{label, value}`` pairs for the chosen, resolvable fields."""

    chosen = set(include_fields)
    details: list[NotificationDetail] = []
    for field in IncludeField:
        if field not in chosen or not template.allows(field):
            continue
        value = context.get(field)
        if value:
            details.append(NotificationDetail(label=detail_label(field), value=value))
    return tuple(details)


def build_notification_content(
    template: NotificationTemplate,
    context: ResolvedContext,
    include_fields: Iterable[IncludeField],
) -> NotificationContent:
    copy = _TEMPLATE_COPY.get(template.id, _DEFAULT_COPY)
    summary = _ensure_sentence(copy.summary)
    details = build_details(template, context, include_fields)
    return NotificationContent(
        title=copy.title,
        summary=summary,
        formal_subject=copy.subject,
        formal_message=_formal_message(copy, summary, details),
        details=details,
    )


def _formal_message(
    copy: _Copy, summary: str, details: tuple[NotificationDetail, ...]
) -> str:
    lines = [copy.greeting, "", summary, ""]
    if details:
        lines.append("Details:")
        lines.extend(f"• {detail.label}: {detail.value}" for detail in details)
        lines.append("")
    lines.extend(copy.closing)
    lines.extend(["", "Thank you.", OFFICE_SIGNATURE])
    return "\n".join(lines)


def _ensure_sentence(value: str) -> str:
    trimmed = value.strip()
    if not trimmed:
        return ""
    return trimmed if trimmed[-1] in ".!?" else f"{trimmed}."


__all__ = ["build_details", "build_notification_content", "detail_label"]
