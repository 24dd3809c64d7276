"""Domain entity representing a panel evaluation."""

from dataclasses import dataclass


@dataclass
class Evaluation:
    """An evaluation filed by one evaluator for a defense schedule."""

    id: int | None
    schedule_id: int
    evaluator_id: int
    status: str = "pending"


__all__ = ["Evaluation"]
