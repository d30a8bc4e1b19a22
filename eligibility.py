"""Which teachers may be picked for a subject."""

from typing import List, Sequence

from models import Teacher


def eligible_teachers_for(subject: str, roster: Sequence[Teacher]) -> List[Teacher]:
    """
    Teachers allowed to take `subject`, in roster order.
    No subject yet means no filter: the whole roster comes back.
    """
    if not subject:
        return list(roster)
    return [t for t in roster if t.can_teach(subject)]


def is_eligible(teacher_name: str, subject: str, roster: Sequence[Teacher]) -> bool:
    """False only when both are set and the named teacher is missing or not eligible."""
    if not teacher_name or not subject:
        return True
    return any(t.name == teacher_name for t in eligible_teachers_for(subject, roster))
