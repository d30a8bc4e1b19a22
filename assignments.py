"""
📋 ASSIGNMENT STORE
===================
The grid contents: slot -> (subject, teacher).
Like the what-if overlays, nothing here mutates the schedule it is given;
each edit returns a fresh dict.
"""

import logging
from dataclasses import replace
from typing import List

from models import ASSIGNMENT_FIELDS, Assignment, Configuration, Schedule, Slot


logger = logging.getLogger(__name__)


def get_assignment(schedule: Schedule, slot: Slot) -> Assignment:
    """Current record for a slot, or an empty one."""
    return schedule.get(slot, Assignment())


def assign(schedule: Schedule, slot: Slot, field_name: str, value: str) -> Schedule:
    """
    Set subject or teacher for one slot.
    Changing the subject clears the teacher, since the old pick may not
    teach the new subject. Setting the teacher leaves the subject alone.
    """
    if field_name not in ASSIGNMENT_FIELDS:
        raise ValueError(f"unknown assignment field: {field_name!r}")
    value = value or ""
    current = get_assignment(schedule, slot)
    if field_name == "subject":
        if value == current.subject:
            return schedule
        updated = Assignment(subject=value, teacher="")
        if current.teacher:
            logger.debug("Subject change on %s cleared teacher %s", slot, current.teacher)
    else:
        updated = replace(current, teacher=value)
    new_schedule = dict(schedule)
    new_schedule[slot] = updated
    return new_schedule


def clear_slot(schedule: Schedule, slot: Slot) -> Schedule:
    """Remove whatever is in a slot."""
    if slot not in schedule:
        return schedule
    new_schedule = dict(schedule)
    del new_schedule[slot]
    return new_schedule


def orphaned_slots(config: Configuration, schedule: Schedule) -> List[Slot]:
    """Stored slots the grid can no longer show (date, period or class was removed)."""
    return [slot for slot in schedule if not config.has_slot(slot)]
