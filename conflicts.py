"""
⚠️ CONFLICT DETECTOR
====================
Rule: a teacher can't be in two classrooms at once.

Everything is recomputed from scratch on each call. The grid is a few
dates x a few periods x a few classes, so there is nothing worth caching.
"""

import logging
from collections import Counter
from typing import Dict, Iterable, List, Set, Tuple

from models import Assignment, Configuration, Schedule, Slot
from settings import SENTINEL_TEACHER


logger = logging.getLogger(__name__)

# (date, period, teacher)
Conflict = Tuple[str, str, str]


def teacher_load(
    config: Configuration,
    schedule: Schedule,
    sentinel: str = SENTINEL_TEACHER,
) -> Dict[Tuple[str, str], Counter]:
    """
    (date, period) -> Counter(teacher -> number of classes).
    Only the current date x period x class grid is scanned, so records for
    removed dates/periods/classes never count. Empty and placeholder
    teachers are skipped.
    """
    load: Dict[Tuple[str, str], Counter] = {}
    for date, period in config.iter_time_slots():
        counts: Counter = Counter()
        for class_name in config.classes:
            record = schedule.get(Slot(date, period, class_name))
            teacher = record.teacher if record else ""
            if teacher and teacher != sentinel:
                counts[teacher] += 1
        load[(date, period)] = counts
    return load


def find_conflicts(
    config: Configuration,
    schedule: Schedule,
    sentinel: str = SENTINEL_TEACHER,
) -> Set[Conflict]:
    """Every (date, period, teacher) where the teacher has more than one class."""
    conflicts: Set[Conflict] = set()
    for (date, period), counts in teacher_load(config, schedule, sentinel).items():
        for teacher, count in counts.items():
            if count > 1:
                conflicts.add((date, period, teacher))
    logger.debug("Conflict scan found %d double-booking(s)", len(conflicts))
    return conflicts


def is_conflicted(conflicts: Set[Conflict], slot: Slot, assignment: Assignment) -> bool:
    """Should this cell be flagged? Every class sharing the teacher is."""
    if not assignment.teacher:
        return False
    return (slot.date, slot.period, assignment.teacher) in conflicts


def describe_conflicts(config: Configuration, conflicts: Iterable[Conflict]) -> List[str]:
    """Human-readable lines in grid order, e.g. "12/25(木) 1限 (13:00~): 片岡"."""
    order = {dp: i for i, dp in enumerate(config.iter_time_slots())}
    ranked = sorted(conflicts, key=lambda c: (order.get((c[0], c[1]), len(order)), c[2]))
    return [f"{date} {period}: {teacher}" for date, period, teacher in ranked]
