"""
🧠 DATA MODELS — Baby-level explanation
========================================
These are the little boxes the editor keeps its information in.
- Configuration: the lists you can pick from (dates, periods, classes, subjects, teachers)
- Teacher: a name plus the subjects that teacher is allowed to take
- Assignment: what sits in one cell of the grid (a subject and a teacher)
- Slot: which cell, as (date, period, class)

All of them are frozen. Editing something means building a new one,
so an old snapshot never changes behind your back.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, NamedTuple, Optional, Tuple

from settings import SENTINEL_TEACHER


ENUMERATION_FIELDS = ("dates", "periods", "classes", "subjects")
ASSIGNMENT_FIELDS = ("subject", "teacher")


class Slot(NamedTuple):
    """
    One cell of the grid. Plain tuple, so it works as a dict key and
    two slots are equal only when all three strings are equal.
    """

    date: str
    period: str
    class_name: str


@dataclass(frozen=True)
class Teacher:
    """
    One teacher on the roster.
    - name: shown in the teacher dropdown (e.g. "堀上")
    - subjects: subjects this teacher may be assigned to, in the order they were ticked
    """

    name: str
    subjects: Tuple[str, ...] = ()

    def can_teach(self, subject: str) -> bool:
        return subject in self.subjects


@dataclass(frozen=True)
class Assignment:
    """What one slot holds. Empty strings mean "not chosen yet"."""

    subject: str = ""
    teacher: str = ""

    @property
    def is_empty(self) -> bool:
        return not self.subject and not self.teacher


# slot -> assignment. Sparse: missing slots read as Assignment().
Schedule = Dict[Slot, Assignment]


@dataclass(frozen=True)
class Configuration:
    """
    Everything the grid is built from.
    - dates: e.g. ["12/25(木)", "12/26(金)"]
    - periods: e.g. ["1限 (13:00~)", "2限 (14:10~)"]
    - classes: e.g. ["Sクラス", "Aクラス"]
    - subjects: e.g. ["英語", "数学"]
    - teachers: roster, in display order
    """

    dates: Tuple[str, ...] = ()
    periods: Tuple[str, ...] = ()
    classes: Tuple[str, ...] = ()
    subjects: Tuple[str, ...] = ()
    teachers: Tuple[Teacher, ...] = field(default_factory=tuple)

    def teacher_names(self) -> List[str]:
        return [t.name for t in self.teachers]

    def find_teacher(self, name: str) -> Optional[Teacher]:
        """First roster entry with this name, or None."""
        for t in self.teachers:
            if t.name == name:
                return t
        return None

    def iter_time_slots(self) -> Iterator[Tuple[str, str]]:
        """Every (date, period) pair, dates outer, in list order."""
        for date in self.dates:
            for period in self.periods:
                yield date, period

    def iter_slots(self) -> Iterator[Slot]:
        """Every cell of the grid, row by row."""
        for date, period in self.iter_time_slots():
            for class_name in self.classes:
                yield Slot(date, period, class_name)

    def has_slot(self, slot: Slot) -> bool:
        return (
            slot.date in self.dates
            and slot.period in self.periods
            and slot.class_name in self.classes
        )


def parse_list(raw_text: Optional[str]) -> Tuple[str, ...]:
    """
    "a, b ,, c" -> ("a", "b", "c").
    Splits on commas, trims each piece, drops the empty ones. Duplicates stay.
    """
    if not raw_text:
        return ()
    return tuple(s.strip() for s in raw_text.split(",") if s.strip())


def default_config() -> Configuration:
    """Seed values for a fresh session: the winter course."""
    subjects = ("英語", "数学", "国語", "理科", "社会")
    return Configuration(
        dates=("12/25(木)", "12/26(金)", "12/27(土)", "12/28(日)"),
        periods=("1限 (13:00~)", "2限 (14:10~)", "3限 (15:20~)"),
        classes=("Sクラス", "Aクラス", "Bクラス", "Cクラス"),
        subjects=subjects,
        teachers=(
            Teacher("堀上", ("英語",)),
            Teacher("片岡", ("数学",)),
            Teacher("井上", ("社会",)),
            Teacher("半田", ("数学", "理科")),
            Teacher("松川", ("国語",)),
            # The placeholder can stand in for anything
            Teacher(SENTINEL_TEACHER, subjects),
        ),
    )
