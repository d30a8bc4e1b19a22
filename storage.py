"""
🧠 STORAGE — Single-file save and load
======================================
The whole session (lists, roster, grid) goes into one JSON document and
comes back out of it. Nothing is written to disk by the app itself; the
browser downloads the file and uploads it again later.

Document generations we can read:
- 0: the bare grid, {"date-period-class": {"subject": ..., "teacher": ...}}
- 2: {"version": 2, "config": {..., "teachers": ["name", ...]}, "schedule": <grid>}
- 3: {"version": 3, "config": {..., "teachers": [{"name", "subjects"}]}, "schedule": <grid>}
Only generation 3 is written.
"""

import json
import logging
from dataclasses import dataclass, field, replace
from datetime import date
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

from eligibility import is_eligible
from models import ENUMERATION_FIELDS, Assignment, Configuration, Schedule, Slot, Teacher
from settings import EXPORT_PREFIX, SENTINEL_TEACHER


logger = logging.getLogger(__name__)

CURRENT_VERSION = 3
KEY_SEPARATOR = "-"


# ---------------------------------------------------------------------------
# ERRORS
# ---------------------------------------------------------------------------


class DocumentError(Exception):
    """A document could not be saved or loaded. Nothing was changed."""


class MalformedDocumentError(DocumentError):
    """The file is not JSON (or not text at all)."""


class UnrecognizedDocumentError(DocumentError):
    """Valid JSON, but not any document shape we know."""


class SlotKeyCollisionError(DocumentError):
    """Two different slots would be written under the same key."""


# ---------------------------------------------------------------------------
# LOAD OPTIONS / RESULT
# ---------------------------------------------------------------------------


class LoadMode(Enum):
    LENIENT = "lenient"  # keep records exactly as stored
    STRICT = "strict"  # clear teachers that can't take the record's subject

    @classmethod
    def from_setting(cls, value: str) -> "LoadMode":
        try:
            return cls(value)
        except ValueError:
            logger.warning("Unknown load mode %r, using lenient", value)
            return cls.LENIENT


@dataclass
class LoadResult:
    """What a successful load produced. notes are shown to the user."""

    config: Configuration
    schedule: Schedule
    generation: int
    notes: List[str] = field(default_factory=list)


# ---------------------------------------------------------------------------
# SLOT KEYS
# ---------------------------------------------------------------------------


def slot_key(slot: Slot) -> str:
    """Slot -> "date-period-class"."""
    return KEY_SEPARATOR.join(slot)


def parse_slot_key(key: str, config: Configuration) -> Tuple[Optional[Slot], bool]:
    """
    "date-period-class" -> (Slot, resolved).

    Names may contain "-" themselves, so every way of cutting the key into
    three pieces is tried. Each cut scores one point per piece that is a
    known date, period or class; the first best-scoring cut wins, so a slot
    whose date was removed still keeps its period and class. Only when no
    piece is known anywhere is the key cut at its first two hyphens.
    resolved is False when the winner tied with another cut.
    Keys with fewer than two hyphens give (None, False).
    """
    parts = key.split(KEY_SEPARATOR)
    if len(parts) < 3:
        return None, False
    candidates = []
    for i in range(1, len(parts) - 1):
        for j in range(i + 1, len(parts)):
            candidates.append(Slot(
                KEY_SEPARATOR.join(parts[:i]),
                KEY_SEPARATOR.join(parts[i:j]),
                KEY_SEPARATOR.join(parts[j:]),
            ))
    scores = [
        (c.date in config.dates) + (c.period in config.periods) + (c.class_name in config.classes)
        for c in candidates
    ]
    best = max(scores)
    winners = [c for c, s in zip(candidates, scores) if s == best]
    if best and len(winners) > 1:
        logger.warning("Key %r matches %d slots equally well, using %s", key, len(winners), winners[0])
    return winners[0], len(winners) == 1


# ---------------------------------------------------------------------------
# WRITE
# ---------------------------------------------------------------------------


def _teacher_to_dict(t: Teacher) -> dict:
    return {"name": t.name, "subjects": list(t.subjects)}


def config_to_dict(config: Configuration) -> dict:
    """Configuration -> JSON-serializable dict (generation 3 shape)."""
    data: Dict[str, Any] = {name: list(getattr(config, name)) for name in ENUMERATION_FIELDS}
    data["teachers"] = [_teacher_to_dict(t) for t in config.teachers]
    return data


def schedule_to_dict(schedule: Schedule) -> dict:
    """Schedule -> {"date-period-class": {"subject", "teacher"}}."""
    data: Dict[str, dict] = {}
    owners: Dict[str, Slot] = {}
    for slot, a in schedule.items():
        key = slot_key(slot)
        if key in owners:
            raise SlotKeyCollisionError(
                f"{owners[key]} and {slot} would both be saved as {key!r}; "
                f"rename a date, period or class so it has no '{KEY_SEPARATOR}'"
            )
        owners[key] = slot
        data[key] = {"subject": a.subject, "teacher": a.teacher}
    return data


def serialize(config: Configuration, schedule: Schedule) -> dict:
    """Build the current-generation document."""
    return {
        "version": CURRENT_VERSION,
        "config": config_to_dict(config),
        "schedule": schedule_to_dict(schedule),
    }


def dumps_document(config: Configuration, schedule: Schedule) -> str:
    """Pretty-printed JSON text, ready for download."""
    return json.dumps(serialize(config, schedule), indent=2, ensure_ascii=False)


def export_filename(today: Optional[date] = None, extension: str = "json") -> str:
    """e.g. schedule_v3_2025-12-20.json"""
    today = today or date.today()
    return f"{EXPORT_PREFIX}{today.isoformat()}.{extension}"


# ---------------------------------------------------------------------------
# READ — structural validators, newest first
# ---------------------------------------------------------------------------


def _is_str_list(value: Any) -> bool:
    return isinstance(value, list) and all(isinstance(v, str) for v in value)


def _enumerations(config_data: Any) -> Optional[Dict[str, Tuple[str, ...]]]:
    """The four plain lists, or None if any is missing or not a list of strings."""
    if not isinstance(config_data, dict):
        return None
    out = {}
    for name in ENUMERATION_FIELDS:
        if not _is_str_list(config_data.get(name)):
            return None
        out[name] = tuple(config_data[name])
    return out


def _text(value: Any) -> Optional[str]:
    """Record field -> str. Missing/null is "", anything else non-text is invalid."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return None


def _raw_records(data: Any) -> Optional[Dict[str, Assignment]]:
    """{"key": {"subject", "teacher"}} -> {"key": Assignment}, or None if not that shape."""
    if not isinstance(data, dict):
        return None
    records = {}
    for key, value in data.items():
        if not isinstance(value, dict):
            return None
        subject = _text(value.get("subject"))
        teacher = _text(value.get("teacher"))
        if subject is None or teacher is None:
            return None
        records[key] = Assignment(subject=subject, teacher=teacher)
    return records


def _generation3_config(config_data: Any) -> Optional[Configuration]:
    lists = _enumerations(config_data)
    if lists is None or not isinstance(config_data.get("teachers"), list):
        return None
    teachers = []
    for t in config_data["teachers"]:
        if not isinstance(t, dict) or not isinstance(t.get("name"), str):
            return None
        subjects = t.get("subjects", [])
        if not _is_str_list(subjects):
            return None
        teachers.append(Teacher(name=t["name"], subjects=tuple(subjects)))
    return Configuration(teachers=tuple(teachers), **lists)


def _generation2_config(config_data: Any) -> Optional[Configuration]:
    """
    Roster of plain names. Generation 2 had no per-teacher subjects, so
    every teacher could take every subject; that is kept here.
    """
    lists = _enumerations(config_data)
    if lists is None or not _is_str_list(config_data.get("teachers")):
        return None
    teachers = tuple(Teacher(name=n, subjects=lists["subjects"]) for n in config_data["teachers"])
    return Configuration(teachers=teachers, **lists)


# generation -> validator for the "config" part of a config+schedule document
CONFIG_VALIDATORS: List[Tuple[int, Callable[[Any], Optional[Configuration]]]] = [
    (3, _generation3_config),
    (2, _generation2_config),
]


def _detect(raw: Any, current_config: Configuration) -> Tuple[int, Configuration, Dict[str, Assignment]]:
    """Work out which generation raw is. Raises UnrecognizedDocumentError."""
    if isinstance(raw, dict) and "config" in raw and "schedule" in raw:
        records = _raw_records(raw["schedule"])
        if records is not None:
            for generation, validator in CONFIG_VALIDATORS:
                config = validator(raw["config"])
                if config is not None:
                    return generation, config, records
        raise UnrecognizedDocumentError(
            "The file has config and schedule sections, but their contents are not in a known format."
        )
    records = _raw_records(raw)
    if records is not None:
        return 0, current_config, records
    raise UnrecognizedDocumentError("The file is not a timetable document this editor can read.")


def _strict_repair(config: Configuration, schedule: Schedule, notes: List[str]) -> Schedule:
    """Clear teachers that may not take their record's subject."""
    repaired = dict(schedule)
    for slot, a in schedule.items():
        if a.teacher == SENTINEL_TEACHER:
            continue
        if not is_eligible(a.teacher, a.subject, config.teachers):
            repaired[slot] = replace(a, teacher="")
            notes.append(f"{slot_key(slot)}: cleared {a.teacher} (not eligible for {a.subject})")
    return repaired


def deserialize(
    raw: Any,
    current_config: Configuration,
    mode: LoadMode = LoadMode.LENIENT,
) -> LoadResult:
    """
    Turn parsed JSON into (config, schedule).
    A bare grid keeps current_config; the other generations bring their own.
    """
    generation, config, records = _detect(raw, current_config)
    notes: List[str] = []

    stated = raw.get("version") if generation else None
    if generation and stated != generation:
        notes.append(f"File says version {stated!r} but is laid out as version {generation}")
    if generation == 2:
        notes.append("Teacher list upgraded from version 2: every teacher may take every subject")

    schedule: Schedule = {}
    for key, a in records.items():
        slot, resolved = parse_slot_key(key, config)
        if slot is None:
            notes.append(f"Skipped {key!r}: not a date-period-class key")
            continue
        if not resolved:
            notes.append(f"{key!r} is ambiguous, read as {slot.date} / {slot.period} / {slot.class_name}")
        schedule[slot] = a

    if mode is LoadMode.STRICT:
        schedule = _strict_repair(config, schedule, notes)

    logger.info(
        "Loaded generation %d document: %d slot(s), %d teacher(s), %d note(s)",
        generation, len(schedule), len(config.teachers), len(notes),
    )
    return LoadResult(config=config, schedule=schedule, generation=generation, notes=notes)


def loads_document(
    text: Union[str, bytes],
    current_config: Configuration,
    mode: LoadMode = LoadMode.LENIENT,
) -> LoadResult:
    """Parse JSON text and deserialize it. Raises DocumentError on failure."""
    try:
        if isinstance(text, bytes):
            text = text.decode("utf-8-sig")
        raw = json.loads(text)
    except (ValueError, RecursionError) as e:
        logger.warning("Rejected document: %s", e)
        raise MalformedDocumentError(f"Could not read the file as JSON: {e}") from e
    try:
        return deserialize(raw, current_config, mode)
    except UnrecognizedDocumentError as e:
        logger.warning("Rejected document: %s", e)
        raise
