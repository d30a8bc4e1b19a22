"""
🗂️ CONFIGURATION STORE
======================
Edits to the lists and the teacher roster. Every function takes the
current Configuration and hands back a new one; the old one is untouched.
Existing assignments are never rewritten here, even if they now point at
something that was removed.
"""

import logging
from dataclasses import replace
from typing import Optional

from models import ENUMERATION_FIELDS, Configuration, Teacher, parse_list


logger = logging.getLogger(__name__)


def _check_index(config: Configuration, teacher_index: int) -> None:
    if not 0 <= teacher_index < len(config.teachers):
        raise IndexError(
            f"teacher index {teacher_index} out of range (roster has {len(config.teachers)})"
        )


def set_enumeration(config: Configuration, field_name: str, raw_text: Optional[str]) -> Configuration:
    """
    Replace one of dates/periods/classes/subjects from comma-separated text.
    Whitespace around items is trimmed and empty items dropped.
    """
    if field_name not in ENUMERATION_FIELDS:
        raise ValueError(f"unknown enumeration field: {field_name!r}")
    values = parse_list(raw_text)
    logger.info("Set %s to %d item(s)", field_name, len(values))
    return replace(config, **{field_name: values})


def enumeration_text(config: Configuration, field_name: str) -> str:
    """Inverse of set_enumeration for prefilling text boxes."""
    if field_name not in ENUMERATION_FIELDS:
        raise ValueError(f"unknown enumeration field: {field_name!r}")
    return ", ".join(getattr(config, field_name))


def add_teacher(config: Configuration, name: Optional[str]) -> Configuration:
    """Append a teacher with no subjects. Blank or cancelled names do nothing."""
    if not name or not name.strip():
        return config
    name = name.strip()
    logger.info("Added teacher %s", name)
    return replace(config, teachers=config.teachers + (Teacher(name, ()),))


def toggle_teacher_subject(config: Configuration, teacher_index: int, subject: str) -> Configuration:
    """Tick or untick one subject for the teacher at teacher_index."""
    _check_index(config, teacher_index)
    teacher = config.teachers[teacher_index]
    if teacher.can_teach(subject):
        subjects = tuple(s for s in teacher.subjects if s != subject)
    else:
        subjects = teacher.subjects + (subject,)
    teachers = list(config.teachers)
    teachers[teacher_index] = replace(teacher, subjects=subjects)
    return replace(config, teachers=tuple(teachers))


def remove_teacher(config: Configuration, teacher_index: int) -> Configuration:
    """Drop the teacher at teacher_index. Later teachers move up one place."""
    _check_index(config, teacher_index)
    removed = config.teachers[teacher_index]
    logger.info("Removed teacher %s", removed.name)
    teachers = config.teachers[:teacher_index] + config.teachers[teacher_index + 1:]
    return replace(config, teachers=teachers)
