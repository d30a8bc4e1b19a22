"""
🔥 GRID & LOAD VIEWS
====================
Read-only tables of the timetable for the overview tab.
Uses pandas Styler for cell coloring.
"""

import pandas as pd
from typing import List, Sequence, Set

from assignments import get_assignment
from conflicts import Conflict, is_conflicted, teacher_load
from models import Configuration, Schedule, Slot


CONFLICT_STYLE = "background-color: #ef4444; color: white;"


def _load_color(count: int, low_rgb: str = "#22c55e", mid_rgb: str = "#eab308", high_rgb: str = "#ef4444") -> str:
    """0 classes -> green, 1 -> yellow, 2+ -> red."""
    if count <= 0:
        return f"background-color: {low_rgb}; color: white;"
    if count == 1:
        return f"background-color: {mid_rgb}; color: black;"
    return f"background-color: {high_rgb}; color: white;"


def _unique_labels(labels: Sequence[str]) -> List[str]:
    """Styler needs unique labels; repeated list entries get " (2)", " (3)", ..."""
    seen = {}
    out = []
    for label in labels:
        seen[label] = seen.get(label, 0) + 1
        out.append(label if seen[label] == 1 else f"{label} ({seen[label]})")
    return out


def _grid_index(config: Configuration) -> pd.MultiIndex:
    rows = [(d, p) for d in _unique_labels(config.dates) for p in _unique_labels(config.periods)]
    return pd.MultiIndex.from_tuples(rows, names=["date", "period"])


def _cell_text(subject: str, teacher: str) -> str:
    if not subject and not teacher:
        return ""
    return f"{subject or '-'} / {teacher or '-'}"


def build_grid_frame(config: Configuration, schedule: Schedule) -> pd.DataFrame:
    """Rows = (date, period), Cols = classes, cell = "subject / teacher"."""
    data = []
    for date, period in config.iter_time_slots():
        row = []
        for class_name in config.classes:
            a = get_assignment(schedule, Slot(date, period, class_name))
            row.append(_cell_text(a.subject, a.teacher))
        data.append(row)
    return pd.DataFrame(data, index=_grid_index(config), columns=_unique_labels(config.classes))


def conflict_mask(config: Configuration, schedule: Schedule, conflicts: Set[Conflict]) -> pd.DataFrame:
    """Same shape as build_grid_frame, True where the cell is double-booked."""
    data = []
    for date, period in config.iter_time_slots():
        row = []
        for class_name in config.classes:
            slot = Slot(date, period, class_name)
            row.append(is_conflicted(conflicts, slot, get_assignment(schedule, slot)))
        data.append(row)
    return pd.DataFrame(data, index=_grid_index(config), columns=_unique_labels(config.classes), dtype=bool)


def render_grid(config: Configuration, schedule: Schedule, conflicts: Set[Conflict]):
    """Styled grid: double-booked cells in red."""
    df = build_grid_frame(config, schedule)
    styles = conflict_mask(config, schedule, conflicts).map(lambda v: CONFLICT_STYLE if v else "")
    return df.style.apply(lambda _: styles, axis=None).set_caption("Timetable (red = teacher double-booked)")


def build_load_frame(config: Configuration, schedule: Schedule) -> pd.DataFrame:
    """
    Rows = teachers (roster order, then names only found in the grid),
    Cols = "date period", value = number of classes at that time.
    """
    load = teacher_load(config, schedule)
    names = config.teacher_names()
    for counts in load.values():
        for name in counts:
            if name not in names:
                names.append(name)
    # Counts are looked up by the real name; the unique label is only the row index
    data = [
        [load[(d, p)].get(name, 0) for d, p in config.iter_time_slots()]
        for name in names
    ]
    columns = [f"{d} {p}" for d, p in _grid_index(config)]
    return pd.DataFrame(data, index=_unique_labels(names), columns=columns, dtype=int)


def render_teacher_load_heatmap(config: Configuration, schedule: Schedule):
    """Rows=teachers, Cols=time slots. Red = booked in two places at once."""
    df = build_load_frame(config, schedule)
    return df.style.map(_load_color).set_caption("Teacher Load (red = more than one class at once)")
