"""
🧠 UI FORMS — st.form() to prevent screen jump while typing
==========================================================
Forms batch inputs: no rerun until Submit. Layout stays fixed.

Grid cells and subject checkboxes are plain widgets with on_change
callbacks. Their session-state value is overwritten from the stores on
every run, so the stores stay the single source of truth (e.g. the
teacher box really shows "" after a subject change cleared it).
"""

import streamlit as st
from typing import Callable, Dict, List

from eligibility import eligible_teachers_for
from models import ENUMERATION_FIELDS, Assignment, Configuration, Slot
from config_store import enumeration_text


ENUMERATION_LABELS = {
    "dates": "日付 (カンマ区切り)",
    "periods": "時限 (カンマ区切り)",
    "classes": "クラス (カンマ区切り)",
    "subjects": "科目 (カンマ区切り)",
}


def _with_current(options: List[str], current: str) -> List[str]:
    """Keep a stored value selectable even if it's no longer in the list."""
    if current and current not in options:
        return options + [current]
    return options


def _synced(key: str, value) -> None:
    st.session_state[key] = value


def render_enumeration_form(
    config: Configuration,
    revision: int,
    on_save: Callable[[Dict[str, str]], None],
) -> None:
    """Four comma-separated text boxes. Nothing applies until Submit."""
    with st.form(f"enumerations_{revision}", clear_on_submit=False):
        texts = {}
        for field_name in ENUMERATION_FIELDS:
            texts[field_name] = st.text_area(
                ENUMERATION_LABELS[field_name],
                value=enumeration_text(config, field_name),
                key=f"enum_{field_name}_{revision}",
                height=80,
            )
        submitted = st.form_submit_button("Apply")
    if submitted:
        on_save(texts)


def render_teacher_form(on_add: Callable[[str], None]) -> None:
    """Add one teacher by name. Blank names are ignored by the store."""
    with st.form("teacher_add_form", clear_on_submit=True):
        name = st.text_input("New teacher", key="teacher_add_name", placeholder="e.g. 佐藤")
        submitted = st.form_submit_button("+ 講師追加")
    if submitted and name:
        on_add(name)


def render_teacher_subjects(
    config: Configuration,
    on_toggle: Callable[[int, str], None],
    on_remove: Callable[[int], None],
) -> None:
    """
    One row per teacher with a checkbox per subject, plus a two-step remove
    (Remove -> confirm) since removal can't be undone.
    """
    pending = st.session_state.get("confirm_remove")
    for ti, teacher in enumerate(config.teachers):
        with st.container():
            st.markdown(f"**{teacher.name}**")
            if config.subjects:
                cols = st.columns(len(config.subjects))
                for si, subject in enumerate(config.subjects):
                    key = f"ts_{ti}_{si}"
                    _synced(key, teacher.can_teach(subject))
                    with cols[si]:
                        st.checkbox(subject, key=key, on_change=on_toggle, args=(ti, subject))
            if pending == ti:
                st.warning(f"Remove {teacher.name}?")
                c1, c2 = st.columns(2)
                with c1:
                    if st.button("Yes, remove", key=f"t_rm_yes_{ti}"):
                        st.session_state.confirm_remove = None
                        on_remove(ti)
                with c2:
                    if st.button("Cancel", key=f"t_rm_no_{ti}"):
                        st.session_state.confirm_remove = None
                        st.rerun()
            elif st.button("Remove", key=f"t_rm_{ti}"):
                st.session_state.confirm_remove = ti
                st.rerun()
    st.caption("A teacher only appears in a cell's teacher list for the subjects ticked here.")


def render_slot_cell(
    cell_key: str,
    slot: Slot,
    assignment: Assignment,
    config: Configuration,
    conflicted: bool,
    on_assign: Callable[[Slot, str, str], None],
    on_clear: Callable[[Slot], None],
) -> None:
    """
    Subject box, then teacher box filtered by that subject.
    The teacher box stays disabled until a subject is picked.
    """
    subject_key = f"{cell_key}_subject"
    teacher_key = f"{cell_key}_teacher"

    subjects = _with_current([""] + list(config.subjects), assignment.subject)
    _synced(subject_key, assignment.subject)
    st.selectbox(
        "Subject",
        subjects,
        key=subject_key,
        format_func=lambda s: s or "- 科目 -",
        label_visibility="collapsed",
        on_change=on_assign,
        args=(slot, "subject", subject_key),
    )

    names = [t.name for t in eligible_teachers_for(assignment.subject, config.teachers)]
    teachers = _with_current([""] + names, assignment.teacher)
    placeholder = "- 講師を選択 -" if assignment.subject else "(科目を先に選択)"
    _synced(teacher_key, assignment.teacher)
    st.selectbox(
        "Teacher",
        teachers,
        key=teacher_key,
        format_func=lambda t: t or placeholder,
        label_visibility="collapsed",
        disabled=not assignment.subject,
        on_change=on_assign,
        args=(slot, "teacher", teacher_key),
    )
    if conflicted:
        st.markdown(":red[**⚠️ 重複**]")
    if not assignment.is_empty:
        st.button("× クリア", key=f"{cell_key}_clear", on_click=on_clear, args=(slot,))
