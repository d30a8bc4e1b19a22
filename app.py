"""
📅 COURSE TIMETABLE EDITOR
==========================
- Pick a subject, then a teacher, for every (date, period, class) cell
- Teacher lists follow the subject: only teachers ticked for it show up
- Double-booked teachers are flagged live, everywhere they appear
- Save / open the whole session as one JSON file, or print it as PDF
"""

import logging

import streamlit as st

import settings
from assignments import assign, clear_slot, get_assignment, orphaned_slots
from config_store import add_teacher, remove_teacher, set_enumeration, toggle_teacher_subject
from conflicts import describe_conflicts, find_conflicts, is_conflicted
from heatmaps import render_grid, render_teacher_load_heatmap
from logging_config import setup_logging
from models import Slot, default_config
from pdf_export import export_schedule_pdf
from storage import (
    DocumentError, LoadMode,
    dumps_document, export_filename, loads_document,
)
from ui_forms import render_enumeration_form, render_slot_cell, render_teacher_form, render_teacher_subjects


# ---------------------------------------------------------------------------
# PAGE CONFIG
# ---------------------------------------------------------------------------

st.set_page_config(page_title="冬期講習 時間割エディタ", page_icon="📅", layout="wide")
setup_logging(settings.LOG_LEVEL, settings.log_file())
logger = logging.getLogger("app")


# ---------------------------------------------------------------------------
# SESSION STATE — fresh seed on every new session
# ---------------------------------------------------------------------------

def _init_session():
    if "initialized" not in st.session_state:
        st.session_state.config = default_config()
        st.session_state.schedule = {}
        # Bumped whenever the config is replaced, so form widgets start over
        st.session_state.config_rev = 0
        st.session_state.confirm_remove = None
        st.session_state.load_mode = LoadMode.from_setting(settings.LOAD_MODE).value
        st.session_state.load_error = None
        st.session_state.load_notes = []
        st.session_state.initialized = True
        logger.info("New editing session")


_init_session()


def show_toast(msg: str) -> None:
    st.toast(msg)


# ---------------------------------------------------------------------------
# CALLBACKS — every edit swaps in a new snapshot
# ---------------------------------------------------------------------------

def _on_assign(slot: Slot, field_name: str, widget_key: str) -> None:
    value = st.session_state.get(widget_key) or ""
    st.session_state.schedule = assign(st.session_state.schedule, slot, field_name, value)


def _on_clear(slot: Slot) -> None:
    st.session_state.schedule = clear_slot(st.session_state.schedule, slot)


def _on_enumerations_saved(texts: dict) -> None:
    config = st.session_state.config
    for field_name, text in texts.items():
        config = set_enumeration(config, field_name, text)
    st.session_state.config = config
    st.session_state.config_rev += 1
    show_toast("Settings applied")
    st.rerun()


def _on_teacher_added(name: str) -> None:
    updated = add_teacher(st.session_state.config, name)
    if updated is st.session_state.config:
        return
    st.session_state.config = updated
    show_toast(f"Teacher {name.strip()} added")
    st.rerun()


def _on_teacher_toggled(teacher_index: int, subject: str) -> None:
    st.session_state.config = toggle_teacher_subject(st.session_state.config, teacher_index, subject)


def _on_teacher_removed(teacher_index: int) -> None:
    name = st.session_state.config.teachers[teacher_index].name
    st.session_state.config = remove_teacher(st.session_state.config, teacher_index)
    show_toast(f"Teacher {name} removed")
    st.rerun()


def _on_upload() -> None:
    """Runs once per newly picked file. On any failure the stores stay as they were."""
    uploaded = st.session_state.get("upload")
    if uploaded is None:
        return
    mode = LoadMode.from_setting(st.session_state.load_mode)
    try:
        result = loads_document(uploaded.getvalue(), st.session_state.config, mode)
    except DocumentError as e:
        st.session_state.load_error = f"{uploaded.name}: {e}"
        st.session_state.load_notes = []
        return
    st.session_state.config = result.config
    st.session_state.schedule = result.schedule
    st.session_state.config_rev += 1
    st.session_state.confirm_remove = None
    st.session_state.load_error = None
    st.session_state.load_notes = result.notes
    show_toast(f"Opened {uploaded.name} (version {result.generation})")


# ---------------------------------------------------------------------------
# SIDEBAR — Save / Open, master settings
# ---------------------------------------------------------------------------

config = st.session_state.config
schedule = st.session_state.schedule
conflicts = find_conflicts(config, schedule)

st.sidebar.title("💾 保存 / 📂 開く")
try:
    document_text = dumps_document(config, schedule)
except DocumentError as e:
    st.sidebar.error(str(e))
else:
    st.sidebar.download_button(
        "💾 保存",
        data=document_text.encode("utf-8"),
        file_name=export_filename(),
        mime="application/json",
        key="dl_json",
    )

st.sidebar.selectbox(
    "Load mode",
    [m.value for m in LoadMode],
    key="load_mode",
    help="strict: clear teachers that are not ticked for the cell's subject",
)
st.sidebar.file_uploader("📂 開く", type=["json"], key="upload", on_change=_on_upload)

st.sidebar.markdown("---")
st.sidebar.title("⚙️ マスタ設定")
with st.sidebar:
    render_enumeration_form(config, st.session_state.config_rev, _on_enumerations_saved)
    st.markdown("**👤 講師ごとの担当科目設定**")
    render_teacher_form(_on_teacher_added)
    render_teacher_subjects(config, _on_teacher_toggled, _on_teacher_removed)


# ---------------------------------------------------------------------------
# MAIN
# ---------------------------------------------------------------------------

st.title("📅 冬期講習 時間割エディタ")
st.markdown("*科目・講師紐づけ機能搭載*")

if st.session_state.load_error:
    st.error(f"読込エラー — {st.session_state.load_error}")
if st.session_state.load_notes:
    with st.expander(f"Loaded with {len(st.session_state.load_notes)} note(s)"):
        for note in st.session_state.load_notes:
            st.write(f"• {note}")

if conflicts:
    st.warning("Teacher double-booked:\n\n" + "\n".join(f"- {line}" for line in describe_conflicts(config, conflicts)))

orphans = orphaned_slots(config, schedule)
if orphans:
    st.caption(f"{len(orphans)} saved cell(s) refer to dates, periods or classes not in the current settings. They are kept but hidden.")

tab_grid, tab_overview, tab_pdf = st.tabs(["📝 時間割", "🔥 Overview", "📄 PDF Export"])

with tab_grid:
    if not config.classes or not config.dates or not config.periods:
        st.info("Add dates, periods and classes in the sidebar first.")
    for di, date in enumerate(config.dates):
        st.subheader(date)
        for pi, period in enumerate(config.periods):
            cols = st.columns([1] + [2] * len(config.classes))
            with cols[0]:
                st.markdown(f"**{period}**")
            for ci, class_name in enumerate(config.classes):
                slot = Slot(date, period, class_name)
                a = get_assignment(schedule, slot)
                with cols[ci + 1]:
                    if pi == 0:
                        st.caption(class_name)
                    render_slot_cell(
                        f"cell_{di}_{pi}_{ci}",
                        slot,
                        a,
                        config,
                        is_conflicted(conflicts, slot, a),
                        _on_assign,
                        _on_clear,
                    )

with tab_overview:
    if config.dates and config.periods and config.classes:
        st.dataframe(render_grid(config, schedule, conflicts), use_container_width=True)
        st.caption("Rows = date/period, Cols = classes.")
        st.dataframe(render_teacher_load_heatmap(config, schedule), use_container_width=True)
        st.caption("Rows = teachers, Cols = time slots. Number = classes at once.")
    else:
        st.info("Nothing to show yet.")

with tab_pdf:
    st.header("Export PDF")
    st.download_button(
        "📥 Download Timetable PDF",
        data=export_schedule_pdf(config, schedule, conflicts),
        file_name=export_filename(extension="pdf"),
        mime="application/pdf",
        key="dl_pdf",
    )
