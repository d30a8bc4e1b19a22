"""
🧠 PDF EXPORT — Baby-level explanation
======================================
Turns the grid into a clean, printable PDF.
- One table per date: rows = periods, columns = classes
- Each cell shows "subject / teacher"
- Double-booked cells are tinted red so they stand out on paper
- A4 landscape, light theme
"""

import logging
from io import BytesIO
from typing import List, Set, Tuple
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.units import cm
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.cidfonts import UnicodeCIDFont
from reportlab.platypus import SimpleDocTemplate, Table, TableStyle, Paragraph, Spacer

from assignments import get_assignment
from conflicts import Conflict, is_conflicted
from models import Configuration, Schedule, Slot


logger = logging.getLogger(__name__)

# Built into reportlab, covers Japanese names and dates without font files
FONT_NAME = "HeiseiKakuGo-W5"
CONFLICT_TINT = colors.HexColor("#fecaca")


def _register_font() -> str:
    if FONT_NAME not in pdfmetrics.getRegisteredFontNames():
        pdfmetrics.registerFont(UnicodeCIDFont(FONT_NAME))
    return FONT_NAME


def _light_theme_table_style(font: str, conflict_cells: List[Tuple[int, int]]) -> TableStyle:
    """Light theme: white/gray grid, black text, red tint on conflicts."""
    commands = [
        ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#f0f0f0")),
        ("BACKGROUND", (0, 1), (0, -1), colors.HexColor("#f0f0f0")),
        ("TEXTCOLOR", (0, 0), (-1, -1), colors.black),
        ("ALIGN", (0, 0), (-1, -1), "CENTER"),
        ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
        ("FONTNAME", (0, 0), (-1, -1), font),
        ("FONTSIZE", (0, 0), (-1, 0), 10),
        ("FONTSIZE", (0, 1), (-1, -1), 9),
        ("GRID", (0, 0), (-1, -1), 0.5, colors.HexColor("#cccccc")),
    ]
    for col, row in conflict_cells:
        commands.append(("BACKGROUND", (col, row), (col, row), CONFLICT_TINT))
    return TableStyle(commands)


def export_schedule_pdf(config: Configuration, schedule: Schedule, conflicts: Set[Conflict]) -> bytes:
    """Creates a PDF with one table per date. Returns the file bytes."""
    font = _register_font()
    buffer = BytesIO()
    doc = SimpleDocTemplate(buffer, pagesize=landscape(A4), leftMargin=1.5*cm, rightMargin=1.5*cm)
    styles = getSampleStyleSheet()
    heading = ParagraphStyle("DateHeading", parent=styles["Heading2"], fontName=font)
    body = ParagraphStyle("Body", parent=styles["Normal"], fontName=font)
    story = []

    if not config.dates or not config.periods or not config.classes:
        story.append(Paragraph("No dates, periods or classes configured.", body))

    usable = landscape(A4)[0] - 3*cm
    first_col = 3.5*cm
    class_col = (usable - first_col) / max(1, len(config.classes))

    for date in config.dates if config.classes else ():
        rows = [[""] + list(config.classes)]
        conflict_cells = []
        for r, period in enumerate(config.periods, start=1):
            row = [period]
            for c, class_name in enumerate(config.classes, start=1):
                slot = Slot(date, period, class_name)
                a = get_assignment(schedule, slot)
                row.append(f"{a.subject}\n{a.teacher}" if not a.is_empty else "")
                if is_conflicted(conflicts, slot, a):
                    conflict_cells.append((c, r))
            rows.append(row)

        t = Table(rows, colWidths=[first_col] + [class_col] * len(config.classes))
        t.setStyle(_light_theme_table_style(font, conflict_cells))
        story.append(Paragraph(escape(date), heading))
        story.append(Spacer(1, 0.3*cm))
        story.append(t)
        story.append(Spacer(1, 0.8*cm))

    doc.build(story)
    logger.info("Exported PDF for %d date(s)", len(config.dates))
    return buffer.getvalue()
