from __future__ import annotations

import re
from datetime import date, datetime
from io import BytesIO
from typing import Any
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.pdfgen import canvas
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from ..core.constants import BRAND_NAME
from .service import ReportData

HEADER_FILL = colors.HexColor("#475569")
STRIPE_FILL = colors.HexColor("#f8fafc")
RULE_COLOR = colors.HexColor("#c8c8c8")


def report_filename(title: str, day: date) -> str:
    """`Relatório Diário` on 2024-05-02 -> `Relatório_Diário_2024-05-02.pdf`."""
    stem = re.sub(r"\s+", "_", title.strip())
    return f"{stem}_{day.isoformat()}.pdf"


def cell_text(value: Any) -> str:
    if value is None or value == "":
        return "-"
    return str(value)


class _NumberedCanvas(canvas.Canvas):
    """Defers page drawing so the footer can say `Página i de n`."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._saved_pages: list[dict] = []

    def showPage(self):
        self._saved_pages.append(dict(self.__dict__))
        self._startPage()

    def save(self):
        total = len(self._saved_pages)
        for state in self._saved_pages:
            self.__dict__.update(state)
            self._draw_footer(total)
            super().showPage()
        super().save()

    def _draw_footer(self, total: int) -> None:
        width, _ = self._pagesize
        self.setFont("Helvetica", 8)
        self.setFillColor(colors.HexColor("#969696"))
        self.drawCentredString(
            width / 2,
            10 * mm,
            f"Página {self._pageNumber} de {total} - {BRAND_NAME} Sistema de Controle de Refeições",
        )


def _styles():
    styles = getSampleStyleSheet()
    styles.add(ParagraphStyle(name="Marca", parent=styles["Heading1"], fontSize=20, textColor=colors.HexColor("#282828")))
    styles.add(ParagraphStyle(name="TituloRelatorio", parent=styles["Heading2"], fontSize=16, spaceAfter=4))
    styles.add(ParagraphStyle(name="Subtitulo", parent=styles["Normal"], fontSize=12, textColor=colors.HexColor("#646464")))
    styles.add(ParagraphStyle(name="Info", parent=styles["Normal"], fontSize=10, textColor=colors.HexColor("#646464")))
    styles.add(ParagraphStyle(name="Vazio", parent=styles["Normal"], fontSize=10, alignment=TA_CENTER))
    return styles


def render_pdf(report: ReportData) -> bytes:
    """Render a report as an A4 PDF and return its bytes."""
    buffer = BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=A4,
        topMargin=20 * mm,
        bottomMargin=20 * mm,
        leftMargin=20 * mm,
        rightMargin=20 * mm,
        title=report.title,
        author=report.admin_name,
    )
    styles = _styles()
    generated_at = report.generated_at or datetime.now()

    elements: list = [
        Paragraph(BRAND_NAME, styles["Marca"]),
        Paragraph(escape(report.title), styles["TituloRelatorio"]),
        Paragraph(escape(report.subtitle), styles["Subtitulo"]),
        Spacer(1, 8),
        Paragraph(f"Gerado por: {escape(report.admin_name)}", styles["Info"]),
        Paragraph(f"Data/Hora: {generated_at.strftime('%d/%m/%Y %H:%M:%S')}", styles["Info"]),
        Spacer(1, 4),
    ]

    rule = Table([[""]], colWidths=[doc.width], rowHeights=[1])
    rule.setStyle(TableStyle([("LINEBELOW", (0, 0), (-1, -1), 0.5, RULE_COLOR)]))
    elements.extend([rule, Spacer(1, 10)])

    if not report.rows:
        elements.append(Paragraph("Nenhum registro encontrado.", styles["Vazio"]))
    else:
        data = [[header for header, _ in report.columns]]
        for row in report.rows:
            data.append([cell_text(row.get(key)) for _, key in report.columns])

        table = Table(data, repeatRows=1)
        table.setStyle(
            TableStyle(
                [
                    ("BACKGROUND", (0, 0), (-1, 0), HEADER_FILL),
                    ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
                    ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
                    ("FONTSIZE", (0, 0), (-1, -1), 9),
                    ("ROWBACKGROUNDS", (0, 1), (-1, -1), [colors.white, STRIPE_FILL]),
                    ("GRID", (0, 0), (-1, -1), 0.25, RULE_COLOR),
                    ("TOPPADDING", (0, 0), (-1, -1), 3),
                    ("BOTTOMPADDING", (0, 0), (-1, -1), 3),
                    ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
                ]
            )
        )
        elements.append(table)

    doc.build(elements, canvasmaker=_NumberedCanvas)
    return buffer.getvalue()
