"""Render a LearningReport to PDF with PyMuPDF.

Layout: coloured header band, six overview cards, module / project /
achievement tables and a footer with page numbers on every page. Chinese
reports use the built-in ``china-s`` CJK font so no font files are needed.
"""

import logging

import pymupdf as fitz

from .schemas import LearningReport
from .translations import ReportLabels, get_labels


logger = logging.getLogger(__name__)

Color = tuple[float, float, float]


def _rgb(red: int, green: int, blue: int) -> Color:
    return (red / 255, green / 255, blue / 255)


PRIMARY = _rgb(139, 92, 246)
SECONDARY = _rgb(59, 130, 246)
SUCCESS = _rgb(34, 197, 94)
WARNING = _rgb(234, 179, 8)
DANGER = _rgb(239, 68, 68)
MUTED = _rgb(107, 114, 128)
DARK = _rgb(31, 41, 55)
LIGHT = _rgb(249, 250, 251)
WHITE = (1.0, 1.0, 1.0)

PAGE_WIDTH, PAGE_HEIGHT = fitz.paper_size("a4")
MARGIN = 56
HEADER_HEIGHT = 142
CARD_GAP = 14
CARD_HEIGHT = 70
ROW_HEIGHT = 20
TABLE_FONT_SIZE = 9


class ReportRenderer:
    def __init__(self, report: LearningReport) -> None:
        self.report = report
        self.labels: ReportLabels = get_labels(report.locale)
        if report.locale == "zh":
            self.font = self.bold_font = "china-s"
        else:
            self.font, self.bold_font = "helv", "hebo"
        self.doc = fitz.open()
        self.page = self.doc.new_page(width=PAGE_WIDTH, height=PAGE_HEIGHT)
        self.y = MARGIN

    # Primitives

    def _text(self, x: float, y: float, text: str, size: float, color: Color, bold: bool = False) -> None:
        self.page.insert_text((x, y), text, fontsize=size, fontname=self.bold_font if bold else self.font, color=color)

    def _text_box(
        self,
        rect: fitz.Rect,
        text: str,
        size: float,
        color: Color,
        align: int = fitz.TEXT_ALIGN_LEFT,
        bold: bool = False,
    ) -> None:
        self.page.insert_textbox(
            rect, text, fontsize=size, fontname=self.bold_font if bold else self.font, color=color, align=align
        )

    def _new_page(self) -> None:
        self.page = self.doc.new_page(width=PAGE_WIDTH, height=PAGE_HEIGHT)
        self.y = MARGIN

    def _ensure_space(self, height: float) -> None:
        if self.y + height > PAGE_HEIGHT - MARGIN:
            self._new_page()

    def _section_title(self, title: str) -> None:
        self._ensure_space(60)
        self._text(MARGIN, self.y, title, 16, DARK, bold=True)
        self.y += 12

    # Sections

    def header(self) -> None:
        self.page.draw_rect(fitz.Rect(0, 0, PAGE_WIDTH, HEADER_HEIGHT), color=None, fill=PRIMARY)
        labels = self.labels
        generated = self.report.generated_at.date().isoformat()
        self._text_box(fitz.Rect(0, 40, PAGE_WIDTH, 75), labels.title, 24, WHITE, fitz.TEXT_ALIGN_CENTER, bold=True)
        self._text_box(fitz.Rect(0, 78, PAGE_WIDTH, 98), labels.subtitle, 12, WHITE, fitz.TEXT_ALIGN_CENTER)
        self._text_box(
            fitz.Rect(0, 104, PAGE_WIDTH, 122),
            f"{self.report.user_name} | {labels.generated_at}: {generated}",
            10,
            WHITE,
            fitz.TEXT_ALIGN_CENTER,
        )
        self.y = HEADER_HEIGHT + 30

    def overview(self) -> None:
        report, labels = self.report, self.labels
        self._section_title(labels.overview)
        cards = [
            (labels.total_progress, f"{report.total_progress}%", PRIMARY),
            (labels.completed_topics, f"{report.completed_topics}/{report.total_topics}", SECONDARY),
            (labels.completed_modules, f"{report.completed_modules}/{report.total_modules}", SUCCESS),
            (labels.completed_projects, f"{report.completed_projects}/{report.total_projects}", WARNING),
            (labels.current_streak, f"{report.current_streak} {labels.days}", DANGER),
            (labels.longest_streak, f"{report.longest_streak} {labels.days}", PRIMARY),
        ]
        card_width = (PAGE_WIDTH - MARGIN * 2 - CARD_GAP) / 2
        for index in range(0, len(cards), 2):
            for column, (label, value, color) in enumerate(cards[index : index + 2]):
                x = MARGIN + column * (card_width + CARD_GAP)
                self.page.draw_rect(
                    fitz.Rect(x, self.y, x + card_width, self.y + CARD_HEIGHT), color=None, fill=LIGHT, radius=0.1
                )
                self._text(x + 14, self.y + 22, label, 10, MUTED)
                self._text(x + 14, self.y + 54, value, 18, color, bold=True)
            self.y += CARD_HEIGHT + CARD_GAP
        self.y += 16

    def table(self, title: str, head: list[str], rows: list[list[str]], widths: list[float], color: Color) -> None:
        """Striped table; the header row is repeated after a page break."""
        self._section_title(title)
        scale = (PAGE_WIDTH - MARGIN * 2) / sum(widths)
        columns = [width * scale for width in widths]

        def draw_row(cells: list[str], fill: Color | None, text_color: Color, bold: bool = False) -> None:
            if fill is not None:
                self.page.draw_rect(
                    fitz.Rect(MARGIN, self.y, PAGE_WIDTH - MARGIN, self.y + ROW_HEIGHT), color=None, fill=fill
                )
            x = MARGIN
            for cell, width in zip(cells, columns, strict=False):
                cell_rect = fitz.Rect(x + 6, self.y + 5, x + width - 4, self.y + ROW_HEIGHT)
                self._text_box(cell_rect, cell, TABLE_FONT_SIZE, text_color, bold=bold)
                x += width
            self.y += ROW_HEIGHT

        draw_row(head, color, WHITE, bold=True)
        if not rows:
            draw_row([self.labels.no_data], None, MUTED)
        for index, cells in enumerate(rows):
            if self.y + ROW_HEIGHT > PAGE_HEIGHT - MARGIN:
                self._new_page()
                draw_row(head, color, WHITE, bold=True)
            draw_row(cells, LIGHT if index % 2 else None, DARK)
        self.y += 30

    def footer(self) -> None:
        total = self.doc.page_count
        for number, page in enumerate(self.doc, start=1):
            band = fitz.Rect(MARGIN, PAGE_HEIGHT - 36, PAGE_WIDTH - MARGIN, PAGE_HEIGHT - 20)
            pieces = ((self.labels.footer, fitz.TEXT_ALIGN_CENTER), (f"{number}/{total}", fitz.TEXT_ALIGN_RIGHT))
            for text, align in pieces:
                page.insert_textbox(band, text, fontsize=8, fontname=self.font, color=MUTED, align=align)

    def render(self) -> bytes:
        report, labels = self.report, self.labels
        try:
            self.header()
            self.overview()
            self.table(
                labels.module_progress,
                [labels.module, labels.level, labels.progress, labels.status],
                [
                    [row.name, row.level, f"{row.completed_topics}/{row.total_topics} ({row.percentage}%)", row.status]
                    for row in report.modules
                ],
                [3, 2, 2, 2],
                PRIMARY,
            )
            self.table(
                labels.project_progress,
                [labels.project, labels.difficulty, labels.status],
                [[row.name, row.difficulty, row.status] for row in report.projects],
                [4, 2, 2],
                SECONDARY,
            )
            if report.achievements:
                self.table(
                    labels.achievements,
                    [labels.achievement_name, labels.achievement_description],
                    [[row.name, row.description] for row in report.achievements],
                    [1, 2],
                    SUCCESS,
                )
            self.footer()
            return self.doc.tobytes(garbage=3, deflate=True)
        finally:
            self.doc.close()


def render_learning_report(report: LearningReport) -> bytes:
    data = ReportRenderer(report).render()
    logger.info("Rendered %s learning report (%d bytes)", report.locale, len(data))
    return data
