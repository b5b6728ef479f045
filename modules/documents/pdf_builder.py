"""
Сборка PDF-документов на ReportLab: фирменная шапка, подвал с номером
страницы и общие блоки писем.
"""

import io
from datetime import date, datetime
from typing import List, Optional, Sequence, Tuple
from xml.sax.saxutils import escape

from loguru import logger
from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER, TA_JUSTIFY, TA_RIGHT
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from config.settings import CompanyConfig, config
from core.date_utils import format_date_id
from core.exceptions import DocumentGenerationError
from modules.documents.formatters import display

PAGE_WIDTH, PAGE_HEIGHT = A4
SIDE_MARGIN = 14 * mm
LETTERHEAD_HEIGHT = 48 * mm
ACCENT_COLOR = colors.HexColor("#0F766E")


def text(value: Optional[object]) -> str:
    """Значение для Paragraph: прочерк для пустых, экранирование разметки, переносы строк"""
    return escape(display(value)).replace("\n", "<br/>")


class DocumentBuilder:
    """Общий каркас документа A4"""

    def __init__(
        self,
        company: Optional[CompanyConfig] = None,
        printed_at: Optional[datetime] = None,
        letterhead: bool = True
    ):
        self.company = company or config.company
        self.printed_at = printed_at or datetime.now()
        self.letterhead = letterhead
        self.styles = getSampleStyleSheet()
        self._setup_custom_styles()

    def _setup_custom_styles(self):
        self.styles.add(ParagraphStyle(
            'DocTitle',
            parent=self.styles['Normal'],
            fontSize=14,
            fontName='Helvetica-Bold',
            alignment=TA_CENTER,
            spaceBefore=6,
            spaceAfter=12,
        ))
        self.styles.add(ParagraphStyle(
            'LetterBody',
            parent=self.styles['Normal'],
            fontSize=11,
            leading=15,
            alignment=TA_JUSTIFY,
            spaceAfter=8,
        ))
        self.styles.add(ParagraphStyle(
            'Centered',
            parent=self.styles['Normal'],
            fontSize=11,
            leading=15,
            alignment=TA_CENTER,
        ))
        self.styles.add(ParagraphStyle(
            'RightAligned',
            parent=self.styles['Normal'],
            fontSize=11,
            alignment=TA_RIGHT,
        ))
        self.styles.add(ParagraphStyle(
            'SectionHeading',
            parent=self.styles['Normal'],
            fontSize=11,
            fontName='Helvetica-Bold',
            textColor=ACCENT_COLOR,
            spaceBefore=10,
            spaceAfter=4,
        ))

    # --- холст ---

    def _draw_letterhead(self, canvas_obj, doc):
        company = self.company
        top = PAGE_HEIGHT - 20 * mm
        canvas_obj.setFont('Helvetica-Bold', 16)
        canvas_obj.drawCentredString(PAGE_WIDTH / 2, top, company.name)
        canvas_obj.setFont('Helvetica', 10)
        canvas_obj.drawCentredString(PAGE_WIDTH / 2, top - 7 * mm, company.address)
        canvas_obj.drawCentredString(
            PAGE_WIDTH / 2, top - 13 * mm, f"Telp: {company.phone} | Email: {company.email}"
        )
        if company.website:
            canvas_obj.drawCentredString(PAGE_WIDTH / 2, top - 19 * mm, company.website)

        line_y = PAGE_HEIGHT - 45 * mm
        canvas_obj.setLineWidth(1.4)
        canvas_obj.line(SIDE_MARGIN, line_y, PAGE_WIDTH - SIDE_MARGIN, line_y)
        canvas_obj.setLineWidth(0.5)
        canvas_obj.line(SIDE_MARGIN, line_y - 1 * mm, PAGE_WIDTH - SIDE_MARGIN, line_y - 1 * mm)

    def _draw_footer(self, canvas_obj, doc):
        canvas_obj.setFont('Helvetica', 8)
        canvas_obj.setFillColor(colors.gray)
        printed = f"{format_date_id(self.printed_at)} {self.printed_at.strftime('%H:%M')}"
        canvas_obj.drawString(SIDE_MARGIN, 10 * mm, f"Dicetak pada: {printed}")
        canvas_obj.drawRightString(
            PAGE_WIDTH - SIDE_MARGIN, 10 * mm, f"Halaman {canvas_obj.getPageNumber()}"
        )

    def _on_page(self, canvas_obj, doc):
        canvas_obj.saveState()
        if self.letterhead:
            self._draw_letterhead(canvas_obj, doc)
        self._draw_footer(canvas_obj, doc)
        canvas_obj.restoreState()

    def build(self, story: List, title: str) -> bytes:
        """Сборка документа в байты PDF"""
        buffer = io.BytesIO()
        doc = SimpleDocTemplate(
            buffer,
            pagesize=A4,
            title=title,
            author=self.company.name,
            leftMargin=SIDE_MARGIN,
            rightMargin=SIDE_MARGIN,
            topMargin=LETTERHEAD_HEIGHT + 6 * mm if self.letterhead else 20 * mm,
            bottomMargin=20 * mm,
        )
        try:
            doc.build(story, onFirstPage=self._on_page, onLaterPages=self._on_page)
        except Exception as e:
            logger.error(f"Ошибка при формировании документа '{title}': {e}", exc_info=True)
            raise DocumentGenerationError(f"Gagal membuat dokumen {title}: {e}") from e
        pdf = buffer.getvalue()
        logger.info(f"Документ '{title}' сформирован: {len(pdf)} байт")
        return pdf

    # --- блоки ---

    def paragraph(self, content: str, style: str = 'LetterBody') -> Paragraph:
        return Paragraph(content, self.styles[style])

    def title(self, content: str) -> Paragraph:
        return self.paragraph(f"<u>{escape(content)}</u>", 'DocTitle')

    def letter_meta(self, number: str, when: date, attachment: str, subject: str) -> Table:
        rows = [
            ("Nomor", number),
            ("Tanggal", format_date_id(when)),
            ("Lampiran", attachment),
            ("Perihal", subject),
        ]
        return self.field_table(rows, label_width=25 * mm)

    def recipient(self, lines: Sequence[Optional[str]]) -> List:
        """Блок адресата; первая строка (имя) выделяется"""
        story = [self.paragraph("Kepada Yth.", 'Normal')]
        for index, line in enumerate(line for line in lines if line):
            content = f"<b>{escape(line)}</b>" if index == 0 else escape(line)
            story.append(self.paragraph(content, 'Normal'))
        story.append(self.spacer(4))
        return story

    def field_table(self, rows: Sequence[Tuple[str, object]], label_width: float = 40 * mm) -> Table:
        """Таблица «метка : значение» без рамок"""
        data = [
            [self.paragraph(escape(label)), self.paragraph(":"), self.paragraph(text(value))]
            for label, value in rows
        ]
        table = Table(data, colWidths=[label_width, 5 * mm, None], hAlign='LEFT')
        table.setStyle(TableStyle([
            ('VALIGN', (0, 0), (-1, -1), 'TOP'),
            ('LEFTPADDING', (0, 0), (-1, -1), 0),
            ('BOTTOMPADDING', (0, 0), (-1, -1), 0),
            ('TOPPADDING', (0, 0), (-1, -1), 0),
        ]))
        return table

    def signature(self, when: date, closing: str, name: str, position: Optional[str]) -> Table:
        """Подпись справа: город и дата, приветствие, место для подписи, имя и должность"""
        lines = [
            f"{escape(self.company.city)}, {format_date_id(when)}",
            escape(closing),
            "<br/><br/><br/>",
            f"<b><u>{escape(name)}</u></b>",
        ]
        if position:
            lines.append(escape(position))
        cell = [self.paragraph(line, 'Normal') for line in lines]
        table = Table([["", cell]], colWidths=[None, 70 * mm])
        table.setStyle(TableStyle([('VALIGN', (0, 0), (-1, -1), 'TOP')]))
        return table

    @staticmethod
    def spacer(height_mm: float = 6) -> Spacer:
        return Spacer(1, height_mm * mm)
