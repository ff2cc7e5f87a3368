import asyncio
import io
import logging
import os
from datetime import datetime
from typing import List, Optional, Tuple

# ReportLab Imports
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4, letter
from reportlab.lib.utils import ImageReader, simpleSplit
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont
from reportlab.pdfgen import canvas as pdf_canvas

# Domain
from quotebuilder.pdf.config import PDFSettings, pdf_settings
from quotebuilder.pdf.domain.exceptions import AssetLoadError, PDFGenerationException
from quotebuilder.pdf.domain.formatting import (
    INCH,
    describe_item,
    format_date,
    format_notes,
    order_pdf_filename,
)
from quotebuilder.pdf.domain.generator import AbstractPDFGenerator, OrderDocument, RenderedDocument
from quotebuilder.pdf.domain.images import resolve_item_image
from quotebuilder.pdf.domain.layout import ItemPlacement, PageCursor

logger = logging.getLogger(__name__)

CUSTOM_FONT_NAME = "QuoteBuilderFont"
BASE_FONT = "Helvetica"
BOLD_FONT = "Helvetica-Bold"
# Police standard qui porte le glyphe ″ ("second")
SYMBOL_FONT = "Symbol"
PRIMARY_COLOR = colors.HexColor("#2f3b45")
LOGO_WIDTH = 108.0
LOGO_HEIGHT = 54.0


class ReportLabPDFGenerator(AbstractPDFGenerator):
    """Implémentation du générateur PDF utilisant le canvas ReportLab.

    La mise en page est manuelle (PageCursor) afin de garder chaque article
    d'un seul tenant: image à gauche, description à droite, note en dessous.
    """

    def __init__(self, settings: Optional[PDFSettings] = None):
        self.settings = settings or pdf_settings
        self.font_name = BASE_FONT
        self.bold_font_name = BOLD_FONT
        if self.settings.FONT_PATH:
            self._register_font(self.settings.FONT_PATH)
        logger.info(f"[ReportLabPDFGenerator] Initialisé (police: {self.font_name}).")

    def _register_font(self, font_path: str) -> None:
        try:
            pdfmetrics.registerFont(TTFont(CUSTOM_FONT_NAME, font_path))
        except Exception as e:
            logger.error(f"[ReportLabPDFGenerator] Police {font_path} inutilisable: {e}", exc_info=True)
            raise PDFGenerationException(f"Police '{font_path}' inutilisable: {e}", original_exception=e)
        self.font_name = CUSTOM_FONT_NAME
        self.bold_font_name = CUSTOM_FONT_NAME

    @property
    def page_size(self) -> Tuple[float, float]:
        return A4 if self.settings.PAGE_SIZE.upper() == "A4" else letter

    def _draw_text(self, c: pdf_canvas.Canvas, x: float, y: float, text: str, font_name: str, size: float) -> None:
        """Dessine une ligne; avec les polices standard, ″ est pris dans la police Symbol."""
        c.setFont(font_name, size)
        if font_name == CUSTOM_FONT_NAME or INCH not in text:
            c.drawString(x, y, text)
            return
        for i, part in enumerate(text.split(INCH)):
            if i:
                c.setFont(SYMBOL_FONT, size)
                c.drawString(x, y, INCH)
                x += pdfmetrics.stringWidth(INCH, SYMBOL_FONT, size)
                c.setFont(font_name, size)
            if part:
                c.drawString(x, y, part)
                x += pdfmetrics.stringWidth(part, font_name, size)

    def _load_image(self, relative_path: str) -> ImageReader:
        """Lecture bloquante d'une image d'article (exécutée dans un thread)."""
        full_path = os.path.join(self.settings.ASSETS_DIR, relative_path)
        if not os.path.isfile(full_path):
            raise AssetLoadError(full_path)
        try:
            reader = ImageReader(full_path)
            reader.getSize()
        except Exception as e:
            raise AssetLoadError(full_path, original_exception=e)
        return reader

    def _wrap(self, text: str, font_name: str, width: float) -> List[str]:
        return simpleSplit(text, font_name, self.settings.FONT_SIZE, width)

    def _draw_runs(self, c: pdf_canvas.Canvas, x: float, y: float, runs: List[Tuple[str, colors.Color]]) -> None:
        """Dessine une ligne par run, en descendant de LINE_HEIGHT depuis la ligne de base `y`."""
        for text, color in runs:
            c.setFillColor(color)
            self._draw_text(c, x, y, text, self.font_name, self.settings.FONT_SIZE)
            y -= self.settings.LINE_HEIGHT
        c.setFillColor(colors.black)

    async def generate_order_pdf(self, order: OrderDocument) -> RenderedDocument:
        logger.info(
            f"[PDFGen] Génération bon de commande '{order.job_name}' ({len(order.items)} articles)."
        )
        try:
            return await self._render(order)
        except PDFGenerationException:
            raise
        except Exception as e:
            logger.error(f"[PDFGen] Erreur ReportLab pour '{order.job_name}': {e}", exc_info=True)
            raise PDFGenerationException(f"Erreur lors de la construction du PDF: {e}", original_exception=e)

    async def _render(self, order: OrderDocument) -> RenderedDocument:
        s = self.settings
        page_width, page_height = self.page_size
        content_width = page_width - 2 * s.MARGIN
        text_x = s.MARGIN + s.IMAGE_SIZE + s.GUTTER
        text_width = content_width - s.IMAGE_SIZE - s.GUTTER

        buffer = io.BytesIO()
        c = pdf_canvas.Canvas(buffer, pagesize=(page_width, page_height))
        c.setTitle(f"{s.TITLE} - {order.job_name}")
        cursor = PageCursor(page_height - 2 * s.MARGIN)

        def y_of(offset: float) -> float:
            return page_height - s.MARGIN - offset

        # --- 1. En-tête (première page uniquement) ---
        self._draw_logo(c, s.MARGIN, y_of(LOGO_HEIGHT))
        c.setFillColor(PRIMARY_COLOR)
        c.setFont(self.bold_font_name, s.TITLE_FONT_SIZE)
        c.drawString(s.MARGIN + LOGO_WIDTH + s.GUTTER, y_of(s.TITLE_FONT_SIZE), s.TITLE)
        c.setFillColor(colors.black)
        generated_at = order.generated_at or datetime.now()
        header_lines = []
        if order.requester_email:
            header_lines.append(f"Requested by: {order.requester_email}")
        header_lines.append(f"Generated: {format_date(generated_at)}")
        for i, line in enumerate(header_lines):
            self._draw_text(
                c,
                s.MARGIN + LOGO_WIDTH + s.GUTTER,
                y_of(s.TITLE_FONT_SIZE + (i + 1) * s.LINE_HEIGHT + 4),
                line,
                self.font_name,
                s.FONT_SIZE,
            )
        cursor.advance(LOGO_HEIGHT + s.ITEM_SPACING)

        # --- 2. Métadonnées du devis ---
        meta_lines = [
            f"Builder Name: {order.builder_name}",
            f"Job Name: {order.job_name}",
        ]
        if order.quote_date:
            meta_lines.append(f"Quote Date: {format_date(order.quote_date)}")
        if order.quote_number is not None:
            meta_lines.append(f"Quote #: {order.quote_number}")
        for line in meta_lines:
            cursor.advance(s.LINE_HEIGHT)
            self._draw_text(c, s.MARGIN, y_of(cursor.offset), line, self.bold_font_name, s.FONT_SIZE + 2)
        cursor.advance(s.ITEM_SPACING)
        c.setStrokeColor(PRIMARY_COLOR)
        c.line(s.MARGIN, y_of(cursor.offset), page_width - s.MARGIN, y_of(cursor.offset))
        cursor.advance(s.ITEM_SPACING)

        # --- 3. Articles, dans l'ordre de la liste ---
        placements: List[ItemPlacement] = []
        for index, item in enumerate(order.items):
            lines = self._wrap(describe_item(item), self.font_name, text_width)
            notes = format_notes(item)
            note_lines = self._wrap(notes, self.font_name, text_width) if notes else []
            text_runs = [(line, colors.black) for line in lines] + [(line, colors.dimgray) for line in note_lines]
            block_height = max(s.IMAGE_SIZE, len(text_runs) * s.LINE_HEIGHT)

            image_path = resolve_item_image(item)
            image: Optional[ImageReader] = None
            try:
                image = await asyncio.to_thread(self._load_image, image_path)
            except AssetLoadError as e:
                logger.warning(f"[PDFGen] Article {index + 1} rendu sans image: {e.message}")

            if cursor.needs_break(block_height + s.ITEM_SPACING):
                c.showPage()
                cursor.new_page()
            top = cursor.offset
            first_page = cursor.page

            if image is not None:
                c.drawImage(
                    image, s.MARGIN, y_of(top + s.IMAGE_SIZE),
                    width=s.IMAGE_SIZE, height=s.IMAGE_SIZE,
                    preserveAspectRatio=True, mask="auto",
                )

            if block_height <= cursor.usable_height:
                self._draw_runs(c, text_x, y_of(top + s.FONT_SIZE), text_runs)
                cursor.take(block_height + s.ITEM_SPACING)
                height = block_height
            else:
                # Plus haut qu'une page entière: le texte continue sur les pages suivantes
                capacity = cursor.line_capacity(s.LINE_HEIGHT)
                chunk, remaining_runs = text_runs[:capacity], text_runs[capacity:]
                self._draw_runs(c, text_x, y_of(top + s.FONT_SIZE), chunk)
                height = max(s.IMAGE_SIZE, len(chunk) * s.LINE_HEIGHT)
                cursor.take(height)
                while remaining_runs:
                    c.showPage()
                    cursor.new_page()
                    capacity = cursor.line_capacity(s.LINE_HEIGHT)
                    chunk, remaining_runs = remaining_runs[:capacity], remaining_runs[capacity:]
                    self._draw_runs(c, text_x, y_of(s.FONT_SIZE), chunk)
                    cursor.take(len(chunk) * s.LINE_HEIGHT)
                logger.info(
                    f"[PDFGen] Article {index + 1} réparti sur les pages {first_page} à {cursor.page}."
                )
                cursor.advance(s.ITEM_SPACING)

            placements.append(ItemPlacement(
                index=index,
                page=first_page,
                last_page=cursor.page,
                top=top,
                height=height,
                lines=lines,
                note_lines=note_lines,
                image_path=image_path,
                image_drawn=image is not None,
            ))

        # --- 4. Sérialisation ---
        c.showPage()
        c.save()
        pdf_bytes = buffer.getvalue()
        buffer.close()
        logger.info(
            f"[PDFGen] Bon de commande '{order.job_name}' généré ({cursor.page} page(s), {len(pdf_bytes)} bytes)."
        )
        return RenderedDocument(
            content=pdf_bytes,
            filename=order_pdf_filename(order.job_name),
            page_count=cursor.page,
            placements=placements,
        )

    def _draw_logo(self, c: pdf_canvas.Canvas, x: float, y: float) -> None:
        logo_path = self.settings.LOGO_PATH
        if logo_path and os.path.isfile(logo_path):
            try:
                c.drawImage(
                    ImageReader(logo_path), x, y, width=LOGO_WIDTH, height=LOGO_HEIGHT,
                    preserveAspectRatio=True, mask="auto",
                )
                return
            except Exception as img_err:
                logger.error(f"[PDFGen] Erreur chargement logo: {img_err}. Utilisation d'un cadre.", exc_info=True)
        elif logo_path:
            logger.warning(f"[PDFGen] Logo non trouvé : {logo_path}")
        # Cadre de remplacement
        c.setStrokeColor(colors.lightgrey)
        c.rect(x, y, LOGO_WIDTH, LOGO_HEIGHT)
        c.setFont(self.font_name, 8)
        c.setFillColor(colors.grey)
        c.drawCentredString(x + LOGO_WIDTH / 2, y + LOGO_HEIGHT / 2, "LOGO")
        c.setFillColor(colors.black)
