"""
Renderização do plano de aula em PDF (A4) com reportlab.

O layout usa um cursor vertical medido a partir do topo da página. Antes de
escrever cada bloco, a altura necessária é calculada; se o bloco não couber
até a margem inferior, uma nova página é iniciada e o cursor volta para a
margem superior. Textos longos são quebrados na largura útil.
"""
import io
from dataclasses import dataclass
from typing import List, Optional, Sequence

from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.lib.utils import simpleSplit
from reportlab.pdfbase.pdfmetrics import getAscentDescent, stringWidth
from reportlab.pdfgen import canvas

from planoaula.core.constants import PDFConstants
from .blocks import Block, BulletItem, Divider, Heading, Label, Paragraph, Spacer


@dataclass(frozen=True)
class Placement:
    """Faixa vertical ocupada por um elemento desenhado (em pontos, a partir do topo)."""
    page: int
    top: float
    bottom: float
    text: str = ""


@dataclass(frozen=True)
class _TextStyle:
    font: str
    size: float
    leading: float


_STYLES = {
    "title": _TextStyle(PDFConstants.FONT_BOLD, PDFConstants.TITLE_FONT_SIZE, PDFConstants.TITLE_LEADING_MM * mm),
    "section": _TextStyle(PDFConstants.FONT_BOLD, PDFConstants.SECTION_FONT_SIZE, PDFConstants.SECTION_LEADING_MM * mm),
    "step": _TextStyle(PDFConstants.FONT_BOLD, PDFConstants.STEP_FONT_SIZE, PDFConstants.STEP_LEADING_MM * mm),
    "label": _TextStyle(PDFConstants.FONT_BOLD, PDFConstants.BODY_FONT_SIZE, PDFConstants.BODY_LEADING_MM * mm),
    "body": _TextStyle(PDFConstants.FONT_REGULAR, PDFConstants.BODY_FONT_SIZE, PDFConstants.BODY_LEADING_MM * mm),
    "italic": _TextStyle(PDFConstants.FONT_ITALIC, PDFConstants.BODY_FONT_SIZE, PDFConstants.BODY_LEADING_MM * mm),
}

_HEADING_STYLES = {1: "title", 2: "section", 3: "step"}


def pdf_safe(text: str) -> str:
    """As fontes padrão do PDF usam WinAnsi; caracteres fora dela viram '?'."""
    return (text or "").encode("cp1252", errors="replace").decode("cp1252")


def wrap_text(text: str, font: str, size: float, width: float) -> List[str]:
    """Quebra o texto na largura disponível, cortando palavras maiores que a linha (ex: URLs)."""
    lines: List[str] = []
    for line in simpleSplit(text, font, size, width) or [""]:
        while len(line) > 1 and stringWidth(line, font, size) > width:
            cut = len(line) - 1
            while cut > 1 and stringWidth(line[:cut], font, size) > width:
                cut -= 1
            lines.append(line[:cut])
            line = line[cut:]
        lines.append(line)
    return lines


class PdfRenderer:
    """Um renderizador por documento; o estado de layout não é compartilhado."""

    def __init__(self, title: str = ""):
        self.title = title
        self.page_width, self.page_height = A4
        self.margin = PDFConstants.MARGIN_MM * mm
        self.usable_width = self.page_width - 2 * self.margin
        self.bottom_limit = self.page_height - self.margin
        self.usable_height = self.bottom_limit - self.margin
        self.placements: List[Placement] = []
        self.page_number = 1
        self.y = self.margin
        self._canvas: Optional[canvas.Canvas] = None

    # --- cursor e paginação ---

    def _new_page(self) -> None:
        self._canvas.showPage()
        self.page_number += 1
        self.y = self.margin

    def _ensure_space(self, height: float) -> None:
        if self.y + height > self.bottom_limit:
            self._new_page()

    def _to_canvas_y(self, top: float) -> float:
        return self.page_height - top

    # --- primitivas de desenho ---

    def _write_lines(self, lines: List[str], style: _TextStyle, indent: float = 0, keep_with_next: float = 0) -> None:
        block_height = len(lines) * style.leading
        # Blocos maiores que uma página são quebrados linha a linha
        if block_height + keep_with_next <= self.usable_height:
            self._ensure_space(block_height + keep_with_next)

        ascent, descent = getAscentDescent(style.font, style.size)
        baseline_offset = (style.leading - (ascent - descent)) / 2 + ascent

        for line in lines:
            self._ensure_space(style.leading)
            self._canvas.setFont(style.font, style.size)
            self._canvas.drawString(
                self.margin + indent,
                self._to_canvas_y(self.y + baseline_offset),
                line,
            )
            self.placements.append(Placement(self.page_number, self.y, self.y + style.leading, line))
            self.y += style.leading

    def _write_text(self, text: str, style_name: str, indent: float = 0, keep_with_next: float = 0) -> None:
        style = _STYLES[style_name]
        lines = wrap_text(pdf_safe(text), style.font, style.size, self.usable_width - indent)
        self._write_lines(lines, style, indent=indent, keep_with_next=keep_with_next)

    def _draw_rule(self, top: float, width: float, color=None) -> None:
        if color:
            self._canvas.setStrokeColorRGB(*color)
        canvas_y = self._to_canvas_y(top)
        self._canvas.line(self.margin, canvas_y, self.margin + width, canvas_y)
        self._canvas.setStrokeColorRGB(0, 0, 0)
        self.placements.append(Placement(self.page_number, top, top))

    # --- blocos ---

    def _render_block(self, block: Block) -> None:
        body_leading = _STYLES["body"].leading
        indent_unit = PDFConstants.INDENT_MM * mm

        if isinstance(block, Heading):
            style_name = _HEADING_STYLES.get(block.level, "step")
            self._write_text(block.full_text, style_name, keep_with_next=body_leading)
            if block.level == 2:
                self._draw_rule(self.y - 1, PDFConstants.SECTION_RULE_WIDTH_MM * mm, PDFConstants.SECTION_RULE_COLOR)
        elif isinstance(block, Label):
            self._write_text(block.text, "label", keep_with_next=body_leading)
        elif isinstance(block, Paragraph):
            text = f"{block.label} {block.text}" if block.label else block.text
            self._write_text(text, "italic" if block.italic else "body", indent=block.indent * indent_unit)
        elif isinstance(block, BulletItem):
            self._write_text(
                f"{PDFConstants.BULLET_PREFIX}{block.text}",
                "body",
                indent=block.indent * indent_unit,
            )
        elif isinstance(block, Divider):
            height = PDFConstants.SPACER_MM * mm
            self._ensure_space(height)
            self._draw_rule(self.y + height / 2, self.usable_width)
            self.y += height
        elif isinstance(block, Spacer):
            self.y = min(self.y + PDFConstants.SPACER_MM * mm, self.bottom_limit)

    def render(self, blocks: Sequence[Block]) -> bytes:
        buffer = io.BytesIO()
        # invariant=1 remove datas e IDs variáveis: mesma entrada, mesmos bytes
        self._canvas = canvas.Canvas(buffer, pagesize=A4, invariant=1)
        self._canvas.setTitle(self.title)
        self._canvas.setAuthor("Plano de Aula AI")
        self._canvas.setCreator("Plano de Aula AI")

        self.placements = []
        self.page_number = 1
        self.y = self.margin
        for block in blocks:
            self._render_block(block)

        self._canvas.save()
        return buffer.getvalue()


def render_pdf(blocks: Sequence[Block], title: str = "") -> bytes:
    return PdfRenderer(title).render(blocks)
