import io
from typing import Sequence

from docx import Document
from docx.shared import Cm, Pt

from .blocks import Block, BulletItem, Divider, Heading, Label, Paragraph, Spacer

INDENT_CM = 0.6


def render_docx(blocks: Sequence[Block], title: str = "") -> bytes:
    """
    Título em Heading 1, seções em Heading 2, etapas da metodologia em
    Heading 3 e itens como parágrafos 'List Bullet'.
    """
    doc = Document()

    normal = doc.styles['Normal']
    normal.font.name = 'Arial'
    normal.font.size = Pt(11)

    doc.core_properties.title = title
    doc.core_properties.author = "Plano de Aula AI"

    for block in blocks:
        if isinstance(block, Heading):
            doc.add_heading(block.full_text, level=block.level)
        elif isinstance(block, Label):
            par = doc.add_paragraph()
            par.add_run(block.text).bold = True
        elif isinstance(block, Paragraph):
            par = doc.add_paragraph()
            if block.label:
                par.add_run(block.label).bold = True
                run = par.add_run(f" {block.text}")
            else:
                run = par.add_run(block.text)
            run.italic = block.italic
            if block.indent:
                par.paragraph_format.left_indent = Cm(INDENT_CM * block.indent)
        elif isinstance(block, BulletItem):
            par = doc.add_paragraph(block.text, style="List Bullet")
            if block.indent > 1:
                par.paragraph_format.left_indent = Cm(INDENT_CM * (block.indent + 1))
        elif isinstance(block, (Divider, Spacer)):
            doc.add_paragraph("")

    buf = io.BytesIO()
    doc.save(buf)
    return buf.getvalue()
