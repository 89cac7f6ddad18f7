from typing import List, Sequence

from planoaula.core.constants import TextExportConstants
from .blocks import Block, BulletItem, Divider, Heading, Label, Paragraph, Spacer


def _heading_lines(block: Heading, lines: List[str]) -> List[str]:
    if block.level == 1:
        return [f"{TextExportConstants.TITLE_PREFIX}{block.text}"]
    if block.level == 2:
        return [block.text.upper()]
    # Etapas da metodologia: só o nome em caixa alta, a duração fica como está
    heading = block.text.upper()
    if block.detail:
        heading = f"{heading} ({block.detail})"
    prefix = [""] if lines and lines[-1] != "" else []
    return prefix + [f"--- {heading} ---"]


def render_txt(blocks: Sequence[Block], title: str = "") -> bytes:
    """Layout linear em texto puro com cabeçalhos em caixa alta e marcadores ASCII."""
    lines: List[str] = []
    for block in blocks:
        if isinstance(block, Heading):
            lines.extend(_heading_lines(block, lines))
        elif isinstance(block, Label):
            lines.append(block.text)
        elif isinstance(block, Paragraph):
            lines.append(f"{block.label} {block.text}" if block.label else block.text)
        elif isinstance(block, BulletItem):
            indent = "  " * max(block.indent - 1, 0)
            lines.append(f"{indent}{TextExportConstants.BULLET_PREFIX}{block.text}")
        elif isinstance(block, Divider):
            lines.extend([TextExportConstants.DIVIDER, ""])
        elif isinstance(block, Spacer):
            lines.append("")
    return ("\n".join(lines) + "\n").encode("utf-8")
