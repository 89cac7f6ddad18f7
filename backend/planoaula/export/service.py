import re
import unicodedata
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Sequence

from planoaula.core.constants import ExportMediaTypes, LessonPlanConstants
from planoaula.core.logging import get_logger
from planoaula.lesson_plan.ai_schemas import LessonPlanResponse
from .blocks import Block, build_document
from .docx_renderer import render_docx
from .pdf_renderer import render_pdf
from .txt_renderer import render_txt

logger = get_logger("export")

Renderer = Callable[[Sequence[Block], str], bytes]


class ExportFormat(str, Enum):
    PDF = "pdf"
    DOCX = "docx"
    TXT = "txt"

    @property
    def extension(self) -> str:
        return f".{self.value}"

    @property
    def media_type(self) -> str:
        return _MEDIA_TYPES[self]


_MEDIA_TYPES: Dict[ExportFormat, str] = {
    ExportFormat.PDF: ExportMediaTypes.PDF,
    ExportFormat.DOCX: ExportMediaTypes.DOCX,
    ExportFormat.TXT: ExportMediaTypes.TXT,
}

RENDERERS: Dict[ExportFormat, Renderer] = {
    ExportFormat.PDF: render_pdf,
    ExportFormat.DOCX: render_docx,
    ExportFormat.TXT: render_txt,
}


@dataclass(frozen=True)
class ExportedFile:
    file_name: str
    media_type: str
    content: bytes

    @property
    def ascii_file_name(self) -> str:
        decomposed = unicodedata.normalize("NFKD", self.file_name)
        return decomposed.encode("ascii", "ignore").decode("ascii").replace('"', "") or "plano"


_UNSAFE_FILE_CHARS = re.compile(r'[\x00-\x1f\x7f/\\:*?"<>|]+')


def sanitize_file_name(file_name: str) -> str:
    """Remove separadores de caminho e caracteres de controle do nome do arquivo."""
    cleaned = _UNSAFE_FILE_CHARS.sub("-", file_name or "").strip(" .-")
    return cleaned or LessonPlanConstants.DEFAULT_FILE_NAME


def render_lesson_plan(plan: LessonPlanResponse, export_format: ExportFormat) -> bytes:
    """Função pura: (plano, formato) -> bytes do documento."""
    blocks = build_document(plan)
    return RENDERERS[export_format](blocks, plan.plano_aula.titulo)


def export_lesson_plan(plan: LessonPlanResponse, file_name: str, export_format: ExportFormat) -> ExportedFile:
    content = render_lesson_plan(plan, export_format)
    exported = ExportedFile(
        file_name=f"{sanitize_file_name(file_name)}{export_format.extension}",
        media_type=export_format.media_type,
        content=content,
    )
    logger.info(
        "Lesson plan exported",
        export_format=export_format.value,
        file_name=exported.file_name,
        size_bytes=len(content),
    )
    return exported
