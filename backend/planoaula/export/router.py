from urllib.parse import quote

from fastapi import APIRouter
from fastapi.responses import Response

from planoaula.lesson_plan.schemas import ExportRequest
from .service import ExportFormat, export_lesson_plan

router = APIRouter()


@router.post("/export/{export_format}")
def export_plan(export_format: ExportFormat, request: ExportRequest):
    """Gera o documento no formato pedido e o devolve como download."""
    exported = export_lesson_plan(request.plano, request.file_name, export_format)
    disposition = (
        f'attachment; filename="{exported.ascii_file_name}"; '
        f"filename*=UTF-8''{quote(exported.file_name)}"
    )
    return Response(
        content=exported.content,
        media_type=exported.media_type,
        headers={"Content-Disposition": disposition},
    )
