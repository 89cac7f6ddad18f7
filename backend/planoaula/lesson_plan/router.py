from typing import AsyncIterator

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse

from planoaula.core.ai_service import LessonPlanAIService, ModelTextStream
from planoaula.core.exceptions import MissingAPIKeyError
from planoaula.core.logging import get_logger
from planoaula.core.settings import Settings, get_settings
from planoaula.core.validators import ValidationOrchestrator
from .ai_schemas import LessonPlanResponse
from .prompts import build_lesson_plan_prompt
from .reference_data import load_reference_data
from .schemas import LessonPlanRequest, ValidationReport

router = APIRouter()
logger = get_logger("lesson_plan.router")

JSON_STREAM_MEDIA_TYPE = "application/json; charset=utf-8"


def get_lesson_plan_service(settings: Settings = Depends(get_settings)) -> LessonPlanAIService:
    """Falha antes de qualquer chamada ao modelo se a credencial não estiver configurada."""
    if not settings.GEMINI_API_KEY:
        raise MissingAPIKeyError()
    return LessonPlanAIService(api_key=settings.GEMINI_API_KEY, model_name=settings.GEMINI_MODEL)


async def relay_fragments(stream: ModelTextStream) -> AsyncIterator[str]:
    """Repassa cada fragmento assim que chega; fecha o stream do modelo ao terminar ou ao desconectar."""
    try:
        async for fragment in stream:
            yield fragment
    except Exception as e:
        # O status 200 já foi enviado; a resposta termina incompleta
        logger.error(
            "Lesson plan stream interrupted",
            fragments_sent=stream.fragment_count,
            error=str(e),
            error_type=type(e).__name__,
        )
        raise
    finally:
        await stream.aclose()


@router.post("/generate")
async def generate_lesson_plan(
    request: LessonPlanRequest,
    settings: Settings = Depends(get_settings),
    service: LessonPlanAIService = Depends(get_lesson_plan_service),
):
    """Gera o plano de aula e devolve o JSON do modelo em streaming."""
    reference = load_reference_data(settings.BNCC_DATA_PATH, settings.SAEB_DATA_PATH)
    prompt = build_lesson_plan_prompt(request, reference)

    logger.info(
        "Lesson plan requested",
        componente_curricular=request.componente_curricular,
        serie_turma=request.serie_turma,
        duracao_aula_min=request.duracao_aula_min,
        numero_aulas=request.numero_aulas,
    )

    stream = await service.open_lesson_plan_stream(prompt)
    return StreamingResponse(relay_fragments(stream), media_type=JSON_STREAM_MEDIA_TYPE)


@router.post("/validate", response_model=ValidationReport)
def validate_lesson_plan(plan: LessonPlanResponse):
    """Verifica os contratos de conteúdo do plano sem alterá-lo."""
    errors = ValidationOrchestrator.validate_lesson_plan(plan)
    return ValidationReport(valid=not errors, errors=errors)
