# backend/planoaula/core/validators.py

"""
Validadores determinísticos dos contratos de conteúdo do plano de aula.

Os contratos (soma das durações, links de vídeo como URL de busca, número de
habilidades) são pedidos ao modelo via prompt e não são impostos durante o
streaming. Estes validadores apenas reportam violações; nada é corrigido.
"""

import time
import unicodedata
from typing import List
from urllib.parse import parse_qs, urlparse

from planoaula.core.constants import LessonPlanConstants
from planoaula.core.logging import LogContext
from planoaula.lesson_plan.ai_schemas import LessonPlanResponse, MaterialApoio

_DIRECT_VIDEO_HOSTS = {"youtu.be", "www.youtu.be"}


def _normalize(text: str) -> str:
    decomposed = unicodedata.normalize("NFKD", text or "")
    return "".join(c for c in decomposed if not unicodedata.combining(c)).casefold()


def is_video_material(material: MaterialApoio) -> bool:
    return "video" in _normalize(material.tipo)


def is_search_url(link: str) -> bool:
    """True para URLs de busca (query string com termo de pesquisa), False para links diretos."""
    parsed = urlparse(link or "")
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        return False
    if parsed.netloc.lower() in _DIRECT_VIDEO_HOSTS or "watch" in parsed.path:
        return False
    query = parse_qs(parsed.query)
    return any(query.get(param) for param in LessonPlanConstants.SEARCH_QUERY_PARAMS)


class LessonPlanValidators:
    """Validadores centralizados para planos de aula"""

    @staticmethod
    def validate_methodology_duration(plan: LessonPlanResponse) -> List[str]:
        """
        Valida se a soma das etapas da metodologia fecha com a duração total.

        Args:
            plan: Plano de aula completo

        Returns:
            Lista de erros encontrados (vazia se validação passou)
        """
        errors = []
        plano = plan.plano_aula
        total_steps = sum(etapa.duracao_min for etapa in plano.metodologia)
        if total_steps != plano.duracao_total_min:
            errors.append(
                f"A soma das etapas da metodologia ({total_steps} min) difere da "
                f"duração total da aula ({plano.duracao_total_min} min)."
            )
        return errors

    @staticmethod
    def validate_video_links(plan: LessonPlanResponse) -> List[str]:
        """
        Valida se materiais do tipo vídeo usam URL de busca e não link direto.

        Args:
            plan: Plano de aula completo

        Returns:
            Lista de erros encontrados (vazia se validação passou)
        """
        errors = []
        for material in plan.plano_aula.material_de_apoio:
            if is_video_material(material) and not is_search_url(material.link):
                errors.append(
                    f"O vídeo '{material.titulo}' deve usar uma URL de busca "
                    f"(ex: {LessonPlanConstants.VIDEO_SEARCH_URL}...), recebido: {material.link}"
                )
        return errors

    @staticmethod
    def validate_skill_count(plan: LessonPlanResponse) -> List[str]:
        errors = []
        count = len(plan.plano_aula.habilidades)
        if not (LessonPlanConstants.MIN_SKILLS <= count <= LessonPlanConstants.MAX_SKILLS):
            errors.append(
                f"Número de habilidades inválido ({count}). "
                f"Deve estar entre {LessonPlanConstants.MIN_SKILLS} e {LessonPlanConstants.MAX_SKILLS}."
            )
        return errors


class ValidationOrchestrator:
    """
    Orquestrador que combina os validadores do plano de aula.
    """

    @staticmethod
    def validate_lesson_plan(plan: LessonPlanResponse) -> List[str]:
        """
        Executa todas as validações de conteúdo do plano.

        Args:
            plan: Plano de aula completo

        Returns:
            Lista de todos os erros encontrados
        """
        validation_start = time.time()
        all_errors = []

        with LogContext("validators", validation_phase="lesson_plan", titulo=plan.plano_aula.titulo) as val_logger:
            val_logger.debug("Starting lesson plan validation")

            all_errors.extend(LessonPlanValidators.validate_methodology_duration(plan))
            all_errors.extend(LessonPlanValidators.validate_video_links(plan))
            all_errors.extend(LessonPlanValidators.validate_skill_count(plan))

            val_logger.info(
                "Lesson plan validation completed",
                duration_ms=round((time.time() - validation_start) * 1000, 2),
                total_errors=len(all_errors),
                steps_count=len(plan.plano_aula.metodologia),
                materials_count=len(plan.plano_aula.material_de_apoio),
            )

        return all_errors
