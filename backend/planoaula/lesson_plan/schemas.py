from typing import List

from pydantic import BaseModel, Field

from planoaula.core.constants import AIConstants, LessonPlanConstants
from .ai_schemas import LessonPlanResponse

# ======== API Schemas ========

class LessonPlanRequest(BaseModel):
    modalidade_ensino: str = Field(description="Ex: 'Ensino Fundamental - Anos Finais'.")
    componente_curricular: str = Field(description="Componente curricular/disciplina, ex: 'Matemática'.")
    serie_turma: str = Field(description="Ex: '6º ano'.")
    objeto_conhecimento: str = Field(description="Objeto do conhecimento/conteúdo da aula.")
    duracao_aula_min: int = Field(gt=0, description="Duração da aula em minutos.")
    numero_aulas: int = Field(gt=0, description="Número de aulas.")
    nivel_detalhe: str = Field(description="Ex: 'Resumido', 'Padrão' ou 'Detalhado'.")
    lingua: str = AIConstants.OUTPUT_LANGUAGE


class ExportRequest(BaseModel):
    plano: LessonPlanResponse
    file_name: str = LessonPlanConstants.DEFAULT_FILE_NAME


class ValidationReport(BaseModel):
    valid: bool
    errors: List[str]
