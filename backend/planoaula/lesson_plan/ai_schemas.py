# Em backend/planoaula/lesson_plan/ai_schemas.py
"""
Contrato de saída do modelo: o schema JSON enviado como ``response_schema``
e os modelos Pydantic que espelham a mesma estrutura para exportação e
validação.

Os nomes dos campos fazem parte do contrato com o modelo e com os
exportadores e devem ser mantidos exatamente como estão, incluindo
``adapitacoes_nee``.
"""
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


def _string() -> Dict:
    return {"type": "string"}


def _string_list() -> Dict:
    return {"type": "array", "items": {"type": "string"}}


def _code_text() -> Dict:
    return {
        "type": "object",
        "properties": {
            "codigo": _string(),
            "texto": _string(),
        },
        "required": ["codigo", "texto"],
    }


LESSON_PLAN_SCHEMA: Dict = {
    "type": "object",
    "properties": {
        "meta": {
            "type": "object",
            "properties": {
                "gerado_por": _string(),
                "timestamp": _string(),
                "versao_template": _string(),
            },
            "required": ["gerado_por", "timestamp", "versao_template"],
        },
        "plano_aula": {
            "type": "object",
            "properties": {
                "titulo": _string(),
                "componente_curricular": _string(),
                "disciplina": _string(),
                "serie_turma": _string(),
                "objetos_do_conhecimento": _string_list(),
                "duracao_total_min": {"type": "integer"},
                "numero_de_aulas": {"type": "integer"},
                "competencia_especifica": _code_text(),
                "habilidades": {"type": "array", "items": _code_text()},
                "objetivos_de_aprendizagem": _string_list(),
                "descritores": {"type": "array", "items": _code_text()},
                "metodologia": {
                    "type": "array",
                    "items": {
                        "type": "object",
                        "properties": {
                            "etapa": _string(),
                            "duracao_min": {"type": "integer"},
                            "atividades": _string_list(),
                            "recursos": _string_list(),
                        },
                        "required": ["etapa", "duracao_min", "atividades", "recursos"],
                    },
                },
                "material_de_apoio": {
                    "type": "array",
                    "items": {
                        "type": "object",
                        "properties": {
                            "tipo": _string(),
                            "titulo": _string(),
                            "link": _string(),
                        },
                        "required": ["tipo", "titulo", "link"],
                    },
                },
                "estrategia_de_avaliacao": {
                    "type": "object",
                    "properties": {
                        "criterios": _string_list(),
                        "instrumentos": _string_list(),
                        "pesos": {
                            "type": "object",
                            "properties": {
                                "prova": {"type": "number"},
                                "atividade": {"type": "number"},
                                "participacao": {"type": "number"},
                            },
                        },
                    },
                    "required": ["criterios", "instrumentos"],
                },
                "adapitacoes_nee": _string_list(),
                "observacoes": _string(),
                "export_formats": _string_list(),
                "hash_validacao": _string(),
            },
            "required": [
                "titulo",
                "componente_curricular",
                "disciplina",
                "serie_turma",
                "objetos_do_conhecimento",
                "duracao_total_min",
                "numero_de_aulas",
                "competencia_especifica",
                "habilidades",
                "objetivos_de_aprendizagem",
                "descritores",
                "metodologia",
                "material_de_apoio",
                "estrategia_de_avaliacao",
                "adapitacoes_nee",
                "observacoes",
            ],
        },
    },
    "required": ["meta", "plano_aula"],
}


class _PlanModel(BaseModel):
    # Chaves extras vindas do modelo são ignoradas
    model_config = ConfigDict(extra="ignore")


class CodigoTexto(_PlanModel):
    codigo: str = Field(description="Código exatamente como aparece na BNCC/SAEB, ex: 'EF06MA01'.")
    texto: str = Field(description="Texto descritivo exatamente como aparece na base.")


class Meta(_PlanModel):
    gerado_por: str
    timestamp: str
    versao_template: str


class EtapaMetodologia(_PlanModel):
    etapa: str = Field(description="Nome da etapa, ex: 'Introdução'.")
    duracao_min: int = Field(description="Duração da etapa em minutos.")
    atividades: List[str]
    recursos: List[str]


class MaterialApoio(_PlanModel):
    tipo: str = Field(description="Categoria livre, ex: 'Vídeo' ou 'Artigo'.")
    titulo: str
    link: str = Field(description="Para vídeos, uma URL de busca e nunca um link direto.")


class PesosAvaliacao(_PlanModel):
    prova: Optional[float] = None
    atividade: Optional[float] = None
    participacao: Optional[float] = None


class EstrategiaAvaliacao(_PlanModel):
    criterios: List[str]
    instrumentos: List[str]
    pesos: Optional[PesosAvaliacao] = None


class PlanoAula(_PlanModel):
    titulo: str
    componente_curricular: str
    disciplina: str
    serie_turma: str
    objetos_do_conhecimento: List[str]
    duracao_total_min: int
    numero_de_aulas: int
    competencia_especifica: CodigoTexto
    habilidades: List[CodigoTexto] = Field(description="De uma a três habilidades da BNCC.")
    objetivos_de_aprendizagem: List[str]
    descritores: List[CodigoTexto]
    metodologia: List[EtapaMetodologia] = Field(description="A soma das durações deve ser igual a duracao_total_min.")
    material_de_apoio: List[MaterialApoio]
    estrategia_de_avaliacao: EstrategiaAvaliacao
    adapitacoes_nee: List[str]
    observacoes: str
    export_formats: Optional[List[str]] = None
    hash_validacao: Optional[str] = None


class LessonPlanResponse(_PlanModel):
    meta: Meta
    plano_aula: PlanoAula
