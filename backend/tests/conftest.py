# backend/tests/conftest.py

import copy

import pytest

from planoaula.lesson_plan.ai_schemas import LessonPlanResponse
from planoaula.lesson_plan.schemas import LessonPlanRequest

SAMPLE_PLAN = {
    "meta": {
        "gerado_por": "Plano de Aula AI",
        "timestamp": "2025-03-10T14:00:00Z",
        "versao_template": "1.0",
    },
    "plano_aula": {
        "titulo": "Frações Equivalentes no Cotidiano",
        "componente_curricular": "Matemática",
        "disciplina": "Matemática",
        "serie_turma": "6º ano",
        "objetos_do_conhecimento": ["Frações: significados e equivalência"],
        "duracao_total_min": 50,
        "numero_de_aulas": 1,
        "competencia_especifica": {
            "codigo": "CEMAT-EF-02",
            "texto": "Desenvolver o raciocínio lógico e o espírito de investigação.",
        },
        "habilidades": [
            {"codigo": "EF06MA07", "texto": "Compreender, comparar e ordenar frações."},
            {"codigo": "EF06MA08", "texto": "Reconhecer que os números racionais podem ser expressos na forma fracionária."},
        ],
        "objetivos_de_aprendizagem": [
            "Identificar frações equivalentes.",
            "Comparar frações em situações do dia a dia.",
        ],
        "descritores": [
            {"codigo": "D21", "texto": "Reconhecer as diferentes representações de um número racional."},
        ],
        "metodologia": [
            {
                "etapa": "Introdução",
                "duracao_min": 10,
                "atividades": ["Roda de conversa sobre receitas culinárias."],
                "recursos": ["Quadro branco"],
            },
            {
                "etapa": "Desenvolvimento",
                "duracao_min": 30,
                "atividades": ["Dobradura de tiras de papel.", "Registro das frações obtidas."],
                "recursos": ["Tiras de papel", "Lápis de cor"],
            },
            {
                "etapa": "Fechamento",
                "duracao_min": 10,
                "atividades": ["Socialização das descobertas."],
                "recursos": [],
            },
        ],
        "material_de_apoio": [
            {
                "tipo": "Vídeo",
                "titulo": "Frações equivalentes",
                "link": "https://www.youtube.com/results?search_query=fracoes+equivalentes",
            },
            {
                "tipo": "Artigo",
                "titulo": "Ensino de frações",
                "link": "https://novaescola.org.br/busca?q=fracoes",
            },
        ],
        "estrategia_de_avaliacao": {
            "criterios": ["Identifica frações equivalentes.", "Justifica as comparações."],
            "instrumentos": ["Observação", "Ficha de registro"],
            "pesos": {"prova": 0.4, "atividade": 0.4, "participacao": 0.2},
        },
        "adapitacoes_nee": [
            "Material concreto ampliado para alunos com baixa visão.",
            "Instruções em etapas curtas.",
        ],
        "observacoes": "Retomar o conteúdo na aula seguinte.",
    },
}

SAMPLE_REQUEST = {
    "modalidade_ensino": "Ensino Fundamental - Anos Finais",
    "componente_curricular": "Matemática",
    "serie_turma": "6º ano",
    "objeto_conhecimento": "Frações equivalentes",
    "duracao_aula_min": 50,
    "numero_aulas": 1,
    "nivel_detalhe": "Detalhado",
    "lingua": "pt-BR",
}


@pytest.fixture
def sample_plan_dict():
    return copy.deepcopy(SAMPLE_PLAN)


@pytest.fixture
def sample_plan(sample_plan_dict):
    return LessonPlanResponse.model_validate(sample_plan_dict)


@pytest.fixture
def sample_request_dict():
    return dict(SAMPLE_REQUEST)


@pytest.fixture
def sample_request(sample_request_dict):
    return LessonPlanRequest(**sample_request_dict)
