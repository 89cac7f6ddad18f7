import json
from dataclasses import dataclass
from typing import List

from langchain_core.messages import BaseMessage, HumanMessage, SystemMessage
from langchain_core.prompts import ChatPromptTemplate

from planoaula.core.constants import LessonPlanConstants
from .reference_data import ReferenceData
from .schemas import LessonPlanRequest

# --- Instrução de sistema: bases de referência + regras de formato e conteúdo ---
lesson_plan_system_prompt = """
# MISSÃO
Você é um especialista em pedagogia e design instrucional, fluente em português do Brasil (pt-BR).
Sua tarefa é criar planos de aula detalhados e de alta qualidade, a partir das especificações do usuário.

# FONTE DE CONHECIMENTO EXCLUSIVA
Utilize as seguintes informações como sua fonte de conhecimento EXCLUSIVA para garantir o alinhamento curricular.
Baseie-se estritamente nestes dados para selecionar competências, habilidades e descritores:
- Dados da BNCC (Competências e Habilidades): {bncc_json}
- Dados dos Descritores (SAEB): {saeb_json}

# FORMATO DA SAÍDA
Você deve retornar estritamente UM ÚNICO objeto JSON válido, sem nenhum texto, markdown ou explicação adicional fora do objeto JSON.
Siga rigorosamente o schema JSON fornecido em 'responseSchema'.

# REGRAS DE CONTEÚDO
- Sempre alinhe o plano à BNCC e aos descritores do SAEB, usando os dados fornecidos. Para 'competencia_especifica', 'habilidades' e 'descritores', forneça o código e o texto descritivo exatamente como aparecem nos dados, em objetos separados conforme o schema.
- Identifique e inclua de {min_skills} a {max_skills} habilidades da BNCC que sejam diretamente relevantes para cada objeto de conhecimento fornecido. A seleção deve ser criteriosa para garantir a pertinência pedagógica.
- Para a seção 'material_de_apoio', quando o tipo for 'Vídeo', o campo 'link' DEVE ser uma URL de busca do YouTube ('{video_search_url}...'), usando os termos de busca mais relevantes em formato de query string. NÃO gere links diretos para vídeos ('watch?v=...').
- O conteúdo deve ser original, com linguagem profissional e apropriada para professores.
- Inclua estimativas de tempo realistas para cada etapa da metodologia.
- Sugira recursos concretos, com links para materiais gratuitos (REA, artigos) quando possível, e links de busca para vídeos.
- Inclua sugestões práticas de adaptação para alunos com Necessidades Educacionais Especiais (NEE).
- Valide a coerência interna do plano (ex: se uma atividade prática é proposta, os materiais necessários devem estar listados).
- A soma da duração das etapas da metodologia deve ser igual à duração total da aula.
"""

# --- Prompt do usuário: reapresenta cada parâmetro da solicitação ---
lesson_plan_user_prompt = """
Por favor, gere um plano de aula completo com base nos seguintes parâmetros, utilizando o conhecimento da BNCC e descritores SAEB fornecidos.
O resultado DEVE ser um JSON que valide com o schema fornecido.

Parâmetros da Solicitação:
- Modalidade de Ensino: {modalidade_ensino}
- Componente Curricular/Disciplina: {componente_curricular}
- Série/Turma: {serie_turma}
- Objeto do Conhecimento/Conteúdo: {objeto_conhecimento}
- Duração da Aula (minutos): {duracao_aula_min}
- Número de Aulas: {numero_aulas}
- Nível de Detalhe: {nivel_detalhe}
- Língua: {lingua}
"""

LESSON_PLAN_TEMPLATE = ChatPromptTemplate.from_messages([
    ("system", lesson_plan_system_prompt),
    ("human", lesson_plan_user_prompt),
])


@dataclass(frozen=True)
class LessonPlanPrompt:
    system_instruction: str
    user_prompt: str

    def to_messages(self) -> List[BaseMessage]:
        return [
            SystemMessage(content=self.system_instruction),
            HumanMessage(content=self.user_prompt),
        ]


def _dump(data) -> str:
    return json.dumps(data, ensure_ascii=False)


def build_lesson_plan_prompt(request: LessonPlanRequest, reference: ReferenceData) -> LessonPlanPrompt:
    """
    Monta a instrução de sistema e o prompt do usuário.

    Função pura: as mesmas entradas produzem sempre os mesmos textos.
    """
    system_message, human_message = LESSON_PLAN_TEMPLATE.format_messages(
        bncc_json=_dump(reference.bncc),
        saeb_json=_dump(reference.saeb),
        min_skills=LessonPlanConstants.MIN_SKILLS,
        max_skills=LessonPlanConstants.MAX_SKILLS,
        video_search_url=LessonPlanConstants.VIDEO_SEARCH_URL,
        **request.model_dump(),
    )
    return LessonPlanPrompt(
        system_instruction=system_message.content.strip(),
        user_prompt=human_message.content.strip(),
    )
