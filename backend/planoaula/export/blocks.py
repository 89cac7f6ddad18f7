"""
Árvore de blocos tipados do documento exportado.

O plano de aula é convertido uma única vez em uma sequência de blocos, na
ordem das seções. Cada formato (PDF, DOCX, TXT) apenas renderiza essa
sequência, de modo que os três documentos têm as mesmas seções e itens.
"""
from dataclasses import dataclass
from typing import List, Union

from planoaula.lesson_plan.ai_schemas import CodigoTexto, LessonPlanResponse, PlanoAula


@dataclass(frozen=True)
class Heading:
    text: str
    level: int
    detail: str = ""  # complemento entre parênteses, ex: a duração da etapa

    @property
    def full_text(self) -> str:
        return f"{self.text} ({self.detail})" if self.detail else self.text


@dataclass(frozen=True)
class Label:
    """Rótulo em negrito que introduz uma lista ou um texto."""
    text: str


@dataclass(frozen=True)
class Paragraph:
    text: str
    label: str = ""
    italic: bool = False
    indent: int = 0


@dataclass(frozen=True)
class BulletItem:
    text: str
    indent: int = 1


@dataclass(frozen=True)
class Divider:
    pass


@dataclass(frozen=True)
class Spacer:
    pass


Block = Union[Heading, Label, Paragraph, BulletItem, Divider, Spacer]

SECTION_FOUNDATION = "Fundamentação Pedagógica"
SECTION_METHODOLOGY = "Metodologia e Atividades"
SECTION_ASSESSMENT = "Avaliação"
SECTION_RESOURCES = "Recursos e Adaptações"
SECTION_NOTES = "Observações"

SECTION_TITLES = (
    SECTION_FOUNDATION,
    SECTION_METHODOLOGY,
    SECTION_ASSESSMENT,
    SECTION_RESOURCES,
    SECTION_NOTES,
)


def code_text(item: CodigoTexto) -> str:
    return f"{item.codigo}: {item.texto}"


def _title_block(plano: PlanoAula) -> List[Block]:
    return [
        Heading(plano.titulo, level=1),
        Paragraph(f"{plano.serie_turma} · {plano.componente_curricular}", italic=True),
        Paragraph(f"Duração: {plano.duracao_total_min} min | Aulas: {plano.numero_de_aulas}"),
        Divider(),
    ]


def _foundation_section(plano: PlanoAula) -> List[Block]:
    blocks: List[Block] = [
        Heading(SECTION_FOUNDATION, level=2),
        Label("Competência Específica:"),
        Paragraph(code_text(plano.competencia_especifica), indent=1),
        Label("Habilidades:"),
    ]
    blocks.extend(BulletItem(code_text(h)) for h in plano.habilidades)
    blocks.append(Label("Objetivos de Aprendizagem:"))
    blocks.extend(BulletItem(o) for o in plano.objetivos_de_aprendizagem)
    if plano.descritores:
        blocks.append(Label("Descritor(es):"))
        blocks.extend(BulletItem(code_text(d)) for d in plano.descritores)
    return blocks


def _methodology_section(plano: PlanoAula) -> List[Block]:
    blocks: List[Block] = [Heading(SECTION_METHODOLOGY, level=2)]
    for etapa in plano.metodologia:
        blocks.append(Heading(etapa.etapa, level=3, detail=f"{etapa.duracao_min} min"))
        blocks.append(Label("Atividades:"))
        blocks.extend(BulletItem(a, indent=2) for a in etapa.atividades)
        if etapa.recursos:
            blocks.append(Paragraph(", ".join(etapa.recursos), label="Recursos:", indent=1))
    return blocks


def _assessment_section(plano: PlanoAula) -> List[Block]:
    avaliacao = plano.estrategia_de_avaliacao
    blocks: List[Block] = [
        Heading(SECTION_ASSESSMENT, level=2),
        Label("Critérios de Avaliação:"),
    ]
    blocks.extend(BulletItem(c) for c in avaliacao.criterios)
    blocks.append(Paragraph(", ".join(avaliacao.instrumentos), label="Instrumentos:", indent=1))
    return blocks


def _resources_section(plano: PlanoAula) -> List[Block]:
    blocks: List[Block] = [
        Heading(SECTION_RESOURCES, level=2),
        Label("Material de Apoio:"),
    ]
    # Links saem exatamente como recebidos
    blocks.extend(BulletItem(f"[{m.tipo}] {m.titulo}: {m.link}") for m in plano.material_de_apoio)
    blocks.append(Label("Adaptações para Alunos com NEE:"))
    blocks.extend(BulletItem(a) for a in plano.adapitacoes_nee)
    return blocks


def _notes_section(plano: PlanoAula) -> List[Block]:
    return [
        Heading(SECTION_NOTES, level=2),
        Paragraph(plano.observacoes),
    ]


def build_document(plan: LessonPlanResponse) -> List[Block]:
    """Converte o plano de aula na sequência de blocos comum aos três formatos."""
    plano = plan.plano_aula
    blocks: List[Block] = []
    sections = (
        _title_block,
        _foundation_section,
        _methodology_section,
        _assessment_section,
        _resources_section,
        _notes_section,
    )
    for i, section in enumerate(sections):
        if i > 1:
            blocks.append(Spacer())
        blocks.extend(section(plano))
    return blocks
