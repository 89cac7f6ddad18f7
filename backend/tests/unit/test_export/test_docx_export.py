import io

from docx import Document

from planoaula.export.service import ExportFormat, render_lesson_plan


def _read(content):
    return Document(io.BytesIO(content))


def _paragraphs(plan):
    doc = _read(render_lesson_plan(plan, ExportFormat.DOCX))
    return [(p.style.name, p.text) for p in doc.paragraphs]


def test_heading_levels(sample_plan):
    paragraphs = _paragraphs(sample_plan)

    assert paragraphs[0] == ("Heading 1", "Frações Equivalentes no Cotidiano")
    sections = [text for style, text in paragraphs if style == "Heading 2"]
    assert sections == [
        "Fundamentação Pedagógica",
        "Metodologia e Atividades",
        "Avaliação",
        "Recursos e Adaptações",
        "Observações",
    ]
    steps = [text for style, text in paragraphs if style == "Heading 3"]
    assert steps == ["Introdução (10 min)", "Desenvolvimento (30 min)", "Fechamento (10 min)"]


def test_items_are_bullets_in_order(sample_plan):
    bullets = [text for style, text in _paragraphs(sample_plan) if style == "List Bullet"]

    assert bullets.index("Identificar frações equivalentes.") < bullets.index("Comparar frações em situações do dia a dia.")
    assert "[Vídeo] Frações equivalentes: https://www.youtube.com/results?search_query=fracoes+equivalentes" in bullets
    assert bullets[-1] == "Instruções em etapas curtas."


def test_labels_are_bold(sample_plan):
    doc = _read(render_lesson_plan(sample_plan, ExportFormat.DOCX))

    label = next(p for p in doc.paragraphs if p.text == "Habilidades:")
    assert label.runs[0].bold is True

    recursos = next(p for p in doc.paragraphs if p.text.startswith("Recursos:"))
    assert recursos.runs[0].text == "Recursos:"
    assert recursos.runs[0].bold is True
    assert recursos.text == "Recursos: Quadro branco"


def test_document_metadata(sample_plan):
    doc = _read(render_lesson_plan(sample_plan, ExportFormat.DOCX))
    assert doc.core_properties.title == "Frações Equivalentes no Cotidiano"


def test_docx_export_is_idempotent(sample_plan):
    # O pacote DOCX carrega datas de criação; o conteúdo deve ser o mesmo
    assert _paragraphs(sample_plan) == _paragraphs(sample_plan)
