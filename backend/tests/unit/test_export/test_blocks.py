from planoaula.export.blocks import (
    SECTION_TITLES,
    BulletItem,
    Divider,
    Heading,
    Label,
    Paragraph,
    build_document,
)


def _texts(blocks):
    return [getattr(b, "text", "") for b in blocks]


def test_sections_follow_document_order(sample_plan):
    blocks = build_document(sample_plan)

    assert blocks[0] == Heading("Frações Equivalentes no Cotidiano", level=1)
    assert blocks[1] == Paragraph("6º ano · Matemática", italic=True)
    assert blocks[2] == Paragraph("Duração: 50 min | Aulas: 1")
    assert isinstance(blocks[3], Divider)

    sections = [b.text for b in blocks if isinstance(b, Heading) and b.level == 2]
    assert sections == list(SECTION_TITLES)


def test_foundation_items(sample_plan):
    texts = _texts(build_document(sample_plan))

    assert "CEMAT-EF-02: Desenvolver o raciocínio lógico e o espírito de investigação." in texts
    assert texts.index("EF06MA07: Compreender, comparar e ordenar frações.") < texts.index(
        "EF06MA08: Reconhecer que os números racionais podem ser expressos na forma fracionária."
    )
    assert "Descritor(es):" in texts


def test_descriptors_are_omitted_when_empty(sample_plan):
    sample_plan.plano_aula.descritores = []
    blocks = build_document(sample_plan)
    assert Label("Descritor(es):") not in blocks


def test_methodology_steps(sample_plan):
    blocks = build_document(sample_plan)

    steps = [b.full_text for b in blocks if isinstance(b, Heading) and b.level == 3]
    assert steps == ["Introdução (10 min)", "Desenvolvimento (30 min)", "Fechamento (10 min)"]
    assert BulletItem("Dobradura de tiras de papel.", indent=2) in blocks
    assert Paragraph("Tiras de papel, Lápis de cor", label="Recursos:", indent=1) in blocks
    # Etapa sem recursos não gera a linha 'Recursos:'
    recursos = [b for b in blocks if isinstance(b, Paragraph) and b.label == "Recursos:"]
    assert len(recursos) == 2


def test_assessment_and_resources(sample_plan):
    blocks = build_document(sample_plan)
    texts = _texts(blocks)

    assert Paragraph("Observação, Ficha de registro", label="Instrumentos:", indent=1) in blocks
    assert not any("0.4" in t for t in texts)
    assert BulletItem(
        "[Vídeo] Frações equivalentes: https://www.youtube.com/results?search_query=fracoes+equivalentes"
    ) in blocks
    assert BulletItem("Instruções em etapas curtas.") in blocks
    assert blocks[-1] == Paragraph("Retomar o conteúdo na aula seguinte.")


def test_links_are_kept_exactly_as_received(sample_plan):
    odd_link = "https://www.youtube.com/results?search_query=fra%C3%A7%C3%B5es&sp=EgIQAQ%3D%3D"
    sample_plan.plano_aula.material_de_apoio[0].link = odd_link
    assert any(odd_link in t for t in _texts(build_document(sample_plan)))
