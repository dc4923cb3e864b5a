import pytest

from ai_translate.prompts import PromptTemplate, PromptTemplateLoader, get_template_loader


def test_packaged_translator_prompt_metadata():
    template = get_template_loader().load("translator")

    assert template.name == "translator"
    assert template.variables == ["source", "target", "context_sentence", "text"]


def test_render_is_single_pass():
    template = PromptTemplate.parse("Say {{ text }} in {{ target }}")

    assert template.render(text="{{ target }}", target="de") == "Say {{ target }} in de"


def test_render_requires_declared_variables():
    template = PromptTemplate.parse("---\nname: t\nvariables: [a, b]\n---\n{{ a }} {{ b }}")

    with pytest.raises(KeyError):
        template.render(a="x")
    assert template.render(a="x", b="") == "x "


def test_variables_inferred_without_frontmatter():
    template = PromptTemplate.parse("{{ x }} and {{ y }} and {{ x }}")

    assert template.variables == ["x", "y"]
    assert template.metadata == {}


def test_missing_template(tmp_path):
    with pytest.raises(FileNotFoundError):
        PromptTemplateLoader(str(tmp_path)).load("nope")
