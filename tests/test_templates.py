from pathlib import Path

import pytest

from prefroom.codegen.core.templates import TemplateEngine, TemplateError
from prefroom.codegen.languages.java import JavaRenderer
from prefroom.codegen.languages.python import PythonRenderer


@pytest.fixture
def template_dir(tmp_path):
    (tmp_path / "greeting.j2").write_text(
        "{% for name in names %}\nhello {{ name }}\n{% endfor %}\n"
    )
    return tmp_path


def test_renders_templates_from_directory(template_dir):
    engine = TemplateEngine(template_dir)
    assert engine.template_exists("greeting.j2")
    assert engine.render_template("greeting.j2", {"names": ["room", "pref"]}) == (
        "hello room\nhello pref\n"
    )


def test_undefined_variables_fail(template_dir):
    with pytest.raises(TemplateError, match="greeting.j2"):
        TemplateEngine(template_dir).render_template("greeting.j2", {})


def test_missing_template(template_dir):
    engine = TemplateEngine(template_dir)
    assert not engine.template_exists("nope.j2")
    with pytest.raises(TemplateError):
        engine.render_template("nope.j2", {})


@pytest.mark.parametrize("directory", [None, Path("/nonexistent/templates")])
def test_engine_without_directory_has_no_templates(directory):
    engine = TemplateEngine(directory)
    assert not engine.template_exists("class.java.j2")
    with pytest.raises(TemplateError):
        engine.render_template("class.java.j2", {})


def test_renderer_templates_ship_with_package():
    assert JavaRenderer().template_exists("class.java.j2")
    assert PythonRenderer().template_exists("module.py.j2")
