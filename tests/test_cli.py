import io
import json

import pytest

from prefroom.cli import main
from prefroom.codegen import generate_from_manifest, load_manifest

MANIFEST = {
    "entities": {
        "user": {"name": "User", "package": "com.x"},
        "app": {"name": "App", "package": "com.x"},
    },
    "components": [
        {
            "name": "Manager",
            "package": "com.x",
            "keys": ["user", "app"],
            "methods": [
                {"name": "sync", "parameters": [{"name": "r", "type": "com.x.Request"}]}
            ],
        }
    ],
}


@pytest.fixture
def manifest_file(tmp_path):
    path = tmp_path / "manifest.json"
    path.write_text(json.dumps(MANIFEST))
    return path


def test_writes_java_files(manifest_file, tmp_path):
    out = tmp_path / "out"
    assert main([str(manifest_file), "--output-dir", str(out)]) == 0

    generated = out / "com" / "x" / "PreferenceComponent_Manager.java"
    code = generated.read_text(encoding="utf-8")
    assert "public class PreferenceComponent_Manager implements Manager {" in code
    assert "PreferenceRoom.inject(r);" in code


def test_writes_python_files_without_comments(manifest_file, tmp_path):
    out = tmp_path / "out"
    exit_code = main(
        [str(manifest_file), "-l", "py", "-o", str(out), "--no-comments", "--verbose"]
    )
    assert exit_code == 0

    code = (out / "com" / "x" / "PreferenceComponent_Manager.py").read_text()
    assert code.startswith("from __future__ import annotations")
    assert "class PreferenceComponent_Manager(Manager):" in code


def test_config_file(manifest_file, tmp_path):
    config = tmp_path / "config.json"
    config.write_text(json.dumps({"indent_size": 3}))
    out = tmp_path / "out"

    assert main([str(manifest_file), "--config", str(config), "-o", str(out)]) == 0
    code = (out / "com" / "x" / "PreferenceComponent_Manager.java").read_text()
    assert "\n   private static PreferenceComponent_Manager instance;" in code


def test_prints_to_stdout(manifest_file, capsys):
    assert main([str(manifest_file)]) == 0
    assert "PreferenceComponent_Manager" in capsys.readouterr().out


def test_failing_component_sets_exit_code(tmp_path):
    data = dict(MANIFEST)
    data["components"] = [dict(MANIFEST["components"][0], keys=["ghost"])]
    path = tmp_path / "bad.json"
    path.write_text(json.dumps(data))

    assert main([str(path), "-o", str(tmp_path / "out")]) == 1
    assert not (tmp_path / "out").exists()


def test_missing_input_file(tmp_path):
    assert main([str(tmp_path / "missing.json")]) == 1


def test_malformed_manifest(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text(json.dumps({"components": {}}))
    assert main([str(path)]) == 1


def test_unknown_language(manifest_file):
    assert main([str(manifest_file), "--language", "cobol"]) == 1


def test_requires_input():
    assert main([]) == 1


def test_list_languages(capsys):
    assert main(["--list-languages"]) == 0
    out = capsys.readouterr().out
    assert "java" in out
    assert "python" in out


def test_language_info(capsys):
    assert main(["--language-info", "python"]) == 0
    assert "PythonRenderer" in capsys.readouterr().out
    assert main(["--language-info", "cobol"]) == 1


def test_log_file(manifest_file, tmp_path):
    log_file = tmp_path / "prefroom.log"
    out = tmp_path / "out"
    assert main([str(manifest_file), "-o", str(out), "--log-file", str(log_file)]) == 0
    assert "Generated PreferenceComponent_Manager" in log_file.read_text()


def _expected_code(data, language="java"):
    [output] = generate_from_manifest(load_manifest(data), language)
    return output.result.code


def test_piped_stdout_is_exact_source(manifest_file, capsys):
    assert main([str(manifest_file)]) == 0
    captured = capsys.readouterr()
    assert captured.out == _expected_code(MANIFEST)


def test_long_lines_are_not_cropped(tmp_path, capsys):
    key = "very_long_preference_entity_key_name_for_testing"
    data = {
        "entities": {key: {"name": "VeryLongPreferenceEntityKeyNameForTesting", "package": "com.x"}},
        "components": [dict(MANIFEST["components"][0], keys=[key])],
    }
    path = tmp_path / "long.json"
    path.write_text(json.dumps(data))

    assert main([str(path)]) == 0
    out = capsys.readouterr().out
    assert out == _expected_code(data)
    assert max(len(line) for line in out.splitlines()) > 80
    assert (
        "instanceVeryLongPreferenceEntityKeyNameForTesting = "
        "Preference_VeryLongPreferenceEntityKeyNameForTesting.getInstance("
        "context.getApplicationContext());"
    ) in out


def test_piped_python_output(manifest_file, capsys):
    assert main([str(manifest_file), "-l", "python"]) == 0
    assert capsys.readouterr().out == _expected_code(MANIFEST, "python")


def test_failures_go_to_stderr(tmp_path, capsys):
    data = dict(MANIFEST)
    data["components"] = [
        MANIFEST["components"][0],
        dict(MANIFEST["components"][0], name="Broken", keys=["ghost"]),
    ]
    path = tmp_path / "mixed.json"
    path.write_text(json.dumps(data))

    assert main([str(path)]) == 1
    captured = capsys.readouterr()
    assert captured.out == _expected_code(MANIFEST)
    assert "✗ Broken:" in captured.err
    assert "unknown entity key 'ghost'" in captured.err


def test_invalid_injector_in_config_file_exits_with_error(manifest_file, tmp_path, capsys):
    config = tmp_path / "config.json"
    config.write_text(json.dumps({"injector_type": ""}))

    assert main([str(manifest_file), "--config", str(config)]) == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "injector_type" in captured.err


def test_reads_manifest_from_stdin(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO(json.dumps(MANIFEST)))
    assert main(["--stdin"]) == 0
    assert capsys.readouterr().out == _expected_code(MANIFEST)


def test_dash_reads_manifest_from_stdin(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO(json.dumps(MANIFEST)))
    assert main(["-"]) == 0
    assert capsys.readouterr().out == _expected_code(MANIFEST)


def test_invalid_stdin_json(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("{"))
    assert main(["--stdin"]) == 1
    assert "invalid JSON" in capsys.readouterr().err
