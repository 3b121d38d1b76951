"""Tests for the command line interface."""

from click.testing import CliRunner

from mermaid_peg.__main__ import main
from mermaid_peg.types import DiagramKind


def _write(tmp_path, name, text):
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    return str(path)


def test_import():
    import mermaid_peg

    assert mermaid_peg.parse is not None


def test_cli_help():
    runner = CliRunner()
    result = runner.invoke(main, ["--help"])
    assert result.exit_code == 0
    assert "Check Mermaid diagram files" in result.output


def test_list_types():
    result = CliRunner().invoke(main, ["--list-types"])
    assert result.exit_code == 0
    assert result.output.split() == [kind.value for kind in DiagramKind]


def test_valid_file(tmp_path):
    path = _write(tmp_path, "flow.mmd", "graph TD\nA --> B\n")
    result = CliRunner().invoke(main, [path])
    assert result.exit_code == 0
    assert f"{path}: flowchart (valid)" in result.output


def test_graph_counts(tmp_path):
    path = _write(tmp_path, "flow.mmd", "graph TD\nA --> B\nB --> C\n")
    result = CliRunner().invoke(main, ["--graph", path])
    assert result.exit_code == 0
    assert "nodes=3 edges=2" in result.output


def test_graph_skipped_for_charts(tmp_path):
    path = _write(tmp_path, "pie.mmd", 'pie\n"A" : 1\n')
    result = CliRunner().invoke(main, ["--graph", path])
    assert result.exit_code == 0
    assert "pie (valid)" in result.output
    assert "nodes=" not in result.output


def test_stdin():
    result = CliRunner().invoke(main, [], input='pie\n"A" : 1\n')
    assert result.exit_code == 0
    assert "<stdin>: pie (valid)" in result.output


def test_parse_error_exits_nonzero(tmp_path):
    good = _write(tmp_path, "good.mmd", "graph TD\nA --> B\n")
    bad = _write(tmp_path, "bad.mmd", "flowchart TD\nA[Start\n")
    result = CliRunner().invoke(main, [bad, good])
    assert result.exit_code == 1
    assert "line 2, column 8" in result.output
    assert f"{good}: flowchart (valid)" in result.output


def test_explicit_type(tmp_path):
    path = _write(tmp_path, "chart.mmd", 'pie\n"A" : 1\n')
    result = CliRunner().invoke(main, ["--type", "gantt", path])
    assert result.exit_code == 1
    assert "Parse error in gantt" in result.output


def test_unknown_type_option():
    result = CliRunner().invoke(main, ["-t", "venn"], input="")
    assert result.exit_code == 2
    assert "Unknown diagram type 'venn'" in result.output


def test_lenient(tmp_path):
    path = _write(tmp_path, "state.mmd", "stateDiagram-v2\nA --> B\nclass Ghost bad\n")
    strict = CliRunner().invoke(main, [path])
    assert strict.exit_code == 1
    assert "unknown state 'Ghost'" in strict.output
    lenient = CliRunner().invoke(main, ["--lenient", path])
    assert lenient.exit_code == 0
    assert "state_diagram (valid)" in lenient.output


def test_invalid_model_exits_nonzero(tmp_path):
    path = _write(tmp_path, "journey.mmd", "journey\n")
    result = CliRunner().invoke(main, [path])
    assert result.exit_code == 1
    assert "user_journey (invalid)" in result.output


def test_missing_file():
    result = CliRunner().invoke(main, ["does-not-exist.mmd"])
    assert result.exit_code == 2
