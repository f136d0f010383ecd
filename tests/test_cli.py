import pickle
import sys
import textwrap

import pytest
from typer.testing import CliRunner

from rog.cli import app, load_test
from rog import CompositeTest, LeafTest

runner = CliRunner()

SUITE_SOURCE = textwrap.dedent(
    """\
    from rog import AssertPolicy, CompositeTest, LeafTest


    def passing(t):
        t.assert_true(True, "one is one")


    def failing(t):
        t.assert_true(False, "two is three")


    def build():
        return CompositeTest(
            "Suite",
            [
                LeafTest("A", passing),
                LeafTest("B", failing, policy=AssertPolicy.RUN_ALL),
            ],
        )


    suite = build()
    green = LeafTest("Green", passing)


    class Crashing(LeafTest):
        def __init__(self):
            super().__init__("Crashing")

        def test(self):
            raise RuntimeError("exploded")


    not_a_test = 42
    """
)


@pytest.fixture
def suite_file(tmp_path):
    path = tmp_path / "sample_suite.py"
    path.write_text(SUITE_SOURCE)
    yield path
    sys.modules.pop("sample_suite", None)


# --- load_test ---


def test_load_instance(suite_file):
    test = load_test(f"{suite_file}:suite")
    assert isinstance(test, CompositeTest)
    assert test.name == "Suite"


def test_load_factory(suite_file):
    assert isinstance(load_test(f"{suite_file}:build"), CompositeTest)


def test_load_subclass(suite_file):
    test = load_test(f"{suite_file}:Crashing")
    assert isinstance(test, LeafTest)
    assert test.name == "Crashing"


def test_loaded_suite_file_is_importable_by_name(suite_file):
    test = load_test(f"{suite_file}:Crashing")
    module = sys.modules[type(test).__module__]
    assert module.Crashing is type(test)
    assert pickle.loads(pickle.dumps(test)).name == "Crashing"


def test_failed_suite_file_is_not_registered(tmp_path):
    path = tmp_path / "broken_suite.py"
    path.write_text("raise ImportError(\"broken\")\n")
    with pytest.raises(ImportError, match="broken"):
        load_test(f"{path}:suite")
    assert "broken_suite" not in sys.modules


def test_load_module_path(suite_file, monkeypatch):
    monkeypatch.syspath_prepend(str(suite_file.parent))
    test = load_test("sample_suite:green")
    assert isinstance(test, LeafTest)
    assert test.name == "Green"


def test_load_rejects_non_test(suite_file):
    with pytest.raises(TypeError, match="does not provide a test"):
        load_test(f"{suite_file}:not_a_test")


def test_load_rejects_malformed_target():
    with pytest.raises(ValueError, match="module:attr"):
        load_test("no_colon_here")


def test_load_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_test(f"{tmp_path / 'missing.py'}:suite")


# --- run ---


def test_run_full_report(suite_file):
    result = runner.invoke(app, ["run", f"{suite_file}:suite", "--no-color"])
    assert result.exit_code == 1
    lines = result.output.splitlines()
    assert lines == [
        "Suite: Partial",
        "  A: Pass",
        "    [PASS] one is one",
        "  B: Fail",
        "    [FAIL] two is three",
        "2 tests: 1 passed, 1 failed, 0 partial, 0 not evaluated",
    ]


def test_run_no_leaf_report(suite_file):
    result = runner.invoke(
        app, ["run", f"{suite_file}:suite", "--output", "no-leaf", "--no-color"]
    )
    assert result.exit_code == 1
    assert result.output.splitlines()[:3] == ["Suite: Partial", "  A: Pass", "  B: Fail"]
    assert "[PASS]" not in result.output


def test_run_passing_suite_exits_zero(suite_file):
    result = runner.invoke(app, ["run", f"{suite_file}:green", "-o", "no-leaf"])
    assert result.exit_code == 0
    assert "Green: Pass" in result.output


def test_run_crashing_test_is_reported(suite_file):
    result = runner.invoke(app, ["run", f"{suite_file}:Crashing", "--no-color"])
    assert result.exit_code == 1
    assert "Crashing: Fail" in result.output
    assert "[FAIL] Unhandled exception: exploded" in result.output


def test_run_uses_config_file(suite_file, tmp_path):
    config = tmp_path / "rog.yaml"
    config.write_text("output: no-leaf\ncolor: false\nindent: '> '\n")
    result = runner.invoke(app, ["run", f"{suite_file}:suite", "--config", str(config)])
    assert result.output.splitlines()[:3] == ["Suite: Partial", "> A: Pass", "> B: Fail"]


def test_run_option_overrides_config(suite_file, tmp_path):
    config = tmp_path / "rog.yaml"
    config.write_text("output: no-leaf\n")
    result = runner.invoke(
        app,
        ["run", f"{suite_file}:suite", "-c", str(config), "-o", "full", "--no-color"],
    )
    assert "[PASS] one is one" in result.output


def test_run_writes_debug_log(suite_file, tmp_path):
    debug_log = tmp_path / "logs" / "debug.log"
    result = runner.invoke(
        app, ["run", f"{suite_file}:suite", "--debug-log", str(debug_log)]
    )
    assert result.exit_code == 1
    content = debug_log.read_text()
    assert "Running composite test 'Suite'" in content
    assert "Leaf test 'B' finished: Fail" in content
    assert "Run finished: 2 tests" in content


def test_run_twice_in_same_process(suite_file, tmp_path):
    debug_log = tmp_path / "debug.log"
    args = ["run", f"{suite_file}:green", "--debug-log", str(debug_log)]
    assert runner.invoke(app, args).exit_code == 0
    assert runner.invoke(app, args).exit_code == 0


def test_run_missing_config(suite_file):
    result = runner.invoke(app, ["run", f"{suite_file}:suite", "-c", "nonexistent.yaml"])
    assert result.exit_code != 0


def test_run_invalid_config(suite_file, tmp_path):
    config = tmp_path / "rog.yaml"
    config.write_text("output: everything\n")
    result = runner.invoke(app, ["run", f"{suite_file}:suite", "-c", str(config)])
    assert result.exit_code == 1


def test_run_unloadable_target(tmp_path):
    result = runner.invoke(app, ["run", f"{tmp_path / 'missing.py'}:suite"])
    assert result.exit_code == 1


# --- show ---


def test_show_does_not_run(suite_file):
    result = runner.invoke(app, ["show", f"{suite_file}:suite"])
    assert result.exit_code == 0
    assert result.output.splitlines() == [
        "Suite: NotEvaluated",
        "  A: NotEvaluated",
        "  B: NotEvaluated",
    ]


def test_show_unloadable_target():
    result = runner.invoke(app, ["show", "bad-target"])
    assert result.exit_code == 1
