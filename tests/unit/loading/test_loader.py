from __future__ import annotations

import io
from pathlib import Path

import pytest
from helpers.facts import write_module

from factual.core.facts.compendium import Compendium
from factual.core.loading import FactLoader, reload_namespace
from factual.core.reporting import PrintLevel, Reporter

pytestmark = pytest.mark.usefixtures("isolated_imports")


def make_loader(roots, module_loader, level=PrintLevel.PRINT_NAMESPACES):
    stream = io.StringIO()
    compendium = Compendium()
    loader = FactLoader(compendium, Reporter(level, stream=stream), roots, module_loader=module_loader)
    return loader, stream


def test_each_namespace_is_forgotten_announced_then_loaded(tmp_path: Path) -> None:
    events = []
    loader, stream = make_loader([tmp_path], events.append)
    loader.reporter.report_changed_namespace = lambda ns: events.append(("announce", ns))
    loader.compendium.remove_namespace = lambda ns: events.append(("forget", ns))

    assert loader.load(["pkg.a", "pkg.b"]) is None

    assert events == [
        ("forget", "pkg.a"),
        ("announce", "pkg.a"),
        "pkg.a",
        ("forget", "pkg.b"),
        ("announce", "pkg.b"),
        "pkg.b",
    ]


def test_load_error_is_reported_and_later_namespaces_still_load(tmp_path: Path, caplog) -> None:
    loaded = []

    def module_loader(name):
        if name == "pkg.broken":
            raise SyntaxError("invalid syntax")
        loaded.append(name)

    loader, stream = make_loader([tmp_path], module_loader)
    loader.load(["pkg.broken", "pkg.ok"])

    output = stream.getvalue()
    assert loaded == ["pkg.ok"]
    assert "= Namespace pkg.broken\n\nLOAD FAILURE for pkg.broken" in output
    assert "SyntaxError: invalid syntax" in output
    assert loader.reporter.failures == 1
    assert output.rstrip().endswith("FAILURE: 1 check failed.  (But 0 succeeded.)")
    assert any("pkg.broken" in r.getMessage() for r in caplog.records)


def test_counters_reset_before_loading(tmp_path: Path) -> None:
    loader, _ = make_loader([tmp_path], lambda name: None)
    loader.reporter.failures = 4
    loader.load(["pkg.a"])
    assert loader.reporter.failures == 0


def test_no_specs_discovers_search_roots(tmp_path: Path) -> None:
    root = tmp_path / "tests"
    write_module(root, "t_b", "")
    write_module(root, "t_a", "")
    loaded = []
    loader, _ = make_loader([root], loaded.append)

    loader.load([])

    assert loaded == ["t_a", "t_b"]


def test_reload_namespace_picks_up_changes(fact_project: Path) -> None:
    root = fact_project / "tests"
    write_module(root, "reload_probe_mod", "VALUE = 1\n")
    loader, _ = make_loader([root], None)
    loader.load(["reload_probe_mod"])

    write_module(root, "reload_probe_mod", "VALUE = 2\n")
    module = reload_namespace("reload_probe_mod")

    assert module.VALUE == 2


def test_broken_package_init_does_not_stop_later_specs(fact_project: Path) -> None:
    root = fact_project / "tests"
    write_module(root, "ldr_broken.t_inner", "VALUE = 1\n")
    (root / "ldr_broken" / "__init__.py").write_text("raise RuntimeError('bad init')\n", encoding="utf-8")
    write_module(root, "ldr_fine", "VALUE = 2\n")
    loaded = []

    def module_loader(name):
        module = reload_namespace(name)
        loaded.append(name)
        return module

    loader, stream = make_loader([root], module_loader)
    loader.load(["ldr_broken.*", "ldr_fine"])

    output = stream.getvalue()
    assert loaded == ["ldr_fine"]
    assert "LOAD FAILURE for ldr_broken.t_inner" in output
    assert "RuntimeError: bad init" in output
    assert loader.reporter.failures == 1
    assert output.rstrip().endswith("FAILURE: 1 check failed.  (But 0 succeeded.)")
