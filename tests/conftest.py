import io
import os
import sys
from pathlib import Path

import pytest

# Keep the repository free of Python bytecode and __pycache__ artifacts during tests.
sys.dont_write_bytecode = True

TESTS_ROOT = Path(__file__).resolve().parent
REPO_ROOT = TESTS_ROOT.parent
SRC_ROOT = REPO_ROOT / "src"

# Make src/ importable as 'factual'
for p in (SRC_ROOT, TESTS_ROOT):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))


from factual.core.session import FactSession, reset_default_session
from factual.core.stdlib_logging import reset_logging_for_tests


@pytest.fixture(autouse=True)
def _isolate_factual_state(monkeypatch):
    """Drop FACTUAL_* overrides and any default session between tests."""
    for key in list(os.environ):
        if key.startswith("FACTUAL_"):
            monkeypatch.delenv(key, raising=False)
    reset_default_session()
    yield
    reset_default_session()
    reset_logging_for_tests()


@pytest.fixture
def isolated_imports():
    """Restore sys.path and sys.modules after tests that import fact modules."""
    saved_path = list(sys.path)
    saved_modules = set(sys.modules)
    yield
    sys.path[:] = saved_path
    for name in set(sys.modules) - saved_modules:
        del sys.modules[name]


@pytest.fixture
def report_stream() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def session(tmp_path: Path, report_stream: io.StringIO):
    """An active session with default configuration, working in namespace pkg.x."""
    s = FactSession(repo_root=tmp_path, stream=report_stream, namespace="pkg.x")
    with s.activated():
        yield s


@pytest.fixture
def fact_project(tmp_path: Path, isolated_imports):
    """A project root with an empty ``tests/`` directory for fact modules."""
    (tmp_path / "tests").mkdir()
    return tmp_path
