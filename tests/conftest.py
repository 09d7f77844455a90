"""pytest fixtures for testing."""

import logging
import shlex
import sys

import pytest


FAKE_RESOLVER = """\
import sys

for line in sys.stdin:
    sys.stdout.write("query:" + line)
sys.stdout.flush()
sys.exit(int(sys.argv[1]) if len(sys.argv) > 1 else 0)
"""


@pytest.fixture
def write_rules(tmp_path):
    """Write a rule file and return its path."""

    def _write(content: str, name: str = "rblcheckrc"):
        path = tmp_path / name
        path.write_text(content)
        return path

    return _write


@pytest.fixture
def fake_resolver(tmp_path):
    """Resolver stand-in echoing each input line as "query:<line>".

    An optional first argument becomes its exit code.
    """
    script = tmp_path / "fake_resolver.py"
    script.write_text(FAKE_RESOLVER)
    return [sys.executable, str(script)]


@pytest.fixture
def checker_env(monkeypatch, tmp_path, fake_resolver):
    """Environment pointing rblcheck at tmp_path rules and the fake resolver."""
    monkeypatch.setenv("RBLCHECK_RULES", str(tmp_path / "rblcheckrc"))
    monkeypatch.setenv("RBLCHECK_RESOLVER", shlex.join(fake_resolver))
    monkeypatch.setenv("LOG_FORMAT", "text")
    monkeypatch.delenv("VERBOSE", raising=False)
    return tmp_path


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Undo setup_logging() so later tests don't log into a closed capture."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    for handler in root.handlers[:]:
        if handler not in handlers:
            root.removeHandler(handler)
    root.setLevel(level)
