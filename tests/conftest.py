import os
import sys
from pathlib import Path

import pytest

# Keep the repository free of Python bytecode and __pycache__ artifacts during tests.
sys.dont_write_bytecode = True

TESTS_ROOT = Path(__file__).resolve().parent
REPO_ROOT = TESTS_ROOT.parent
SRC_ROOT = REPO_ROOT / "src"

# Make src/ importable as 'utilkit'
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))

from utilkit.core.config import clear_all_caches  # noqa: E402
from utilkit.core.logging import reset_logging_for_tests  # noqa: E402


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """Run every test against bundled defaults only.

    HOME and the working directory point at empty temp dirs so user and
    project config layers are absent unless a test writes them, and leaked
    UTILKIT_* overrides are removed.
    """
    home = tmp_path / "home"
    project = tmp_path / "project"
    home.mkdir()
    project.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(project)
    for key in list(os.environ):
        if key.startswith("UTILKIT_"):
            monkeypatch.delenv(key, raising=False)

    clear_all_caches()
    yield project
    clear_all_caches()
    reset_logging_for_tests()
