"""Root test configuration: document-tree helpers and cleanup of runtime artifacts"""

import os
import shutil
from pathlib import Path

import pytest

from doclayout.core.parse import document_root, parse_html


_PROJECT_ROOT = Path(__file__).parent.parent

_CLEANUP_DIRS = ["layouts"]


@pytest.fixture(scope="session", autouse=True)
def cleanup_artifacts():
    """Remove layout output written to the project root during the test session."""
    yield
    for name in _CLEANUP_DIRS:
        p = _PROJECT_ROOT / name
        if p.exists():
            shutil.rmtree(p)


@pytest.fixture(name="root_of")
def root_of_fixture():
    """Return a function that parses an HTML string and returns its <body>."""
    def _root(html: str):
        return document_root(parse_html(html))
    return _root


@pytest.fixture(autouse=True)
def isolate_config(tmp_path, monkeypatch):
    """Keep config.yaml and DOCLAYOUT_* variables from leaking into tests."""
    monkeypatch.chdir(tmp_path)
    for name in list(os.environ):
        if name.startswith("DOCLAYOUT_"):
            monkeypatch.delenv(name, raising=False)
