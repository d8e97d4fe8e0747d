"""Shared test fixtures and configuration."""

import os
from pathlib import Path
import sys

import pytest


SRC_ROOT = Path(__file__).resolve().parents[1] / "src"
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))


# Keep settings independent of the developer's shell and any local .env overrides
TEST_ENV = {
    "LOG_LEVEL": "info",
    "LOG_JSON": "true",
    "TRACING_ENABLED": "false",
    "SERVICE_NAME": "term-facets-tests",
    "STOPWORDS_EXTENSION": ".txt",
}

for key, value in TEST_ENV.items():
    os.environ[key] = value
os.environ.pop("STOPWORDS_DIR", None)

from term_facets.search import stopwords as stopwords_module
from term_facets.search.stopwords import StopwordRegistry


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Reset settings-related environment variables before each test."""
    for key, value in TEST_ENV.items():
        monkeypatch.setenv(key, value)
    monkeypatch.delenv("STOPWORDS_DIR", raising=False)


@pytest.fixture(autouse=True)
def isolated_default_registry(monkeypatch):
    """Give every test a fresh process-shared registry."""
    monkeypatch.setitem(stopwords_module._default_holder, "registry", None)


@pytest.fixture
def stopwords_dir(tmp_path):
    """Directory with small stopword lists written per test."""
    directory = tmp_path / "stopwords"
    directory.mkdir()
    (directory / "english.txt").write_text("the\nand\n| comment\nof  | preposition\n", encoding="utf-8")
    (directory / "french.txt").write_text("le\nla\nles\n", encoding="utf-8")
    return directory


@pytest.fixture
def registry(stopwords_dir):
    return StopwordRegistry(stopwords_dir)
