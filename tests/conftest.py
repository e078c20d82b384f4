"""Shared fixtures: isolate tests from NAMEGEN_* environment settings."""

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import namegen.config as namegen_config


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Clear NAMEGEN_* variables and the cached config."""
    for key in ('NAMEGEN_TOKENS', 'NAMEGEN_SEED', 'NAMEGEN_RNG'):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setattr(namegen_config, '_config', namegen_config.Config())
    yield
