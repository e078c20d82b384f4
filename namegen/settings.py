#!/usr/bin/env python3
"""Settings loader for namegen."""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any
import os

import yaml

from namegen.generators.entropy import RNG_KINDS

PACKAGE_ROOT = Path(__file__).resolve().parent
PROJECT_ROOT = PACKAGE_ROOT.parent
CONFIG_DIR = PACKAGE_ROOT / "configs"
APP_CONFIG_PATH = CONFIG_DIR / "app.yaml"


@lru_cache(maxsize=1)
def load_app_config() -> dict:
    if not APP_CONFIG_PATH.exists():
        raise FileNotFoundError(f"Missing app config: {APP_CONFIG_PATH}")
    data = yaml.safe_load(APP_CONFIG_PATH.read_text(encoding="utf-8"))
    return data or {}


def get_setting(path: str, default: Any = None) -> Any:
    """Get nested setting by dotted path."""
    data = load_app_config()
    current: Any = data
    for part in path.split('.'):
        if not isinstance(current, dict) or part not in current:
            return default
        current = current[part]
    return default if current is None else current


def resolve_path(value: str, base: Path | None = None) -> Path:
    """Resolve a path string relative to project root (unless absolute)."""
    if value is None:
        raise ValueError("path value is required")
    expanded = os.path.expanduser(str(value))
    path = Path(expanded)
    if not path.is_absolute():
        base = base or PROJECT_ROOT
        path = (base / path).resolve()
    return path


@dataclass(frozen=True)
class GeneratorSettings:
    """Typed view of the `generator` and `tokens` sections of app.yaml."""
    max_depth: int = 32
    rng: str = "xorshift"
    tokens_path: str | None = None
    tokens_extend: bool = True


def generator_settings() -> GeneratorSettings:
    """
    Read generator defaults from app.yaml.

    Raises:
        ValueError: If max_depth is not a positive integer or rng is not
            a known random source kind.
    """
    defaults = GeneratorSettings()
    try:
        max_depth = int(get_setting("generator.max_depth", defaults.max_depth))
    except (TypeError, ValueError):
        raise ValueError(
            f"generator.max_depth must be an integer in {APP_CONFIG_PATH}"
        ) from None
    if max_depth < 1:
        raise ValueError(f"generator.max_depth must be at least 1, got {max_depth}")

    rng = str(get_setting("generator.rng", defaults.rng))
    if rng not in RNG_KINDS:
        raise ValueError(f"generator.rng must be one of {', '.join(sorted(RNG_KINDS))}, got {rng!r}")

    path = get_setting("tokens.path")
    return GeneratorSettings(
        max_depth=max_depth,
        rng=rng,
        tokens_path=str(path) if path else None,
        tokens_extend=bool(get_setting("tokens.extend", defaults.tokens_extend)),
    )


__all__ = [
    "load_app_config",
    "get_setting",
    "resolve_path",
    "GeneratorSettings",
    "generator_settings",
    "PROJECT_ROOT",
    "APP_CONFIG_PATH",
]
