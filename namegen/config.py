#!/usr/bin/env python3
"""
Configuration Management
========================
Loads settings from the environment (and an optional .env file).
Provides named pattern presets.
"""

import os
from pathlib import Path
from dataclasses import dataclass
from typing import Optional


# =============================================================================
# Pattern Presets
# =============================================================================
# Named patterns usable anywhere a pattern is accepted.

PATTERN_PRESETS = {
    "simple": {
        "pattern": "!ssV'!i",
        "description": "Two syllables, a vowel sound and an insult",
    },
    "mushy": {
        "pattern": "v!M",
        "description": "Vowel followed by a capitalized mushy ending",
    },
    "dim": {
        "pattern": "c(dim)",
        "description": "Consonant with a literal 'dim' suffix",
    },
    "insult": {
        "pattern": "C!i",
        "description": "Consonant cluster followed by a capitalized insult",
    },
    "literal_either": {
        "pattern": "<(C!i)|(v!M)>",
        "description": "One of two literal spellings",
    },
    "either": {
        "pattern": "<C!i|v!M|>",
        "description": "Insult, mushy name or nothing at all",
    },
    "stupid": {
        "pattern": "!Dd",
        "description": "Name suited for a stupid person",
    },
}

# Patterns shown by the demo command
DEMO_PATTERNS = [
    "!ssV'!i",
    "v!M",
    "c(dim)",
    "C!i",
    "<(C!i)|(v!M)>",
    "<C!i|v!M|>",
]


def get_preset(name: str) -> str:
    """
    Resolve a preset name to its pattern.

    Presets are looked up only when asked for by name: preset names are
    themselves valid patterns, so a pattern is never reinterpreted as one.

    Args:
        name: Preset name (e.g., "mushy")

    Returns:
        The preset's pattern string

    Raises:
        ValueError: If the preset is unknown
    """
    preset = PATTERN_PRESETS.get(name)
    if preset is None:
        available = ', '.join(sorted(PATTERN_PRESETS))
        raise ValueError(f"Unknown preset '{name}'. Available presets: {available}")
    return preset["pattern"]


def list_presets() -> dict:
    """List all pattern presets with descriptions."""
    return {
        name: {
            "pattern": p["pattern"],
            "description": p["description"],
        }
        for name, p in PATTERN_PRESETS.items()
    }


# =============================================================================
# Application Configuration
# =============================================================================

@dataclass
class Config:
    """Application configuration"""
    tokens_path: Optional[str] = None
    seed: Optional[int] = None
    rng: Optional[str] = None

    @property
    def has_tokens(self) -> bool:
        return bool(self.tokens_path)

    @property
    def has_seed(self) -> bool:
        return self.seed is not None


ENV_PREFIX = 'NAMEGEN_'


def load_env(env_path: Path = None) -> dict:
    """
    Read NAMEGEN_* assignments from a .env file.

    Accepts `KEY=value`, `export KEY=value` and quoted values. Other keys
    are ignored and the process environment is left untouched.
    """
    if env_path is None:
        # Look for .env in package parent directory
        env_path = Path(__file__).parent.parent / '.env'

    env_vars = {}
    if not env_path.exists():
        return env_vars

    for line in env_path.read_text(encoding='utf-8').splitlines():
        line = line.strip()
        if not line or line.startswith('#') or '=' not in line:
            continue
        if line.startswith('export '):
            line = line[len('export '):]
        key, value = (part.strip() for part in line.split('=', 1))
        if not key.startswith(ENV_PREFIX):
            continue
        if len(value) >= 2 and value[0] == value[-1] and value[0] in ('"', "'"):
            value = value[1:-1]
        env_vars[key] = value

    return env_vars


def _parse_seed(value: Optional[str]) -> Optional[int]:
    if value is None or value == '':
        return None
    try:
        return int(value, 0)
    except ValueError:
        raise ValueError(f"NAMEGEN_SEED must be an integer, got {value!r}") from None


def get_config(env_path: Path = None) -> Config:
    """Get configuration from environment."""
    env = load_env(env_path)

    return Config(
        tokens_path=env.get('NAMEGEN_TOKENS') or os.environ.get('NAMEGEN_TOKENS'),
        seed=_parse_seed(env.get('NAMEGEN_SEED') or os.environ.get('NAMEGEN_SEED')),
        rng=env.get('NAMEGEN_RNG') or os.environ.get('NAMEGEN_RNG'),
    )


# Singleton config
_config = None

def config() -> Config:
    """Get the singleton config instance."""
    global _config
    if _config is None:
        _config = get_config()
    return _config
