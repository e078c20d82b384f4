#!/usr/bin/env python3
"""
Namegen - Pattern-Driven Name Generator
=======================================

Generates pseudo-random names (for games, simulations and the like) from a
compact pattern language and a seed.

Quick Start
-----------
    from namegen import NameGen

    gen = NameGen()

    # One name from a pattern and a seed
    names = gen.generate("!ssV'!i", seed=42)

    # Several names, chaining the generator state
    names = gen.generate("<C!i|v!M|>", count=5, seed=42)

    # Custom token categories
    gen.load_tokens("tokens.yaml", extend=True)

Modules
-------
    namegen.generators - Pattern interpreter, token tables, random sources
    namegen.config     - Environment configuration and pattern presets
    namegen.settings   - YAML application settings

CLI Usage
---------
    python -m namegen generate "!ssV'!i" -n 10
    python -m namegen generate --preset mushy --seed 42
    python -m namegen demo
"""

__version__ = "0.1.0"
__author__ = "Namegen"

import logging
import time
from typing import List, Union
from pathlib import Path

from . import generators
from . import config

from .generators import (
    NamegenError,
    TokenLoadError,
    TokenTable,
    DEFAULT_TOKENS,
    default_table,
    load_tokens,
    RandomSource,
    XorShiftRandom,
    SeededRandom,
    get_rng,
    MAX_DEPTH,
    ReturnCode,
    PatternError,
    InvalidPatternError,
    PatternTooDeepError,
    GenerationResult,
    PatternGenerator,
    generate_name,
)
from .config import (
    Config,
    get_config,
    PATTERN_PRESETS,
    get_preset,
    list_presets,
)
from .settings import generator_settings, resolve_path

logger = logging.getLogger(__name__)


# =============================================================================
# Main Interface
# =============================================================================

class NameGen:
    """
    Unified interface for pattern-based name generation.

    Owns a token table; replacing it affects later calls only.

    Example:
        gen = NameGen()
        for result in gen.generate("!BVC", count=3, seed=7):
            print(result.name)
    """

    def __init__(self, tokens: Union[TokenTable, str, Path] = None,
                 rng: str = None, max_depth: int = None):
        """
        Initialize the generator.

        Args:
            tokens: Token table or path to a token file. Defaults to the
                file named by NAMEGEN_TOKENS / tokens.path, else built-ins.
            rng: Random source kind ('xorshift' or 'mersenne')
            max_depth: Group nesting limit
        """
        env = config.config()
        defaults = generator_settings()
        self._rng = rng or env.rng or defaults.rng
        self._max_depth = max_depth if max_depth is not None else defaults.max_depth

        if tokens is None:
            path = env.tokens_path if env.has_tokens else defaults.tokens_path
            if path:
                tokens = load_tokens(resolve_path(path), extend=defaults.tokens_extend)
            else:
                tokens = default_table()
        elif not isinstance(tokens, TokenTable):
            tokens = load_tokens(tokens)

        self._generator = PatternGenerator(tokens, max_depth=self._max_depth, rng=self._rng)

    # -------------------------------------------------------------------------
    # Tokens
    # -------------------------------------------------------------------------

    @property
    def tokens(self) -> TokenTable:
        return self._generator.tokens

    def load_tokens(self, path: Union[str, Path], extend: bool = False) -> TokenTable:
        """
        Replace the token table from a JSON/YAML file.

        On failure the current table is kept and TokenLoadError propagates.
        """
        table = load_tokens(path, extend=extend)
        self._generator = PatternGenerator(table, max_depth=self._max_depth, rng=self._rng)
        return table

    def reset_tokens(self) -> TokenTable:
        """Restore the built-in token table."""
        self._generator = PatternGenerator(default_table(), max_depth=self._max_depth,
                                           rng=self._rng)
        return self.tokens

    # -------------------------------------------------------------------------
    # Generation
    # -------------------------------------------------------------------------

    def generate(self, pattern: str = None, count: int = 1, seed: int = None,
                 preset: str = None) -> List[GenerationResult]:
        """
        Generate names from a pattern or a named preset.

        Args:
            pattern: Pattern string, used exactly as written
            count: Number of names
            seed: Initial seed; defaults to NAMEGEN_SEED, else the clock
            preset: Preset name (see PATTERN_PRESETS), instead of pattern

        Returns:
            List of GenerationResult. A bad pattern yields a single failed
            result.

        Raises:
            ValueError: If count < 1, the preset is unknown, or not exactly
                one of pattern and preset is given.
        """
        if count < 1:
            raise ValueError(f"count must be positive, got {count}")
        if (pattern is None) == (preset is None):
            raise ValueError("Give exactly one of pattern or preset")
        if preset is not None:
            pattern = get_preset(preset)

        env = config.config()
        if seed is None and env.has_seed:
            seed = env.seed
        if seed is None:
            seed = time.time_ns() & 0xFFFFFFFF

        rng = get_rng(seed, self._rng)
        results = []
        for _ in range(count):
            result = self._generator.generate(pattern, rng)
            results.append(result)
            if not result.ok:
                logger.debug(f"Stopping after failed pattern {pattern!r}: {result.code.name}")
                break
        return results

    def generate_one(self, pattern: str = None, seed: int = None, preset: str = None) -> str:
        """Generate a single name, raising PatternError on a bad pattern."""
        return self.generate(pattern, seed=seed, preset=preset)[0].raise_for_status().name

    def validate(self, pattern: str) -> ReturnCode:
        return self._generator.validate(pattern)

    def presets(self) -> dict:
        return list_presets()


__all__ = [
    '__version__',
    'NameGen',
    # Generators
    'PatternGenerator',
    'GenerationResult',
    'ReturnCode',
    'MAX_DEPTH',
    'generate_name',
    'TokenTable',
    'DEFAULT_TOKENS',
    'default_table',
    'load_tokens',
    'RandomSource',
    'XorShiftRandom',
    'SeededRandom',
    'get_rng',
    # Errors
    'NamegenError',
    'PatternError',
    'InvalidPatternError',
    'PatternTooDeepError',
    'TokenLoadError',
    # Config
    'Config',
    'get_config',
    'PATTERN_PRESETS',
    'get_preset',
    'list_presets',
]
