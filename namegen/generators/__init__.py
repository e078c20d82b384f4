#!/usr/bin/env python3
"""
Name Generators
===============
Provides the pattern-driven name generator and its collaborators:
- Tokens: category tables (built-in or loaded from JSON/YAML)
- Entropy: seeded random sources (xorshift, Mersenne Twister)
- Pattern: the single-pass pattern interpreter
"""

from .tokens import (
    NamegenError,
    TokenLoadError,
    TokenTable,
    DEFAULT_TOKENS,
    CATEGORY_DESCRIPTIONS,
    default_table,
    load_tokens,
)
from .entropy import (
    RANGE_MAX,
    RandomSource,
    XorShiftRandom,
    SeededRandom,
    RNG_KINDS,
    get_rng,
)
from .pattern import (
    MAX_DEPTH,
    ReturnCode,
    PatternError,
    InvalidPatternError,
    PatternTooDeepError,
    GenerationResult,
    PatternGenerator,
    check_structure,
    generate_name,
)

__all__ = [
    # Tokens
    'NamegenError',
    'TokenLoadError',
    'TokenTable',
    'DEFAULT_TOKENS',
    'CATEGORY_DESCRIPTIONS',
    'default_table',
    'load_tokens',
    # Entropy
    'RANGE_MAX',
    'RandomSource',
    'XorShiftRandom',
    'SeededRandom',
    'RNG_KINDS',
    'get_rng',
    # Pattern
    'MAX_DEPTH',
    'ReturnCode',
    'PatternError',
    'InvalidPatternError',
    'PatternTooDeepError',
    'GenerationResult',
    'PatternGenerator',
    'check_structure',
    'generate_name',
]
