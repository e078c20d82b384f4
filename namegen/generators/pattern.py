#!/usr/bin/env python3
"""
Pattern Interpreter
===================
Generates a name from a compact pattern and a seed.

Pattern language:
- Category keys (see ``tokens``) are replaced by a random token of that
  category. A key with no category is emitted as-is.
- ``(...)`` emits its contents literally.
- ``<...>`` interprets its contents as a pattern.
- ``|`` separates alternatives inside either group kind (or at the top
  level). Empty alternatives are allowed: ``<c|v|>`` emits a consonant,
  a vowel or nothing.
- ``!`` capitalizes the next emitted component: ``!(foo)`` gives ``Foo``
  and ``v!s`` gives something like ``eRod``.

Rather than compiling the pattern, the name is produced in a single pass
using reservoir sampling. Every group remembers where its output started;
when a later alternative wins, output is truncated back to that point.
Alternatives that lose are skipped silently, and groups nested inside a
silent alternative draw no random numbers.

Usage:
    from namegen.generators.pattern import PatternGenerator

    gen = PatternGenerator()
    result = gen.generate("!ssV'!i", seed=42)
    print(result.name, result.code)
"""

import logging
from dataclasses import dataclass
from enum import Enum
from functools import partial
from typing import Callable, Dict, List, Optional, Union

from .entropy import RANGE_MAX, RandomSource, get_rng
from .tokens import NamegenError, TokenTable, default_table

logger = logging.getLogger(__name__)

# Maximum nesting depth; the top level counts as depth 0
MAX_DEPTH = 32


# =============================================================================
# Results and Errors
# =============================================================================

class ReturnCode(Enum):
    """Outcome of a generation."""
    SUCCESS = 0   # Name successfully generated
    INVALID = 1   # Pattern is invalid
    TOO_DEEP = 2  # Pattern exceeds maximum nesting depth


class PatternError(NamegenError, ValueError):
    """Raised by the convenience API when a pattern cannot be expanded."""
    code: ReturnCode = ReturnCode.INVALID
    reason = "invalid pattern"

    def __init__(self, pattern: str, message: str = None):
        self.pattern = pattern
        super().__init__(message or f"{self.reason}: {pattern!r}")


class InvalidPatternError(PatternError):
    """Unmatched, mismatched or unterminated bracket."""
    code = ReturnCode.INVALID
    reason = "unbalanced or mismatched brackets"


class PatternTooDeepError(PatternError):
    """Groups nested beyond the depth limit."""
    code = ReturnCode.TOO_DEEP
    reason = "groups nested too deeply"


_ERRORS = {
    ReturnCode.INVALID: InvalidPatternError,
    ReturnCode.TOO_DEEP: PatternTooDeepError,
}


@dataclass
class GenerationResult:
    """A generated name with its status and the generator state after it."""
    name: str
    code: ReturnCode
    seed: int
    pattern: str = ""

    @property
    def ok(self) -> bool:
        return self.code is ReturnCode.SUCCESS

    def raise_for_status(self) -> 'GenerationResult':
        """Raise the matching PatternError unless generation succeeded."""
        if not self.ok:
            raise _ERRORS[self.code](self.pattern)
        return self

    def __str__(self) -> str:
        return self.name


# =============================================================================
# Interpreter State
# =============================================================================

@dataclass
class _Group:
    """One open group. The top level is a substitution group that never closes."""
    literal: bool
    reset: int          # output length when the group opened
    silent: bool        # skipping the current alternative
    capitalize: bool    # pending capitalization when the group opened
    count: int = 1      # alternatives seen so far


def _upper_char(c: str) -> str:
    # Characters whose upper case is longer than one ('ß' -> 'SS') stay as-is
    upper = c.upper()
    return upper if len(upper) == 1 else c


class _Interpreter:
    """Single-use generation state for one pattern expansion."""

    def __init__(self, tokens: TokenTable, rng: RandomSource, max_depth: int):
        self.tokens = tokens
        self.rng = rng
        self.max_depth = max_depth
        self.out: List[str] = []
        self.groups = [_Group(literal=False, reset=0, silent=False, capitalize=False)]
        self.capitalize = False
        self._handlers: Dict[str, Callable[[], Optional[ReturnCode]]] = {
            '<': partial(self.open_group, literal=False),
            '(': partial(self.open_group, literal=True),
            '>': partial(self.close_group, literal=False),
            ')': partial(self.close_group, literal=True),
            '|': self.alternate,
            '!': self.set_capitalize,
        }

    @property
    def depth(self) -> int:
        return len(self.groups) - 1

    def run(self, pattern: str) -> ReturnCode:
        for pos, c in enumerate(pattern):
            handler = self._handlers.get(c)
            code = handler() if handler else self.emit(c)
            if code is not None:
                logger.debug(f"Pattern {pattern!r} failed at {pos} ({c!r}): {code.name}")
                return code
        if self.depth:
            logger.debug(f"Pattern {pattern!r} ends with {self.depth} open group(s)")
            return ReturnCode.INVALID
        return ReturnCode.SUCCESS

    def open_group(self, literal: bool) -> Optional[ReturnCode]:
        if len(self.groups) >= self.max_depth:
            return ReturnCode.TOO_DEEP
        self.groups.append(_Group(
            literal=literal,
            reset=len(self.out),
            silent=self.groups[-1].silent,
            capitalize=self.capitalize,
        ))
        return None

    def close_group(self, literal: bool) -> Optional[ReturnCode]:
        if not self.depth or self.groups[-1].literal != literal:
            return ReturnCode.INVALID
        self.groups.pop()
        return None

    def alternate(self) -> None:
        group = self.groups[-1]
        if self.depth and self.groups[-2].silent:
            return
        group.count += 1
        if self.rng.next_u32() < RANGE_MAX // group.count:
            # Switch to this alternative
            del self.out[group.reset:]
            group.silent = False
            self.capitalize = group.capitalize
        else:
            group.silent = True

    def set_capitalize(self) -> None:
        self.capitalize = True

    def emit(self, c: str) -> None:
        group = self.groups[-1]
        if not group.silent:
            if group.literal:
                self.out.append(_upper_char(c) if self.capitalize else c)
            else:
                self.substitute(c)
        self.capitalize = False

    def substitute(self, key: str) -> None:
        choices = self.tokens.lookup(key)
        if not choices:
            self.out.append(_upper_char(key) if self.capitalize else key)
            return
        token = choices[self.rng.next_in_range(len(choices))]
        if self.capitalize and token:
            token = _upper_char(token[0]) + token[1:]
        self.out.append(token)

    def result(self) -> str:
        return ''.join(self.out)


def check_structure(pattern: str, max_depth: int = MAX_DEPTH) -> ReturnCode:
    """Validate bracket structure without drawing any random numbers."""
    stack: List[str] = []
    closers = {')': '(', '>': '<'}
    for c in pattern:
        if c in '(<':
            if len(stack) + 1 >= max_depth:
                return ReturnCode.TOO_DEEP
            stack.append(c)
        elif c in closers:
            if not stack or stack.pop() != closers[c]:
                return ReturnCode.INVALID
    return ReturnCode.INVALID if stack else ReturnCode.SUCCESS


# =============================================================================
# Generator
# =============================================================================

class PatternGenerator:
    """
    Expands patterns into names using an owned token table.

    Parameters
    ----------
    tokens : TokenTable, optional
        Category table; defaults to the built-in table.
    max_depth : int
        Nesting limit; opening a group at this depth fails with TOO_DEEP.
    rng : str
        Random source kind, 'xorshift' (default) or 'mersenne'.
    """

    def __init__(self, tokens: TokenTable = None, max_depth: int = MAX_DEPTH,
                 rng: str = 'xorshift'):
        if max_depth < 1:
            raise ValueError(f"max_depth must be at least 1, got {max_depth}")
        self.tokens = tokens if tokens is not None else default_table()
        self.max_depth = max_depth
        self.rng_kind = rng
        # Fail early on an unknown kind
        get_rng(0, rng)

    def _source(self, seed: Union[int, RandomSource]) -> RandomSource:
        if isinstance(seed, RandomSource):
            return seed
        return get_rng(seed, self.rng_kind)

    def generate(self, pattern: str, seed: Union[int, RandomSource] = 0) -> GenerationResult:
        """
        Generate a name.

        Parameters
        ----------
        pattern : str
            Pattern to expand.
        seed : int or RandomSource
            Seed for a fresh random source, or a source to continue drawing
            from.

        Returns
        -------
        GenerationResult
            The name (empty on error), the return code and the final seed.
        """
        rng = self._source(seed)
        interp = _Interpreter(self.tokens, rng, self.max_depth)
        code = interp.run(pattern)
        name = interp.result() if code is ReturnCode.SUCCESS else ""
        return GenerationResult(name=name, code=code, seed=rng.state, pattern=pattern)

    def generate_into(self, buffer: bytearray, pattern: str,
                      seed: Union[int, RandomSource] = 0) -> GenerationResult:
        """
        Generate a name into a fixed-size buffer.

        The UTF-8 encoded name is truncated to ``len(buffer) - 1`` bytes and
        NUL terminated, cutting only at a character boundary. The return code reflects pattern validity only, so a
        truncated name still reports SUCCESS.
        """
        result = self.generate(pattern, seed)
        capacity = len(buffer)
        if not capacity:
            return GenerationResult(name="", code=result.code, seed=result.seed, pattern=pattern)
        # Drop a partial trailing sequence so the buffer holds valid UTF-8
        written = result.name.encode('utf-8')[:capacity - 1].decode('utf-8', errors='ignore')
        data = written.encode('utf-8')
        buffer[:len(data)] = data
        buffer[len(data)] = 0
        return GenerationResult(name=written, code=result.code, seed=result.seed, pattern=pattern)

    def validate(self, pattern: str) -> ReturnCode:
        return check_structure(pattern, self.max_depth)


def generate_name(pattern: str, seed: int = 0, tokens: TokenTable = None) -> str:
    """Generate a single name, raising PatternError on a bad pattern."""
    return PatternGenerator(tokens).generate(pattern, seed).raise_for_status().name


__all__ = [
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
