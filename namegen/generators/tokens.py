#!/usr/bin/env python3
"""
Token Tables
============
Maps single-character category keys to ordered lists of candidate strings.

The built-in table follows the classic RinkWorks fantasy name generator:

    s - generic syllable
    v - vowel
    V - vowel or vowel combination
    c - consonant
    B - consonant or consonant combination suitable for beginning a word
    C - consonant or consonant combination suitable anywhere in a word
    i - insult
    m - mushy name
    M - mushy name ending
    D - consonant suited for a stupid person's name
    d - syllable suited for a stupid person's name (begins with a vowel)

Tables can also be loaded from JSON or YAML files:

    from namegen.generators.tokens import load_tokens

    table = load_tokens("tokens.yaml", extend=True)
    table.lookup("s")
"""

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Dict, Iterator, List, Tuple, Union

import yaml

logger = logging.getLogger(__name__)

# Characters with structural meaning in a pattern; never usable as keys
STRUCTURAL_CHARS = frozenset('<>()|!')


class NamegenError(Exception):
    """Base class for all namegen errors."""


class TokenLoadError(NamegenError, ValueError):
    """Raised when a token table cannot be built or loaded."""


# =============================================================================
# Built-in Table
# =============================================================================

DEFAULT_TOKENS: Dict[str, Tuple[str, ...]] = {
    's': (
        "ach", "ack", "ad", "age", "ald", "ale", "an", "ang", "ar", "ard",
        "as", "ash", "at", "ath", "augh", "aw", "ban", "bel", "bur", "cer",
        "cha", "che", "dan", "dar", "del", "den", "dra", "dyn", "ech", "eld",
        "elm", "em", "en", "end", "eng", "enth", "er", "ess", "est", "et",
        "gar", "gha", "hat", "hin", "hon", "ia", "ight", "ild", "im", "ina",
        "ine", "ing", "ir", "is", "iss", "it", "kal", "kel", "kim", "kin",
        "ler", "lor", "lye", "mor", "mos", "nal", "ny", "nys", "old", "om",
        "on", "or", "orm", "os", "ough", "per", "pol", "qua", "que", "rad",
        "rak", "ran", "ray", "ril", "ris", "rod", "roth", "ryn", "sam",
        "say", "ser", "shy", "skel", "sul", "tai", "tan", "tas", "ther",
        "tia", "tin", "ton", "tor", "tur", "um", "und", "unt", "urn", "usk",
        "ust", "ver", "ves", "vor", "war", "wor", "yer",
    ),
    'v': ("a", "e", "i", "o", "u", "y"),
    'V': (
        "a", "e", "i", "o", "u", "y", "ae", "ai", "au", "ay", "ea", "ee",
        "ei", "eu", "ey", "ia", "ie", "oe", "oi", "oo", "ou", "ui",
    ),
    'c': (
        "b", "c", "d", "f", "g", "h", "j", "k", "l", "m", "n", "p", "q", "r",
        "s", "t", "v", "w", "x", "y", "z",
    ),
    'B': (
        "b", "bl", "br", "c", "ch", "chr", "cl", "cr", "d", "dr", "f", "g",
        "h", "j", "k", "l", "ll", "m", "n", "p", "ph", "qu", "r", "rh", "s",
        "sch", "sh", "sl", "sm", "sn", "st", "str", "sw", "t", "th", "thr",
        "tr", "v", "w", "wh", "y", "z", "zh",
    ),
    'C': (
        "b", "c", "ch", "ck", "d", "f", "g", "gh", "h", "k", "l", "ld", "ll",
        "lt", "m", "n", "nd", "nn", "nt", "p", "ph", "q", "r", "rd", "rr",
        "rt", "s", "sh", "ss", "st", "t", "th", "v", "w", "y", "z",
    ),
    'i': (
        "air", "ankle", "ball", "beef", "bone", "bum", "bumble", "bump",
        "cheese", "clod", "clot", "clown", "corn", "dip", "dolt", "doof",
        "dork", "dumb", "face", "finger", "foot", "fumble", "goof",
        "grumble", "head", "knock", "knocker", "knuckle", "loaf", "lump",
        "lunk", "meat", "muck", "munch", "nit", "numb", "pin", "puff",
        "skull", "snark", "sneeze", "thimble", "twerp", "twit", "wad",
        "wimp", "wipe",
    ),
    'm': (
        "baby", "booble", "bunker", "cuddle", "cuddly", "cutie", "doodle",
        "foofie", "gooble", "honey", "kissie", "lover", "lovey", "moofie",
        "mooglie", "moopie", "moopsie", "nookum", "poochie", "poof",
        "poofie", "pookie", "schmoopie", "schnoogle", "schnookie",
        "schnookum", "smooch", "smoochie", "smoosh", "snoogle", "snoogy",
        "snookie", "snookum", "snuggy", "sweetie", "woogle", "woogy",
        "wookie", "wookum", "wuddle", "wuddly", "wuggy", "wunny",
    ),
    'M': (
        "boo", "bunch", "bunny", "cake", "cakes", "cute", "darling",
        "dumpling", "dumplings", "face", "foof", "goo", "head", "kin",
        "kins", "lips", "love", "mush", "pie", "poo", "pooh", "pook", "pums",
    ),
    'D': (
        "b", "bl", "br", "cl", "d", "f", "fl", "fr", "g", "gh", "gl", "gr",
        "h", "j", "k", "kl", "m", "n", "p", "th", "w",
    ),
    'd': (
        "elch", "idiot", "ob", "og", "ok", "olph", "olt", "omph", "ong",
        "onk", "oo", "oob", "oof", "oog", "ook", "ooz", "org", "ork", "orm",
        "oron", "ub", "uck", "ug", "ulf", "ult", "um", "umb", "ump", "umph",
        "un", "unb", "ung", "unk", "unph", "unt", "uzz",
    ),
}

CATEGORY_DESCRIPTIONS = {
    's': "generic syllable",
    'v': "vowel",
    'V': "vowel or vowel combination",
    'c': "consonant",
    'B': "word-initial consonant cluster",
    'C': "word-internal consonant cluster",
    'i': "insult",
    'm': "mushy name",
    'M': "mushy name ending",
    'D': "consonant for a silly name",
    'd': "syllable for a silly name",
}


# =============================================================================
# Token Table
# =============================================================================

class TokenTable(Mapping):
    """
    Read-only mapping from category key to candidate strings.

    A key without a category yields an empty tuple from ``lookup``, which
    tells the interpreter to emit the key itself.
    """

    def __init__(self, tokens: Mapping = None, descriptions: Mapping = None):
        self._tokens: Dict[str, Tuple[str, ...]] = {}
        for key, values in (tokens or {}).items():
            self._tokens[_check_key(key)] = _check_values(key, values)
        self._descriptions = dict(descriptions or {})

    def lookup(self, key: str) -> Tuple[str, ...]:
        return self._tokens.get(key, ())

    def describe(self, key: str) -> str:
        return self._descriptions.get(key, "")

    def categories(self) -> List[Tuple[str, str, int]]:
        """List (key, description, candidate count) for every category."""
        return [(key, self.describe(key), len(values))
                for key, values in self._tokens.items()]

    def merged(self, other: Mapping) -> 'TokenTable':
        """Return a new table with ``other``'s categories layered on top."""
        tokens = dict(self._tokens)
        tokens.update(other.items())
        descriptions = dict(self._descriptions)
        if isinstance(other, TokenTable):
            descriptions.update(other._descriptions)
        return TokenTable(tokens, descriptions)

    def __getitem__(self, key: str) -> Tuple[str, ...]:
        return self._tokens[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._tokens)

    def __len__(self) -> int:
        return len(self._tokens)

    def __repr__(self) -> str:
        return f"TokenTable(keys={''.join(self._tokens)!r})"


def _check_key(key) -> str:
    if not isinstance(key, str) or len(key) != 1:
        raise TokenLoadError(f"Category key must be a single character, got {key!r}")
    if key in STRUCTURAL_CHARS:
        raise TokenLoadError(f"Category key {key!r} is a structural pattern character")
    return key


def _check_values(key: str, values) -> Tuple[str, ...]:
    if isinstance(values, str) or not isinstance(values, (list, tuple)):
        raise TokenLoadError(f"Category {key!r} must be a list of strings")
    for value in values:
        if not isinstance(value, str):
            raise TokenLoadError(f"Category {key!r} contains non-string token {value!r}")
    return tuple(values)


def default_table() -> TokenTable:
    """Build the built-in token table."""
    return TokenTable(DEFAULT_TOKENS, CATEGORY_DESCRIPTIONS)


# =============================================================================
# Loader
# =============================================================================

def _parse_document(path: Path, text: str):
    suffix = path.suffix.lower()
    if suffix == '.json':
        return json.loads(text)
    if suffix in ('.yaml', '.yml'):
        return yaml.safe_load(text)
    raise TokenLoadError(f"Unsupported token file type: {path.suffix or path.name}")


def load_tokens(source: Union[str, Path], extend: bool = False) -> TokenTable:
    """
    Load a token table from a JSON or YAML file.

    Parameters
    ----------
    source : str or Path
        File holding a mapping of key to token list, either at the top
        level or under a ``tokens`` key.
    extend : bool
        Layer the loaded categories over the built-in table.

    Returns
    -------
    TokenTable

    Raises
    ------
    TokenLoadError
        If the file is unreadable, malformed or yields an empty table.
    """
    path = Path(source).expanduser()
    try:
        text = path.read_text(encoding='utf-8')
    except OSError as e:
        logger.warning(f"Cannot read token file {path}: {e}")
        raise TokenLoadError(f"Cannot read token file {path}: {e}") from e

    try:
        data = _parse_document(path, text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        logger.warning(f"Malformed token file {path}: {e}")
        raise TokenLoadError(f"Malformed token file {path}: {e}") from e

    if isinstance(data, dict) and isinstance(data.get('tokens'), dict):
        data = data['tokens']
    if not isinstance(data, dict):
        raise TokenLoadError(f"Token file {path} must contain a mapping of keys to token lists")

    descriptions = {}
    tokens = {}
    for key, values in data.items():
        # Allow {"s": {"description": "...", "tokens": [...]}}
        if isinstance(values, dict):
            descriptions[key] = str(values.get('description', ''))
            values = values.get('tokens')
        tokens[key] = values

    table = TokenTable(tokens, descriptions)
    if not any(table.values()):
        raise TokenLoadError(f"Token file {path} defines no tokens")

    logger.debug(f"Loaded {len(table)} token categories from {path}")
    if extend:
        return default_table().merged(table)
    return table


__all__ = [
    'NamegenError',
    'TokenLoadError',
    'TokenTable',
    'DEFAULT_TOKENS',
    'CATEGORY_DESCRIPTIONS',
    'STRUCTURAL_CHARS',
    'default_table',
    'load_tokens',
]
