"""
Tests for the Pattern Interpreter
=================================
Tests for namegen/generators/pattern.py: substitution, literal and
substitution groups, alternation, capitalization, depth limits and the
fixed-buffer variant.
"""

import pytest
import sys
from pathlib import Path

# Ensure repo root is on path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from namegen.generators.entropy import RANGE_MAX, RandomSource
from namegen.generators.pattern import (
    MAX_DEPTH,
    GenerationResult,
    InvalidPatternError,
    PatternError,
    PatternGenerator,
    PatternTooDeepError,
    ReturnCode,
    check_structure,
    generate_name,
)
from namegen.generators.tokens import DEFAULT_TOKENS, TokenTable


class ScriptedRandom(RandomSource):
    """Random source returning scripted values; fails when exhausted."""

    def __init__(self, values):
        self.values = list(values)
        self.draws = 0

    @property
    def state(self) -> int:
        return self.draws

    def next_u32(self) -> int:
        self.draws += 1
        return self.values.pop(0)


# Small seeds give small first draws; spread them over 32 bits
SEEDS = [(i * 2654435761) & 0xFFFFFFFF for i in range(1, 60)]
WIDE_SEEDS = [(i * 2654435761) & 0xFFFFFFFF for i in range(1, 300)]


@pytest.fixture
def gen():
    return PatternGenerator()


class TestKnownOutputs:
    """Outputs pinned to the xorshift sequence from seed 1 (270369, 67634689)."""

    def test_vowel(self, gen):
        assert gen.generate("v", 1).name == "o"

    def test_capitalized_vowel(self, gen):
        assert gen.generate("!v", 1).name == "O"

    def test_consonant(self, gen):
        assert gen.generate("c", 1).name == "t"

    def test_two_vowels(self, gen):
        assert gen.generate("vv", 1).name == "oe"

    def test_final_seed(self, gen):
        result = gen.generate("v", 1)
        assert result.seed == 270369

    def test_literal_alternatives(self, gen):
        assert gen.generate("(a|b)", 1).name == "b"
        assert gen.generate("(a|b|c)", 1).name == "c"

    def test_literal_draws_nothing(self, gen):
        result = gen.generate("(hello)", 1)
        assert result.seed == 1


class TestDeterminism:
    """Same pattern and seed give the same name."""

    @pytest.mark.parametrize("pattern", ["!ssV'!i", "<C!i|v!M|>", "!BVC<s|(dim)>"])
    def test_repeatable(self, gen, pattern):
        for seed in SEEDS:
            assert gen.generate(pattern, seed).name == gen.generate(pattern, seed).name

    def test_different_seeds_vary(self, gen):
        names = {gen.generate("!ssV", seed).name for seed in SEEDS}
        assert len(names) > 1


class TestStructure:
    """Bracket matching and depth limits."""

    @pytest.mark.parametrize("pattern", ["<a)", "(a>", ")", ">", "<a", "(a", "<(a>)", "s>"])
    def test_invalid(self, gen, pattern):
        result = gen.generate(pattern, 1)
        assert result.code is ReturnCode.INVALID
        assert result.name == ""
        assert not result.ok

    def test_too_deep(self, gen):
        assert gen.generate("<" * MAX_DEPTH, 1).code is ReturnCode.TOO_DEEP
        assert gen.generate("(" * MAX_DEPTH, 1).code is ReturnCode.TOO_DEEP

    def test_deepest_allowed(self, gen):
        depth = MAX_DEPTH - 1
        result = gen.generate("<" * depth + "v" + ">" * depth, 1)
        assert result.code is ReturnCode.SUCCESS
        assert result.name == "o"

    def test_too_deep_reported_before_unterminated(self, gen):
        assert gen.generate("<" * 40, 1).code is ReturnCode.TOO_DEEP

    def test_custom_depth(self):
        shallow = PatternGenerator(max_depth=3)
        assert shallow.generate("<<v>>", 1).ok
        assert shallow.generate("<<<v>>>", 1).code is ReturnCode.TOO_DEEP

    def test_max_depth_must_be_positive(self):
        with pytest.raises(ValueError):
            PatternGenerator(max_depth=0)

    def test_empty_pattern(self, gen):
        result = gen.generate("", 1)
        assert result.ok
        assert result.name == ""


class TestLiteralGroups:
    """Literal passthrough."""

    def test_passthrough(self, gen):
        for seed in SEEDS:
            assert gen.generate("(hello)", seed).name == "hello"

    def test_category_keys_are_literal(self, gen):
        assert gen.generate("(sVc)", 5).name == "sVc"

    def test_suffix(self, gen):
        for seed in SEEDS:
            name = gen.generate("s(dim)", seed).name
            assert name.endswith("dim")
            assert name[:-3] in DEFAULT_TOKENS['s']

    def test_substitution_inside_literal(self, gen):
        for seed in SEEDS:
            name = gen.generate("(x<v>y)", seed).name
            assert name[0] == "x" and name[-1] == "y"
            assert name[1:-1] in DEFAULT_TOKENS['v']


class TestCapitalization:
    """The ! marker."""

    def test_literal(self, gen):
        assert gen.generate("!(foo)", 3).name == "Foo"

    def test_syllable(self, gen):
        for seed in SEEDS:
            name = gen.generate("!s", seed).name
            assert name[0].isupper()
            assert name[1:].islower() or len(name) == 1

    def test_only_next_unit(self, gen):
        for seed in SEEDS:
            name = gen.generate("v!s", seed).name
            assert name[0].islower()
            assert any(c.isupper() for c in name)

    def test_trailing_marker(self, gen):
        result = gen.generate("(abc)!", 1)
        assert result.ok
        assert result.name == "abc"

    def test_group_capitalizes_chosen_branch(self, gen):
        for seed in SEEDS:
            name = gen.generate("!<(ab)|(cd)>", seed).name
            assert name in ("Ab", "Cd")

    def test_switch_restores_capitalization(self):
        gen = PatternGenerator()
        assert gen.generate("!<(a)|(b)>", ScriptedRandom([0])).name == "B"
        assert gen.generate("!<(a)|(b)>", ScriptedRandom([RANGE_MAX])).name == "A"

    def test_fallback_key_capitalized(self, gen):
        assert gen.generate("!x", 1).name == "X"

    def test_multichar_upper_left_alone_in_literal(self, gen):
        assert gen.generate("!(ßa)", 1).name == "ßa"
        assert gen.generate("!(été)", 1).name == "Été"

    def test_multichar_upper_left_alone_in_token(self):
        gen = PatternGenerator(TokenTable({'e': ['ßa']}))
        assert gen.generate("!e", 1).name == "ßa"

    def test_multichar_upper_left_alone_in_fallback(self, gen):
        assert gen.generate("!ß", 1).name == "ß"


class TestAlternation:
    """Reservoir selection among alternatives."""

    def test_empty_alternative(self, gen):
        seen = set()
        for seed in WIDE_SEEDS:
            name = gen.generate("<c|v|>", seed).name
            assert len(name) <= 1
            seen.add(len(name))
        assert seen == {0, 1}

    def test_all_alternatives_reachable(self, gen):
        names = {gen.generate("(a|b|c|d)", seed).name for seed in WIDE_SEEDS}
        assert names == {"a", "b", "c", "d"}

    def test_threshold_is_exact(self, gen):
        # Second alternative wins iff r < RANGE_MAX // 2
        assert gen.generate("(a|b)", ScriptedRandom([RANGE_MAX // 2 - 1])).name == "b"
        assert gen.generate("(a|b)", ScriptedRandom([RANGE_MAX // 2])).name == "a"

    def test_third_alternative_threshold(self, gen):
        keep_first = ScriptedRandom([RANGE_MAX, RANGE_MAX // 3 - 1])
        assert gen.generate("(a|b|c)", keep_first).name == "c"

    def test_top_level_alternation(self, gen):
        assert gen.generate("(x)|(y)", ScriptedRandom([0])).name == "y"
        assert gen.generate("(x)|(y)", ScriptedRandom([RANGE_MAX])).name == "x"

    def test_rejected_branch_draws_nothing(self, gen):
        rng = ScriptedRandom([RANGE_MAX])
        result = gen.generate("<(a)|(b)<(c)|(d)>>", rng)
        assert result.name == "a"
        assert rng.draws == 1

    def test_switch_discards_earlier_output(self, gen):
        rng = ScriptedRandom([0])
        assert gen.generate("(pre)<(long text)|(z)>", rng).name == "prez"

    def test_nested_group_in_winning_branch(self, gen):
        for seed in SEEDS:
            name = gen.generate("<(a)<(b)|(c)>|(d)>", seed).name
            assert name in ("ab", "ac", "d")


class TestTokens:
    """Token substitution and fallback."""

    def test_unknown_key_fallback(self):
        table = TokenTable({'s': ['ab']})
        gen = PatternGenerator(table)
        assert gen.generate("x", 1).name == "x"
        assert gen.generate("s", 1).name == "ab"

    def test_builtin_fallback_for_punctuation(self, gen):
        assert gen.generate("'- ", 1).name == "'- "

    def test_custom_table_used(self):
        gen = PatternGenerator(TokenTable({'q': ['zz']}))
        assert gen.generate("!qq", 1).name == "Zzzz"

    def test_empty_category_is_literal(self):
        gen = PatternGenerator(TokenTable({'s': []}))
        assert gen.generate("s", 1).name == "s"

    def test_empty_token_string(self):
        gen = PatternGenerator(TokenTable({'e': ['']}))
        assert gen.generate("!e(x)", 1).name == "x"


class TestFixedBuffer:
    """generate_into truncates and NUL terminates."""

    def test_fits(self, gen):
        buf = bytearray(10)
        result = gen.generate_into(buf, "(hello)", 1)
        assert result.code is ReturnCode.SUCCESS
        assert bytes(buf[:6]) == b"hello\x00"

    def test_truncated_still_success(self, gen):
        buf = bytearray(4)
        result = gen.generate_into(buf, "(hello)", 1)
        assert result.code is ReturnCode.SUCCESS
        assert bytes(buf) == b"hel\x00"
        assert result.name == "hel"

    def test_truncation_keeps_whole_characters(self, gen):
        buf = bytearray(b"xxx")
        result = gen.generate_into(buf, "(aé)", 1)
        assert result.code is ReturnCode.SUCCESS
        assert result.name == "a"
        assert bytes(buf) == b"a\x00x"
        assert bytes(buf[:buf.index(0)]).decode('utf-8') == "a"

    def test_multibyte_fits_exactly(self, gen):
        buf = bytearray(4)
        result = gen.generate_into(buf, "(aé)", 1)
        assert result.name == "aé"
        assert bytes(buf) == "aé".encode('utf-8') + b"\x00"

    def test_zero_capacity(self, gen):
        buf = bytearray()
        result = gen.generate_into(buf, "(hello)", 1)
        assert result.ok
        assert buf == bytearray()

    def test_invalid_pattern_clears(self, gen):
        buf = bytearray(b"xxxx")
        result = gen.generate_into(buf, "(hello", 1)
        assert result.code is ReturnCode.INVALID
        assert buf[0] == 0


class TestValidation:
    """Structure checks without generation."""

    @pytest.mark.parametrize("pattern,code", [
        ("!ssV'!i", ReturnCode.SUCCESS),
        ("<c|v|>", ReturnCode.SUCCESS),
        ("<a)", ReturnCode.INVALID),
        (")", ReturnCode.INVALID),
        ("<a", ReturnCode.INVALID),
        ("<" * MAX_DEPTH, ReturnCode.TOO_DEEP),
    ])
    def test_codes(self, gen, pattern, code):
        assert gen.validate(pattern) is code
        assert check_structure(pattern) is code
        assert gen.generate(pattern, 1).code is code


class TestErrors:
    """Exception API."""

    def test_generate_name(self):
        assert generate_name("(hello)") == "hello"

    def test_invalid_raises(self):
        with pytest.raises(InvalidPatternError) as exc:
            generate_name("<a)")
        assert exc.value.pattern == "<a)"
        assert exc.value.code is ReturnCode.INVALID

    def test_too_deep_raises(self):
        with pytest.raises(PatternTooDeepError):
            generate_name("<" * 50)

    def test_errors_are_value_errors(self):
        with pytest.raises(ValueError):
            generate_name(">")
        assert issubclass(PatternTooDeepError, PatternError)

    def test_raise_for_status_returns_result(self):
        result = GenerationResult(name="x", code=ReturnCode.SUCCESS, seed=0)
        assert result.raise_for_status() is result
        assert str(result) == "x"
