import pytest

from shsyntax.braces import split_braces
from shsyntax.nodes import BraceExp, Lit, SglQuoted, Word
from shsyntax.pos import Pos


def lit_word(text: str) -> Word:
    return Word(parts=[Lit(value=text)])


def render(word: Word) -> str:
    out = []
    for part in word.parts:
        if isinstance(part, Lit):
            out.append(part.value)
        elif isinstance(part, SglQuoted):
            out.append("'" + part.value + "'")
        elif isinstance(part, BraceExp):
            sep = ".." if part.sequence else ","
            out.append("{" + sep.join(render(e) for e in part.elems) + "}")
        else:
            raise TypeError(part)
    return "".join(out)


def braces_in(word: Word) -> list[BraceExp]:
    return [p for p in word.parts if isinstance(p, BraceExp)]


def split(word: Word) -> Word:
    assert split_braces(word) is True
    return word


def sole_brace(word: Word) -> BraceExp:
    [brace] = braces_in(word)
    return brace


def elem_lits(brace: BraceExp) -> list[str]:
    return [e.lit() for e in brace.elems]


@pytest.mark.parametrize(
    "text, sequence, elems",
    [
        ("foo{bar,baz}", False, ["bar", "baz"]),
        ("{1..10}", True, ["1", "10"]),
        ("{a..z}", True, ["a", "z"]),
        ("{1..10..2}", True, ["1", "10", "2"]),
        ("{-3..+3}", True, ["-3", "+3"]),
    ],
)
def test_valid_expansions(text, sequence, elems):
    brace = sole_brace(split(lit_word(text)))
    assert brace.sequence is sequence
    assert elem_lits(brace) == elems


def test_docstring_example_keeps_prefix():
    word = split(lit_word("foo{bar,baz}"))
    assert word.parts[0].value == "foo"


@pytest.mark.parametrize("text", ["a{b", "plain", "a,b", "x..y", "}{", ""])
def test_no_braces_returns_false(text):
    word = lit_word(text)
    original = list(word.parts)
    assert split_braces(word) is False
    assert word.parts == original
    assert word.lit() == text


@pytest.mark.parametrize(
    "text", ["{x}", "{a..1}", "{1..10..x}", "{ab..c}", "{A..Z}", "{1..}"]
)
def test_invalid_braces_become_literals(text):
    word = split(lit_word(text))
    assert braces_in(word) == []
    assert word.lit() == text


def test_nested_braces():
    outer = sole_brace(split(lit_word("{a,{b,c}}")))
    assert outer.elems[0].lit() == "a"
    assert elem_lits(sole_brace(outer.elems[1])) == ["b", "c"]


@pytest.mark.parametrize(
    "text",
    [
        "foo{bar,baz}",
        "pre{a,b}mid{1..3}post",
        "{a,{b,c}}",
        "{a}{b",
        "{a,b}{c,d",
        "{x,y}{1..2",
        "{1..10..2}",
        "a{b{c,d}",
        "{,}",
    ],
)
def test_round_trip_render(text):
    word = lit_word(text)
    split_braces(word)
    assert render(word) == text


def test_unclosed_after_closed_restored():
    word = split(lit_word("{a,b}{c,d"))
    assert elem_lits(sole_brace(word)) == ["a", "b"]
    assert render(word).endswith("{c,d")


def test_non_literal_parts_are_kept():
    quoted = SglQuoted(value="q")
    word = split(Word(parts=[Lit(value="a{"), quoted, Lit(value=",b}")]))
    brace = sole_brace(word)
    assert quoted in brace.elems[0].parts
    assert brace.elems[1].lit() == "b"
    assert render(word) == "a{'q',b}"


def test_split_literals_keep_positions():
    start = Pos.at(4, 2, 5)
    finish = Pos.at(16, 2, 17)
    word = Word(parts=[Lit(value="foo{bar,baz}", value_pos=start, value_end=finish)])
    split_braces(word)
    lits = [word.parts[0]] + [e.parts[0] for e in sole_brace(word).elems]
    assert {(lit.value_pos, lit.value_end) for lit in lits} == {(start, finish)}


def test_sequence_with_non_literal_bound_is_broken():
    word = split(Word(parts=[Lit(value="{"), SglQuoted(value="a"), Lit(value="..b}")]))
    assert braces_in(word) == []
    assert render(word) == "{'a'..b}"