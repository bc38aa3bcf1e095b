"""Brace expansion splitting for shell words."""

from __future__ import annotations

import re
from dataclasses import replace

from .nodes import BraceExp, Lit, Word, WordPart

__all__ = ["split_braces"]

_INT_RE = re.compile(r"[+-]?[0-9]+\Z")
_INT_MIN = -(1 << 63)
_INT_MAX = (1 << 63) - 1


def _is_int(text: str) -> bool:
    if not _INT_RE.match(text):
        return False
    return _INT_MIN <= int(text) <= _INT_MAX


def _is_letter(text: str) -> bool:
    return len(text) == 1 and "a" <= text <= "z"


def _sequence_is_valid(brace: BraceExp) -> bool:
    """Check that a {x..y[..incr]} expression has usable bounds and step."""
    chars = []
    for elem in brace.elems[:2]:
        val = elem.lit()
        if _is_int(val):
            chars.append(False)
        elif _is_letter(val):
            chars.append(True)
        else:
            return False
    if len(brace.elems) == 3 and not _is_int(brace.elems[2].lit()):
        return False
    return chars[0] == chars[1]


def split_braces(word: Word) -> bool:
    """Replace valid brace expansions in the word's literals with BraceExp nodes.

    Returns True if the word was rewritten. Malformed brace expansions are
    left as literals; if none were closed at all, the word is left untouched
    and False is returned.
    """
    found = False
    top = Word()
    acc = top
    cur: BraceExp | None = None
    open_braces: list[BraceExp] = []

    def pop() -> BraceExp:
        nonlocal cur, acc
        old = cur
        open_braces.pop()
        if open_braces:
            cur = open_braces[-1]
            acc = cur.elems[-1]
        else:
            cur = None
            acc = top
        return old

    def add_lit(lit: Lit) -> None:
        acc.parts.append(lit)

    def add_parts(parts: list[WordPart]) -> None:
        acc.parts.extend(parts)

    for part in word.parts:
        if not isinstance(part, Lit):
            acc.parts.append(part)
            continue
        value = part.value
        last = 0
        j = 0
        while j < len(value):
            ch = value[j]

            def add_lit_upto(end: int = j) -> None:
                if last != end:
                    add_lit(replace(part, value=value[last:end]))

            if ch == "{":
                add_lit_upto()
                acc = Word()
                cur = BraceExp(elems=[acc])
                open_braces.append(cur)
            elif ch == ",":
                if cur is None:
                    j += 1
                    continue
                add_lit_upto()
                acc = Word()
                cur.elems.append(acc)
            elif ch == ".":
                if cur is None or j + 1 >= len(value) or value[j + 1] != ".":
                    j += 1
                    continue
                add_lit_upto()
                cur.sequence = True
                acc = Word()
                cur.elems.append(acc)
                j += 1
            elif ch == "}":
                if cur is None:
                    j += 1
                    continue
                found = True
                add_lit_upto()
                brace = pop()
                if len(brace.elems) == 1:
                    # {x} is not a brace expansion
                    add_lit(Lit(value="{"))
                    add_parts(brace.elems[0].parts)
                    add_lit(Lit(value="}"))
                elif not brace.sequence or _sequence_is_valid(brace):
                    acc.parts.append(brace)
                else:
                    add_lit(Lit(value="{"))
                    for i, elem in enumerate(brace.elems):
                        if i > 0:
                            add_lit(Lit(value=".."))
                        add_parts(elem.parts)
                    add_lit(Lit(value="}"))
            else:
                j += 1
                continue
            last = j + 1
            j += 1
        if last == 0:
            add_lit(part)
        else:
            add_lit(replace(part, value=value[last:]))

    if not found:
        return False

    # braces that were never closed fall back to literals
    while acc is not top:
        brace = pop()
        add_lit(Lit(value="{"))
        sep = ".." if brace.sequence else ","
        for i, elem in enumerate(brace.elems):
            if i > 0:
                add_lit(Lit(value=sep))
            add_parts(elem.parts)

    word.parts = top.parts
    return True