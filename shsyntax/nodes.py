"""Syntax tree nodes for shell programs, with their source positions."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from functools import partial
from typing import Any, Optional

from .pos import Pos, pos_max

__all__ = [
    "Node",
    "Command",
    "WordPart",
    "ArithmExpr",
    "TestExpr",
    "Loop",
    "Comment",
    "File",
    "Stmt",
    "Assign",
    "Redirect",
    "CallExpr",
    "Subshell",
    "Block",
    "IfClause",
    "WhileClause",
    "ForClause",
    "WordIter",
    "CStyleLoop",
    "BinaryCmd",
    "FuncDecl",
    "Word",
    "Lit",
    "SglQuoted",
    "DblQuoted",
    "CmdSubst",
    "ParamExp",
    "Slice",
    "Replace",
    "Expansion",
    "ArithmExp",
    "ArithmCmd",
    "BinaryArithm",
    "UnaryArithm",
    "ParenArithm",
    "CaseClause",
    "CaseItem",
    "TestClause",
    "BinaryTest",
    "UnaryTest",
    "ParenTest",
    "DeclClause",
    "ArrayExpr",
    "ArrayElem",
    "ExtGlob",
    "ProcSubst",
    "TimeClause",
    "CoprocClause",
    "LetClause",
    "BraceExp",
    "TestDecl",
    "stmts_pos",
    "stmts_end",
    "word_last_end",
]

_list = partial(field, default_factory=list)


def _byte_len(text: str) -> int:
    return len(text.encode("utf-8"))


class Node(ABC):
    """A syntax tree node."""

    @abstractmethod
    def pos(self) -> Pos:
        """Position of the first character of the node."""

    @abstractmethod
    def end(self) -> Pos:
        """Position of the character immediately after the node."""


class Command(Node):
    """A simple or compound command, or a function declaration."""


class WordPart(Node):
    """A node that can form part of a word."""


class ArithmExpr(Node):
    """A node that forms part of an arithmetic expression."""


class TestExpr(Node):
    """A node that forms part of a test expression."""


class Loop(Node):
    """The iteration part of a for clause."""


@dataclass
class _Parens:
    lparen: Pos = Pos()
    rparen: Pos = Pos()


@dataclass
class _Delims:
    left: Pos = Pos()
    right: Pos = Pos()


@dataclass
class _StmtList:
    stmts: list[Stmt] = _list()
    last: list[Comment] = _list()


@dataclass
class _Operator:
    op_pos: Pos = Pos()
    op: Any = None


@dataclass
class Comment(Node):
    """A single comment on a single line."""

    hash: Pos = Pos()
    text: str = ""

    def pos(self) -> Pos:
        return self.hash

    def end(self) -> Pos:
        return self.hash.add_col(1 + _byte_len(self.text))


def stmts_pos(stmts: list[Stmt], last: list[Comment]) -> Pos:
    """Start of a statement list, counting a leading comment of its first statement."""
    if stmts:
        first = stmts[0]
        start = first.pos()
        if first.comments:
            comment_pos = first.comments[0].pos()
            if start.after(comment_pos):
                return comment_pos
        return start
    if last:
        return last[0].pos()
    return Pos()


def stmts_end(stmts: list[Stmt], last: list[Comment]) -> Pos:
    """End of a statement list, counting trailing comments."""
    if last:
        return last[-1].end()
    if stmts:
        final = stmts[-1]
        finish = final.end()
        if final.comments:
            comment_end = final.comments[0].end()
            if comment_end.after(finish):
                return comment_end
        return finish
    return Pos()


def word_last_end(words: list[Word]) -> Pos:
    """End of the last word, or an invalid position if there are none."""
    if not words:
        return Pos()
    return words[-1].end()


@dataclass
class File(_StmtList, Node):
    """A shell source file."""

    name: str = ""

    def pos(self) -> Pos:
        return stmts_pos(self.stmts, self.last)

    def end(self) -> Pos:
        return stmts_end(self.stmts, self.last)


@dataclass
class Stmt(Node):
    """A statement: a command with its redirections and modifiers."""

    comments: list[Comment] = _list()
    cmd: Optional[Command] = None
    position: Pos = Pos()
    semicolon: Pos = Pos()
    negated: bool = False
    background: bool = False
    coprocess: bool = False
    redirs: list[Redirect] = _list()

    def pos(self) -> Pos:
        return self.position

    def end(self) -> Pos:
        if self.semicolon.is_valid():
            return self.semicolon.add_col(2 if self.coprocess else 1)
        finish = self.position
        if self.negated:
            finish = finish.add_col(1)
        if self.cmd is not None:
            finish = self.cmd.end()
        if self.redirs:
            finish = pos_max(finish, self.redirs[-1].end())
        return finish


@dataclass
class Assign(Node):
    """An assignment to a variable."""

    append: bool = False
    naked: bool = False
    name: Optional[Lit] = None
    index: Optional[ArithmExpr] = None
    value: Optional[Word] = None
    array: Optional[ArrayExpr] = None

    def pos(self) -> Pos:
        return (self.value if self.name is None else self.name).pos()

    def end(self) -> Pos:
        if self.value is not None:
            return self.value.end()
        if self.array is not None:
            return self.array.end()
        if self.index is not None:
            return self.index.end().add_col(2)
        return self.name.end().add_col(0 if self.naked else 1)


@dataclass
class Redirect(_Operator, Node):
    """An input or output redirection."""

    n: Optional[Lit] = None
    word: Optional[Word] = None
    hdoc: Optional[Word] = None

    def pos(self) -> Pos:
        return self.op_pos if self.n is None else self.n.pos()

    def end(self) -> Pos:
        return (self.word if self.hdoc is None else self.hdoc).end()


@dataclass
class CallExpr(Command):
    """A simple command."""

    assigns: list[Assign] = _list()
    args: list[Word] = _list()

    def pos(self) -> Pos:
        return (self.assigns or self.args)[0].pos()

    def end(self) -> Pos:
        return (self.args or self.assigns)[-1].end()


@dataclass
class Subshell(_Parens, _StmtList, Command):
    """Commands run in a nested shell environment."""

    def pos(self) -> Pos:
        return self.lparen

    def end(self) -> Pos:
        return self.rparen.add_col(1)


@dataclass
class Block(_StmtList, Command):
    """Commands within curly braces."""

    lbrace: Pos = Pos()
    rbrace: Pos = Pos()

    def pos(self) -> Pos:
        return self.lbrace

    def end(self) -> Pos:
        return self.rbrace.add_col(1)


@dataclass
class IfClause(Command):
    """An if statement; ``else_`` holds an elif or else branch."""

    position: Pos = Pos()
    then_pos: Pos = Pos()
    fi_pos: Pos = Pos()
    cond: list[Stmt] = _list()
    cond_last: list[Comment] = _list()
    then: list[Stmt] = _list()
    then_last: list[Comment] = _list()
    else_: Optional[IfClause] = None
    last: list[Comment] = _list()

    def pos(self) -> Pos:
        return self.position

    def end(self) -> Pos:
        return self.fi_pos.add_col(2)


@dataclass
class WhileClause(Command):
    """A while or until clause."""

    while_pos: Pos = Pos()
    do_pos: Pos = Pos()
    done_pos: Pos = Pos()
    until: bool = False
    cond: list[Stmt] = _list()
    cond_last: list[Comment] = _list()
    do: list[Stmt] = _list()
    do_last: list[Comment] = _list()

    def pos(self) -> Pos:
        return self.while_pos

    def end(self) -> Pos:
        return self.done_pos.add_col(4)


@dataclass
class ForClause(Command):
    """A for or select clause."""

    for_pos: Pos = Pos()
    do_pos: Pos = Pos()
    done_pos: Pos = Pos()
    select: bool = False
    braces: bool = False
    loop: Optional[Loop] = None
    do: list[Stmt] = _list()
    do_last: list[Comment] = _list()

    def pos(self) -> Pos:
        return self.for_pos

    def end(self) -> Pos:
        return self.done_pos.add_col(4)


@dataclass
class WordIter(Loop):
    """Iteration of a variable over words; an invalid ``in_pos`` means no "in"."""

    name: Optional[Lit] = None
    in_pos: Pos = Pos()
    items: list[Word] = _list()

    def pos(self) -> Pos:
        return self.name.pos()

    def end(self) -> Pos:
        if self.items:
            return word_last_end(self.items)
        return pos_max(self.name.end(), self.in_pos.add_col(2))


@dataclass
class CStyleLoop(_Parens, Loop):
    """A for loop with init, condition and post expressions."""

    init: Optional[ArithmExpr] = None
    cond: Optional[ArithmExpr] = None
    post: Optional[ArithmExpr] = None

    def pos(self) -> Pos:
        return self.lparen

    def end(self) -> Pos:
        return self.rparen.add_col(2)


@dataclass
class BinaryCmd(_Operator, Command):
    """A binary expression between two statements."""

    x: Optional[Stmt] = None
    y: Optional[Stmt] = None

    def pos(self) -> Pos:
        return self.x.pos()

    def end(self) -> Pos:
        return self.y.end()


@dataclass
class FuncDecl(Command):
    """A function declaration."""

    position: Pos = Pos()
    rsrv_word: bool = False
    parens: bool = False
    name: Optional[Lit] = None
    body: Optional[Stmt] = None

    def pos(self) -> Pos:
        return self.position

    def end(self) -> Pos:
        return self.body.end()


@dataclass
class Word(ArithmExpr, TestExpr):
    """A shell word made of contiguous parts."""

    parts: list[WordPart] = _list()

    def pos(self) -> Pos:
        return self.parts[0].pos()

    def end(self) -> Pos:
        return self.parts[-1].end()

    def lit(self) -> str:
        """The word's literal value, or "" if any part is not a literal."""
        if not all(isinstance(part, Lit) for part in self.parts):
            return ""
        return "".join(part.value for part in self.parts)


@dataclass
class Lit(WordPart):
    """A string literal."""

    value: str = ""
    value_pos: Pos = Pos()
    value_end: Pos = Pos()

    def pos(self) -> Pos:
        return self.value_pos

    def end(self) -> Pos:
        return self.value_end


@dataclass
class SglQuoted(_Delims, WordPart):
    """A string within single quotes."""

    dollar: bool = False
    value: str = ""

    def pos(self) -> Pos:
        return self.left

    def end(self) -> Pos:
        return self.right.add_col(1)


@dataclass
class DblQuoted(_Delims, WordPart):
    """Word parts within double quotes."""

    dollar: bool = False
    parts: list[WordPart] = _list()

    def pos(self) -> Pos:
        return self.left

    def end(self) -> Pos:
        return self.right.add_col(1)


@dataclass
class CmdSubst(_Delims, _StmtList, WordPart):
    """A command substitution."""

    backquotes: bool = False
    temp_file: bool = False
    reply_var: bool = False

    def pos(self) -> Pos:
        return self.left

    def end(self) -> Pos:
        return self.right.add_col(1)


@dataclass
class Slice:
    """A character slicing expression inside a parameter expansion."""

    offset: Optional[ArithmExpr] = None
    length: Optional[ArithmExpr] = None


@dataclass
class Replace:
    """A search and replace expression inside a parameter expansion."""

    all: bool = False
    orig: Optional[Word] = None
    with_: Optional[Word] = None


@dataclass
class Expansion:
    """A string manipulation inside a parameter expansion."""

    op: Any = None
    word: Optional[Word] = None


@dataclass
class ParamExp(WordPart):
    """A parameter expansion."""

    dollar: Pos = Pos()
    rbrace: Pos = Pos()
    short: bool = False
    excl: bool = False
    length: bool = False
    width: bool = False
    param: Optional[Lit] = None
    index: Optional[ArithmExpr] = None
    slice: Optional[Slice] = None
    repl: Optional[Replace] = None
    names: Any = None
    exp: Optional[Expansion] = None

    def pos(self) -> Pos:
        return self.dollar

    def end(self) -> Pos:
        if not self.short:
            return self.rbrace.add_col(1)
        if self.index is not None:
            return self.index.end().add_col(1)
        return self.param.end()


@dataclass
class ArithmExp(_Delims, WordPart):
    """An arithmetic expansion."""

    bracket: bool = False
    unsigned: bool = False
    x: Optional[ArithmExpr] = None

    def pos(self) -> Pos:
        return self.left

    def end(self) -> Pos:
        return self.right.add_col(1 if self.bracket else 2)


@dataclass
class ArithmCmd(_Delims, Command):
    """An arithmetic command."""

    unsigned: bool = False
    x: Optional[ArithmExpr] = None

    def pos(self) -> Pos:
        return self.left

    def end(self) -> Pos:
        return self.right.add_col(2)


@dataclass
class BinaryArithm(_Operator, ArithmExpr):
    """A binary arithmetic expression, ternaries included."""

    x: Optional[ArithmExpr] = None
    y: Optional[ArithmExpr] = None

    def pos(self) -> Pos:
        return self.x.pos()

    def end(self) -> Pos:
        return self.y.end()


@dataclass
class UnaryArithm(_Operator, ArithmExpr):
    """A unary arithmetic expression, prefix or postfix."""

    post: bool = False
    x: Optional[ArithmExpr] = None

    def pos(self) -> Pos:
        return self.x.pos() if self.post else self.op_pos

    def end(self) -> Pos:
        return self.op_pos.add_col(2) if self.post else self.x.end()


@dataclass
class ParenArithm(_Parens, ArithmExpr):
    """An arithmetic expression within parentheses."""

    x: Optional[ArithmExpr] = None

    def pos(self) -> Pos:
        return self.lparen

    def end(self) -> Pos:
        return self.rparen.add_col(1)


@dataclass
class CaseClause(Command):
    """A case clause."""

    case_pos: Pos = Pos()
    in_pos: Pos = Pos()
    esac_pos: Pos = Pos()
    braces: bool = False
    word: Optional[Word] = None
    items: list[CaseItem] = _list()
    last: list[Comment] = _list()

    def pos(self) -> Pos:
        return self.case_pos

    def end(self) -> Pos:
        return self.esac_pos.add_col(4)


@dataclass
class CaseItem(_StmtList, Node):
    """A pattern list within a case clause; ``op`` renders as its operator text."""

    op: Any = ";;"
    op_pos: Pos = Pos()
    comments: list[Comment] = _list()
    patterns: list[Word] = _list()

    def pos(self) -> Pos:
        return self.patterns[0].pos()

    def end(self) -> Pos:
        if self.op_pos.is_valid():
            return self.op_pos.add_col(_byte_len(str(self.op)))
        return stmts_end(self.stmts, self.last)


@dataclass
class TestClause(_Delims, Command):
    """An extended test clause."""

    x: Optional[TestExpr] = None

    def pos(self) -> Pos:
        return self.left

    def end(self) -> Pos:
        return self.right.add_col(2)


@dataclass
class BinaryTest(_Operator, TestExpr):
    """A binary test expression."""

    x: Optional[TestExpr] = None
    y: Optional[TestExpr] = None

    def pos(self) -> Pos:
        return self.x.pos()

    def end(self) -> Pos:
        return self.y.end()


@dataclass
class UnaryTest(_Operator, TestExpr):
    """A unary test expression."""

    x: Optional[TestExpr] = None

    def pos(self) -> Pos:
        return self.op_pos

    def end(self) -> Pos:
        return self.x.end()


@dataclass
class ParenTest(_Parens, TestExpr):
    """A test expression within parentheses."""

    x: Optional[TestExpr] = None

    def pos(self) -> Pos:
        return self.lparen

    def end(self) -> Pos:
        return self.rparen.add_col(1)


@dataclass
class DeclClause(Command):
    """A declare, local, export, readonly, typeset or nameref clause."""

    variant: Optional[Lit] = None
    args: list[Assign] = _list()

    def pos(self) -> Pos:
        return self.variant.pos()

    def end(self) -> Pos:
        return (self.args[-1] if self.args else self.variant).end()


@dataclass
class ArrayExpr(_Parens, Node):
    """An array expression."""

    elems: list[ArrayElem] = _list()
    last: list[Comment] = _list()

    def pos(self) -> Pos:
        return self.lparen

    def end(self) -> Pos:
        return self.rparen.add_col(1)


@dataclass
class ArrayElem(Node):
    """An array element, with an optional index and an optional value."""

    index: Optional[ArithmExpr] = None
    value: Optional[Word] = None
    comments: list[Comment] = _list()

    def pos(self) -> Pos:
        return (self.value if self.index is None else self.index).pos()

    def end(self) -> Pos:
        if self.value is not None:
            return self.value.end()
        return self.index.pos().add_col(1)


@dataclass
class ExtGlob(_Operator, WordPart):
    """An extended globbing expression."""

    pattern: Optional[Lit] = None

    def pos(self) -> Pos:
        return self.op_pos

    def end(self) -> Pos:
        return self.pattern.end().add_col(1)


@dataclass
class ProcSubst(_Operator, _StmtList, WordPart):
    """A process substitution."""

    rparen: Pos = Pos()

    def pos(self) -> Pos:
        return self.op_pos

    def end(self) -> Pos:
        return self.rparen.add_col(1)


@dataclass
class TimeClause(Command):
    """A time clause; ``posix_format`` is the -p flag."""

    time: Pos = Pos()
    posix_format: bool = False
    stmt: Optional[Stmt] = None

    def pos(self) -> Pos:
        return self.time

    def end(self) -> Pos:
        if self.stmt is None:
            return self.time.add_col(4)
        return self.stmt.end()


@dataclass
class CoprocClause(Command):
    """A coproc clause."""

    coproc: Pos = Pos()
    name: Optional[Word] = None
    stmt: Optional[Stmt] = None

    def pos(self) -> Pos:
        return self.coproc

    def end(self) -> Pos:
        return self.stmt.end()


@dataclass
class LetClause(Command):
    """A let clause."""

    let: Pos = Pos()
    exprs: list[ArithmExpr] = _list()

    def pos(self) -> Pos:
        return self.let

    def end(self) -> Pos:
        return self.exprs[-1].end()


@dataclass
class BraceExp(WordPart):
    """A brace expression such as {a,f} or {1..10}."""

    sequence: bool = False
    elems: list[Word] = _list()

    def pos(self) -> Pos:
        return self.elems[0].pos().add_col(-1)

    def end(self) -> Pos:
        return word_last_end(self.elems).add_col(1)


@dataclass
class TestDecl(Command):
    """The declaration of a Bats test function."""

    position: Pos = Pos()
    description: Optional[Word] = None
    body: Optional[Stmt] = None

    def pos(self) -> Pos:
        return self.position

    def end(self) -> Pos:
        return self.body.end()