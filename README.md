# shsyntax

Syntax tree nodes for POSIX shell, Bash and mksh programs, with source
positions and brace expansion splitting.

- `shsyntax.pos`: `Pos`, a source position (byte offset, line and column),
  and `pos_max`.
- `shsyntax.nodes`: the node classes of a shell program, such as `File`,
  `Stmt`, `CallExpr`, `Word`, `Lit`, `ParamExp`, `IfClause`, `ForClause` and
  `BraceExp`, together with the helpers `stmts_pos`, `stmts_end` and
  `word_last_end`. Every node reports where it starts and ends with `pos()`
  and `end()`.
- `shsyntax.braces`: `split_braces`, which finds brace expansions such as
  `foo{bar,baz}` or `{1..10}` in a word's literal parts and replaces them with
  `BraceExp` nodes.

The package has no dependencies beyond the standard library.

## Installation

```
pip install shsyntax
```

## Positions

```python
from shsyntax.pos import Pos, pos_max

p = Pos.at(offset=4, line=1, col=5)
str(p)              # "1:5"
p.is_valid()        # True
q = p.add_col(3)    # offset 7, line 1, column 8
q.after(p)          # True
pos_max(p, q) == q  # True
```

Line and column numbers count from 1, offsets from 0. `Pos()` with no
arguments is the invalid, unset position. `Pos.at` raises `ValueError` for
negative values; a line or column beyond the supported range is stored as 0
and rendered as `?`, as is a column that `add_col` pushes out of range.
`after` compares byte offsets only.

## Building and inspecting nodes

Nodes are dataclasses; build them with keyword arguments.

```python
from shsyntax.nodes import Word, Lit
from shsyntax.pos import Pos

word = Word(parts=[Lit(value="foo", value_pos=Pos.at(0, 1, 1),
                       value_end=Pos.at(3, 1, 4))])
word.lit()        # "foo"
str(word.pos())   # "1:1"
str(word.end())   # "1:4"
```

`Word.lit()` joins the values of the word's parts when every part is a `Lit`,
and returns an empty string otherwise.

The abstract bases `Node`, `Command`, `WordPart`, `ArithmExpr`, `TestExpr`
and `Loop` group the node classes; `Word` is both an `ArithmExpr` and a
`TestExpr`.

## Brace expansion

```python
from shsyntax.braces import split_braces
from shsyntax.nodes import Word, Lit

word = Word(parts=[Lit(value="foo{bar,baz}")])
split_braces(word)   # True; the word now holds Lit("foo") and a BraceExp
```

`split_braces` rewrites the word in place and returns `True` if any closing
brace matched an opening one. If none did, for example `a{b`, the word is
left as it was and the result is `False`. `{x}` with a single element, and a
sequence whose bounds are not both integers or both single lower-case
letters, or whose step is not an integer, such as `{1..z}`, go back to plain
literals. Braces left open at the end of the word also go back to literals.

## What this package does not do

It holds the tree and answers position questions about it; it does not read
shell source text. There is no parser, no formatter that prints a tree back
as shell code, no tree walker, and no expansion or execution of words or
commands. The operator fields of nodes (such as `Redirect.op` or
`BinaryCmd.op`) take whatever values the caller stores in them.

## Running the tests

```
pip install -e ".[test]"
pytest
```