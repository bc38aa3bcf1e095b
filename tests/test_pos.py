import pytest

from shsyntax.pos import COL_MAX, LINE_MAX, Pos, pos_max


def test_str_known_line_and_col():
    assert str(Pos.at(10, 3, 7)) == "3:7"


def test_str_unknown_renders_question_marks():
    assert str(Pos()) == "?:?"


def test_line_overflow_becomes_unknown():
    p = Pos.at(0, LINE_MAX + 1, 5)
    assert p.line == 0
    assert str(p) == "?:5"


def test_col_overflow_becomes_unknown():
    p = Pos.at(0, 4, COL_MAX + 1)
    assert p.col == 0
    assert str(p) == "4:?"


def test_limits_are_kept():
    p = Pos.at(0, LINE_MAX, COL_MAX)
    assert p.line == LINE_MAX
    assert p.col == COL_MAX


def test_max_col_does_not_spill_into_line():
    p = Pos.at(0, 1, COL_MAX)
    assert p.line == 1
    assert str(p) == f"1:{COL_MAX}"


def test_zero_pos_is_invalid():
    assert not Pos().is_valid()


def test_set_pos_is_valid():
    assert Pos.at(0, 1, 1).is_valid()


def test_after_compares_offsets():
    a = Pos.at(2, 1, 3)
    b = Pos.at(5, 1, 6)
    assert b.after(a)
    assert not a.after(b)
    assert not a.after(a)


def test_pos_max_picks_later():
    a = Pos.at(2, 1, 3)
    b = Pos.at(5, 1, 6)
    assert pos_max(a, b) == b
    assert pos_max(b, a) == b


def test_pos_max_tie_prefers_first():
    a = Pos.at(4, 1, 5)
    b = Pos.at(4, 2, 1)
    assert pos_max(a, b) is a


def test_add_col_moves_offset_and_col():
    p = Pos.at(10, 2, 4)
    q = p.add_col(3)
    assert q.offset == p.offset + 3
    assert q.col == p.col + 3
    assert q.line == p.line
    assert q.after(p)


@pytest.mark.parametrize("n", [1, 2, 4, 17])
def test_add_col_round_trip(n):
    p = Pos.at(20, 3, 30)
    assert p.add_col(n).add_col(-n) == p


def test_add_col_leaves_original_untouched():
    p = Pos.at(1, 1, 2)
    p.add_col(5)
    assert p == Pos.at(1, 1, 2)


def test_negative_offset_rejected():
    with pytest.raises(ValueError):
        Pos.at(-1, 1, 1)


def test_negative_line_rejected():
    with pytest.raises(ValueError):
        Pos.at(0, -1, 1)