import pytest

from lambdaset.soa import (
    EitherIndex,
    Index,
    NonEmptySlice,
    PairSlice,
    Slice,
    Slice2,
    Slice3,
    index_push_new,
    slice_extend_new,
)


def test_index_usable_as_list_index():
    items = ["a", "b", "c"]
    assert items[Index(1)] == "b"


def test_index_ordering_and_equality():
    assert Index(2) < Index(5)
    assert Index(4) == Index(4)
    assert len({Index(4), Index(4), Index(1)}) == 2


def test_index_rejects_out_of_range():
    with pytest.raises(ValueError):
        Index(-1)
    with pytest.raises(ValueError):
        Index(1 << 32)


def test_index_as_slice_covers_one_element():
    s = Index(7).as_slice()
    assert s.start == 7
    assert len(s) == 1
    assert list(s) == [Index(7)]


def test_either_index_left_round_trip():
    left, right = EitherIndex.from_left(Index(9)).split()
    assert left == Index(9)
    assert right is None


def test_either_index_right_round_trip():
    e = EitherIndex.from_right(Index(9))
    assert e.raw & EitherIndex.MASK
    left, right = e.split()
    assert left is None
    assert right == Index(9)


def test_either_index_mask_is_top_bit():
    assert EitherIndex.from_right(Index(0)).raw == 1 << 31
    assert EitherIndex.from_left(Index(0)).raw == 0


def test_either_index_rejects_masked_input():
    with pytest.raises(ValueError):
        EitherIndex.from_left(Index(EitherIndex.MASK))
    with pytest.raises(ValueError):
        EitherIndex.from_right(Index(EitherIndex.MASK | 3))


def test_either_index_decrement_saturates():
    e = EitherIndex.from_left(Index(0))
    e.decrement_index()
    assert e.split() == (Index(0), None)


def test_either_index_decrement_left():
    e = EitherIndex.from_left(Index(5))
    e.decrement_index()
    left, _ = e.split()
    assert left == Index(4)


def test_either_index_decrement_right_crosses_into_left():
    e = EitherIndex.from_right(Index(0))
    e.decrement_index()
    left, right = e.split()
    assert right is None
    assert left == Index(EitherIndex.MASK - 1)


def test_slice_empty():
    s = Slice.empty()
    assert len(s) == 0
    assert list(s) == []
    assert s == Slice()
    assert s.as_nonempty_slice() is None


def test_slice_iteration_and_indices():
    s = Slice(3, 4)
    assert list(s.indices()) == list(range(3, 7))
    assert [i.index for i in s] == list(s.indices())


def test_slice_at_and_at_start():
    s = Slice(10, 5)
    assert s.at_start() == Index(10)
    assert s.at(2) == Index(12)


def test_slice_truncate_keeps_start():
    s = Slice(2, 6)
    t = s.truncate(3)
    assert t.start == 2
    assert len(t) == 3
    assert len(s) == 6


def test_slice_advance_moves_start():
    s = Slice(2, 3)
    s.advance(5)
    assert s.start == 7
    assert len(s) == 3


def test_slice_advance_overflow_raises():
    s = Slice((1 << 32) - 1, 1)
    with pytest.raises(ValueError):
        s.advance(1)


def test_slice_get_slice():
    elems = ["a", "b", "c", "d", "e"]
    assert Slice(1, 3).get_slice(elems) == ["b", "c", "d"]


def test_slice_get_slice_out_of_bounds():
    with pytest.raises(IndexError):
        Slice(3, 4).get_slice([1, 2, 3, 4])


def test_slice_length_limit():
    with pytest.raises(ValueError):
        Slice(0, 1 << 16)


def test_slice_ordering_compares_start_then_length():
    assert Slice(1, 9) < Slice(2, 0)
    assert Slice(1, 2) < Slice(1, 3)


def test_nonempty_slice_from_slice():
    ne = NonEmptySlice.from_slice(Slice(4, 2))
    assert ne == NonEmptySlice(4, 2)
    assert ne.as_slice() == Slice(4, 2)
    assert NonEmptySlice.from_slice(Slice(4, 0)) is None


def test_nonempty_slice_rejects_zero_length():
    with pytest.raises(ValueError):
        NonEmptySlice(0, 0)
    with pytest.raises(ValueError):
        NonEmptySlice(0, 3).truncate(0)


def test_nonempty_slice_behaves_like_slice():
    ne = NonEmptySlice(1, 3)
    s = ne.as_slice()
    elems = list("wxyzq")
    assert list(ne) == list(s)
    assert ne.indices() == s.indices()
    assert ne.get_slice(elems) == s.get_slice(elems)
    assert len(ne) == len(s)
    assert ne.truncate(1).as_slice() == s.truncate(1)


def test_nonempty_slice_advance():
    ne = NonEmptySlice(0, 2)
    ne.advance(3)
    assert ne.start == 3
    assert len(ne) == 2


def test_slice_as_nonempty_round_trip():
    s = Slice(5, 2)
    assert s.as_nonempty_slice().as_slice() == s


def test_pair_slice_of_pairs():
    p = PairSlice.of_pairs(4, 3)
    assert len(p) == 3
    assert len(p.inner) == 6
    assert p.start == 4
    assert not p.is_empty()


def test_pair_slice_indices_iter():
    p = PairSlice.of_pairs(4, 3)
    pairs = list(p.indices_iter())
    assert len(pairs) == len(p)
    assert pairs[0] == (4, 5)
    assert all(b == a + 1 for a, b in pairs)


def test_pair_slice_empty():
    p = PairSlice.empty()
    assert p.is_empty()
    assert len(p) == 0
    assert list(p.indices_iter()) == []


def test_slice2_parallel_iteration():
    s = Slice2(10, 20, 3)
    pairs = list(s)
    assert len(pairs) == len(s)
    assert [a for a, _ in pairs] == list(s.slice_first())
    assert [b for _, b in pairs] == list(s.slice_second())


def test_slice2_empty():
    s = Slice2.empty()
    assert len(s) == 0
    assert list(s) == []
    assert s.slice_first() == Slice.empty()


def test_slice3_parallel_iteration():
    s = Slice3(1, 5, 9, 2)
    triples = list(s)
    assert len(triples) == 2
    assert [a for a, _, _ in triples] == list(s.slice_first())
    assert [b for _, b, _ in triples] == list(s.slice_second())
    assert [c for _, _, c in triples] == list(s.slice_third())


def test_slice3_empty():
    s = Slice3.empty()
    assert len(s) == 0
    assert list(s) == []
    assert s.slice_third() == Slice.empty()


def test_index_push_new():
    vec = ["x"]
    idx = index_push_new(vec, "y")
    assert vec[idx] == "y"
    assert idx == Index(1)


def test_slice_extend_new():
    vec = [1, 2]
    s = slice_extend_new(vec, iter([7, 8, 9]))
    assert s.get_slice(vec) == [7, 8, 9]
    assert s.start == 2
    assert len(s) == 3


def test_slice_extend_new_with_nothing():
    vec = [1, 2]
    s = slice_extend_new(vec, [])
    assert len(s) == 0
    assert vec == [1, 2]
    assert s.start == 2