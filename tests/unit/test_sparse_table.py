import pytest

from a1table.core.errors import FormatError, RangeError
from a1table.domain.models.grid import BoundingBox, RowCell, RowGroup
from a1table.domain.table import SparseTable


def test_construct_from_flat_mapping_and_wrapper() -> None:
    flat = SparseTable({"A1": "x", "B2": 2})
    wrapped = SparseTable({"data": {"A1": "x", "B2": 2}})

    assert flat.snapshot() == {"A1": "x", "B2": 2}
    assert wrapped.snapshot() == flat.snapshot()
    assert SparseTable({"data": None}).is_empty()


def test_construction_fails_atomically_on_bad_key() -> None:
    with pytest.raises(FormatError, match="bad"):
        SparseTable({"A1": 1, "bad": 2})
    with pytest.raises(RangeError):
        SparseTable({"data": {"A1": 1, "B0": 2}})


def test_set_get_remove() -> None:
    table = SparseTable()
    table.set("B2", 3.5)
    assert table.get("B2") == 3.5
    assert table.get("C9") is None

    table.remove("B2")
    table.remove("B2")
    assert table.is_empty()


def test_invalid_reference_raises_on_every_entry_point() -> None:
    table = SparseTable({"A1": 1})
    with pytest.raises(FormatError, match="nope"):
        table.set("nope", 1)
    with pytest.raises(FormatError):
        table.get("1A")
    with pytest.raises(RangeError):
        table.remove("A0")
    with pytest.raises(FormatError):
        table.get_many("A1", "")
    assert table.snapshot() == {"A1": 1}


def test_set_many_rejects_whole_batch_on_bad_key() -> None:
    table = SparseTable({"Z1": "keep"})
    before = table.size()

    with pytest.raises(FormatError):
        table.set_many({"A1": 1, "invalid": 2})

    assert table.size() == before
    assert "A1" not in table


def test_set_many_applies_all_writes() -> None:
    table = SparseTable()
    table.set_many({"A1": 1, "B1": "two", "C1": False})
    assert table.get_many("A1", "C1", "D1") == {"A1": 1, "C1": False, "D1": None}


def test_none_is_never_stored() -> None:
    table = SparseTable({"A1": 1, "B1": None})
    assert table.references() == ["A1"]

    table.set("A1", None)
    assert table.size() == 0
    assert table.bounding_box() is None


def test_size_len_and_references_follow_insertion_order() -> None:
    table = SparseTable()
    table.set("C3", 1)
    table.set("A1", 2)
    table.set("C3", 3)

    assert table.size() == len(table) == 2
    assert table.references() == ["C3", "A1"]
    assert table.to_compact_pairs() == [("C3", 3), ("A1", 2)]


def test_snapshot_is_a_copy_and_raw_data_is_live() -> None:
    table = SparseTable({"A1": 1})
    snap = table.snapshot()
    snap["B1"] = 2
    assert "B1" not in table

    table.raw_data["B1"] = 2
    assert table.get("B1") == 2


def test_clear() -> None:
    table = SparseTable({"A1": 1, "B2": 2})
    table.clear()
    assert table.is_empty()
    assert table.references() == []


def test_bounding_box() -> None:
    table = SparseTable({"C3": 1, "B7": 2, "E2": 3})
    bounds = table.bounding_box()
    assert bounds == BoundingBox(min_row=2, max_row=7, min_col=2, max_col=5)
    assert bounds.row_count == 6
    assert bounds.column_count == 4


def test_empty_table_projections() -> None:
    table = SparseTable()
    assert table.bounding_box() is None
    assert table.to_array() == []
    assert table.to_row_groups() == []
    assert table.to_compact_pairs() == []


def test_to_array_anchored_fills_gaps_with_none() -> None:
    table = SparseTable({"A1": "a", "C3": "c", "E1": "e"})
    grid = table.to_array()

    assert grid == [
        ["a", None, None, None, "e"],
        [None, None, None, None, None],
        [None, None, "c", None, None],
    ]
    assert table.to_array(anchor_at_column_a=False) == grid


def test_to_array_compact_starts_at_first_used_column() -> None:
    table = SparseTable({"C1": "c", "E3": "e", "G1": "g"})

    assert len(table.to_array()[0]) == 7
    assert table.to_array(anchor_at_column_a=False) == [
        ["c", None, None, None, "g"],
        [None, None, None, None, None],
        [None, None, "e", None, None],
    ]


def test_to_array_rows_start_at_first_used_row() -> None:
    table = SparseTable({"B3": 1, "B4": 2})
    assert table.to_array() == [[None, 1], [None, 2]]


def test_to_row_groups_sorts_columns_and_omits_empty_rows() -> None:
    table = SparseTable({"C2": "c", "A2": "a", "AA5": "aa", "B5": "b"})

    assert table.to_row_groups() == [
        RowGroup(row=2, cells=[RowCell(column="A", value="a"), RowCell(column="C", value="c")]),
        RowGroup(row=5, cells=[RowCell(column="B", value="b"), RowCell(column="AA", value="aa")]),
    ]


def test_non_canonical_references_are_rejected() -> None:
    table = SparseTable({"A1": "y"})

    with pytest.raises(FormatError, match="A01"):
        table.set("A01", "x")
    with pytest.raises(FormatError):
        table.set_many({"B2": 1, "B02": 2})
    with pytest.raises(FormatError):
        SparseTable({"C003": 1})

    assert table.snapshot() == {"A1": "y"}
    assert table.to_csv() == "y"
