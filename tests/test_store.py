from types import SimpleNamespace

import pytest

from automark.errors import InvalidFieldError, UnknownTableError
from automark.models import TABLE_NAME


def test_insert_and_get_record(store):
    new_id = store.insert_record(TABLE_NAME, {"assignment": 7, "submission": 42, "value": "X"})
    assert new_id > 0

    row = store.get_record(TABLE_NAME, {"submission": 42})
    assert row.id == new_id
    assert row.value == "X"
    assert store.record_exists(TABLE_NAME, {"submission": 42})
    assert not store.record_exists(TABLE_NAME, {"submission": 43})


def test_insert_ignores_supplied_id(store):
    new_id = store.insert_record(
        TABLE_NAME, SimpleNamespace(id=999, assignment=7, submission=42, value="X")
    )
    assert new_id != 999


def test_get_record_prefers_oldest_row(store):
    first = store.insert_record(TABLE_NAME, {"assignment": 7, "submission": 42, "value": "old"})
    store.insert_record(TABLE_NAME, {"assignment": 7, "submission": 42, "value": "new"})

    assert store.get_record(TABLE_NAME, {"submission": 42}).id == first
    assert len(store.get_records(TABLE_NAME, {"submission": 42})) == 2


def test_update_record(store):
    new_id = store.insert_record(TABLE_NAME, {"assignment": 7, "submission": 42, "value": "X"})
    row = store.get_record(TABLE_NAME, {"submission": 42})
    row.value = "Y"

    assert store.update_record(TABLE_NAME, row) is True
    assert store.get_record(TABLE_NAME, {"submission": 42}).value == "Y"
    assert store.get_record(TABLE_NAME, {"submission": 42}).id == new_id


def test_update_missing_row_returns_false(store):
    assert store.update_record(TABLE_NAME, {"id": 12345, "value": "Y"}) is False


def test_update_requires_id(store):
    with pytest.raises(ValueError):
        store.update_record(TABLE_NAME, {"value": "Y"})


def test_delete_records_counts_rows(store):
    store.insert_record(TABLE_NAME, {"assignment": 7, "submission": 42, "value": "X"})
    store.insert_record(TABLE_NAME, {"assignment": 7, "submission": 43, "value": "Y"})

    assert store.delete_records(TABLE_NAME, {"submission": 42}) == 1
    assert store.delete_records(TABLE_NAME, {"submission": 42}) == 0
    assert store.count_records(TABLE_NAME) == 1


def test_unknown_table(store):
    with pytest.raises(UnknownTableError):
        store.get_record("assign_submission", {"id": 1})


def test_unknown_field(store):
    with pytest.raises(InvalidFieldError):
        store.get_record(TABLE_NAME, {"userid": 1})
    with pytest.raises(InvalidFieldError):
        store.insert_record(TABLE_NAME, {"assignment": 7, "submission": 42, "grade": 3})
