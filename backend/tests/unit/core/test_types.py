"""
Unit Tests for column types
"""
from app.core.types import GUID, StringList, generate_uuid, utcnow


def test_generate_uuid_is_unique_string():
    first, second = generate_uuid(), generate_uuid()

    assert isinstance(first, str)
    assert len(first) == 36
    assert first != second


def test_utcnow_is_naive():
    assert utcnow().tzinfo is None


def test_string_list_round_trip():
    column_type = StringList()
    stored = column_type.process_bind_param(["Step one", "Step \"two\""], None)

    assert isinstance(stored, str)
    assert column_type.process_result_value(stored, None) == ["Step one", "Step \"two\""]


def test_string_list_none():
    column_type = StringList()

    assert column_type.process_bind_param(None, None) is None
    assert column_type.process_result_value(None, None) is None


def test_string_list_empty():
    column_type = StringList()

    assert column_type.process_result_value(column_type.process_bind_param([], None), None) == []


def test_guid_stores_strings():
    column_type = GUID()

    assert column_type.process_bind_param(123, None) == "123"
    assert column_type.process_bind_param(None, None) is None
