import pytest

from quotebuilder.items.domain.entities import DoorItem, WindowItem
from quotebuilder.quotes.domain.defaults import DOOR_DEFAULTS, LOAD_DEFAULTS, WINDOW_DEFAULTS
from quotebuilder.quotes.domain.exceptions import ValidationError
from quotebuilder.quotes.domain.mapping import format_dimension, item_to_row, parse_dimension, row_to_item


@pytest.mark.parametrize("raw,expected", [("36", 36.0), (" 48.5 ", 48.5), ('36"', 36.0), ("36″", 36.0), (30, 30.0)])
def test_parse_dimension(raw, expected):
    assert parse_dimension(raw, "width") == expected


@pytest.mark.parametrize("raw", ["", "abc", None, "nan", "inf"])
def test_parse_dimension_rejects_non_numeric(raw):
    with pytest.raises(ValidationError) as exc_info:
        parse_dimension(raw, "width")
    assert exc_info.value.code == "invalid_dimension"


def test_format_dimension():
    assert format_dimension(36.0) == "36"
    assert format_dimension(36.25) == "36.25"
    assert format_dimension(None) == ""


@pytest.mark.parametrize("raw", ["36.1234567", "0.0000001", "120.125", "48"])
def test_format_dimension_keeps_full_precision(raw):
    assert format_dimension(parse_dimension(raw, "width")) == raw


def test_window_row_columns(casement_window):
    row = item_to_row(casement_window, 3)
    assert row["position"] == 3
    assert row["type"] == "window"
    assert row["width"] == 36.0
    assert row["style"] == "casement"
    assert row["sub_style"] == "left"
    assert "slab_type" not in row


def test_door_row_columns(lh_door):
    row = item_to_row(lh_door, 0)
    assert row["type"] == "door"
    assert row["style"] == "single"
    assert row["sub_style"] == "lh-in"
    assert row["slab_type"] == "flush"
    assert row["notes"] == "Threshold to match tile"


def test_row_round_trip(casement_window, lh_door):
    assert row_to_item(item_to_row(casement_window, 0)) == casement_window
    assert row_to_item(item_to_row(lh_door, 1)) == lh_door


def test_null_columns_use_defaults_table():
    window = row_to_item({"type": "window", "width": 10.0, "height": 20.0})
    assert isinstance(window, WindowItem)
    for field, default in WINDOW_DEFAULTS.items():
        assert getattr(window, field) == default
    assert window.measurement_given == LOAD_DEFAULTS["window"]["measurement_given"]

    door = row_to_item({"type": "door", "width": 30.0, "height": 80.0})
    assert isinstance(door, DoorItem)
    for field, default in DOOR_DEFAULTS.items():
        assert getattr(door, field) == default


def test_unknown_row_type_is_read_as_window():
    item = row_to_item({"type": "skylight", "width": 10.0, "height": 10.0, "style": "fixed"})
    assert isinstance(item, WindowItem)
    assert item.style == "fixed"
