import pytest
from pydantic import ValidationError as PydanticValidationError

from quotebuilder.items.domain.entities import DoorItem, WindowItem, parse_item


def test_parse_item_accepts_camel_case_and_numbers():
    item = parse_item({
        "type": "window",
        "width": 36,
        "height": 48.5,
        "style": "casement",
        "subOption": "left",
        "measurementGiven": "rough",
    })
    assert isinstance(item, WindowItem)
    assert item.width == "36"
    assert item.height == "48.5"
    assert item.sub_option == "left"
    assert item.measurement_given == "rough"
    # Valeurs par défaut de la variante fenêtre
    assert item.color == "bronze"
    assert item.material == "aluminum"
    assert item.vendor_style == "cws"


def test_parse_item_dispatches_on_type():
    item = parse_item({"type": "door", "width": "30", "height": "80", "panelType": "double", "handing": "rh-out"})
    assert isinstance(item, DoorItem)
    assert item.slab_type == "flush"
    assert item.hardware_type == "standard"


def test_variant_cannot_carry_other_variant_fields():
    with pytest.raises(PydanticValidationError):
        parse_item({"type": "door", "width": "30", "height": "80", "panelType": "single",
                    "handing": "lh-in", "style": "casement"})


def test_unknown_discriminant_is_rejected():
    with pytest.raises(PydanticValidationError):
        parse_item({"type": "skylight", "width": "30", "height": "30"})


def test_unknown_codes_are_kept_as_text():
    item = WindowItem(width="10", height="10", style="bay")
    assert item.style == "bay"


def test_opening_photo_is_never_serialized(casement_window):
    with_photo = casement_window.model_copy(update={"opening_photo": b"\x89PNG"})
    dumped = with_photo.model_dump(by_alias=True)
    assert "openingPhoto" not in dumped
    assert "opening_photo" not in dumped
    assert dumped["subOption"] == "left"
