import pytest

from quotebuilder.items.application.forms import DoorForm, WindowForm, build_item
from quotebuilder.items.domain.entities import DoorItem, WindowItem
from quotebuilder.quotes.domain.exceptions import ValidationError


def test_window_form_defaults():
    item = WindowForm(width="36", height="48").to_item()
    assert isinstance(item, WindowItem)
    assert item.style == "single-hung"
    assert item.color == "bronze"
    assert item.material == "aluminum"
    assert item.vendor_style == "cws"
    assert item.opening_type == "masonry"
    assert item.measurement_given == "dlo"


def test_window_form_requires_dimensions():
    with pytest.raises(ValidationError) as exc_info:
        WindowForm(width="36", height="  ").to_item()
    assert exc_info.value.code == "missing_field"
    assert exc_info.value.field == "height"


def test_custom_color_requires_text():
    with pytest.raises(ValidationError) as exc_info:
        WindowForm(width="36", height="48", color="custom").to_item()
    assert exc_info.value.field == "customColor"

    item = WindowForm(width="36", height="48", color="custom", customColor="Sandstone").to_item()
    assert item.custom_color == "Sandstone"


def test_sub_option_dropped_for_styles_without_options():
    item = WindowForm(width="36", height="48", style="awning", subOption="left").to_item()
    assert item.sub_option is None

    item = WindowForm(width="36", height="48", style="casement", subOption="left").to_item()
    assert item.sub_option == "left"


def test_number_of_panels_is_parsed():
    item = WindowForm(width="96", height="80", style="sliding-glass-door", numberOfPanels="3").to_item()
    assert item.number_of_panels == 3


def test_door_form_defaults():
    item = DoorForm(width=36, height=80).to_item()
    assert isinstance(item, DoorItem)
    assert item.width == "36"
    assert item.panel_type == "single"
    assert item.handing == "lh-in"
    assert item.slab_type == "flush"
    assert item.hardware_type == "standard"


def test_build_item_dispatch():
    assert isinstance(build_item({"type": "door", "width": "30", "height": "80"}), DoorItem)
    assert isinstance(build_item({"type": "window", "width": "30", "height": "80"}), WindowItem)
    with pytest.raises(ValidationError):
        build_item({"type": "skylight", "width": "30", "height": "80"})
