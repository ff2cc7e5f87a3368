"""Conversion article <-> ligne générique OrderItem."""
import logging
import math
from typing import Any, Dict, Mapping, Optional, Union

from quotebuilder.items.domain.entities import DoorItem, WindowItem

from .defaults import LOAD_DEFAULTS
from .exceptions import ValidationError

logger = logging.getLogger(__name__)

ItemType = Union[WindowItem, DoorItem]


def parse_dimension(value: Any, field: str) -> float:
    """Chaîne du formulaire -> nombre (les marques de pouce sont tolérées)."""
    text = str(value).strip().rstrip('″"').strip() if value is not None else ""
    try:
        number = float(text)
    except ValueError:
        raise ValidationError(
            "invalid_dimension", f"Valeur numérique invalide pour '{field}': {value!r}", field=field
        )
    if not math.isfinite(number):
        raise ValidationError("invalid_dimension", f"Valeur numérique invalide pour '{field}': {value!r}", field=field)
    return number


def format_dimension(value: Optional[float]) -> str:
    """36.0 -> "36", 36.5 -> "36.5"."""
    if value is None:
        return ""
    text = repr(float(value))
    return text[:-2] if text.endswith(".0") else text


def item_to_row(item: ItemType, position: int) -> Dict[str, Any]:
    """Construit la ligne OrderItem d'un article (sans id ni quote_id)."""
    row: Dict[str, Any] = {
        "position": position,
        "type": item.type,
        "width": parse_dimension(item.width, "width"),
        "height": parse_dimension(item.height, "height"),
        "material": item.material,
        "color": item.color,
        "custom_color": item.custom_color,
        "measurement_given": item.measurement_given,
        "notes": item.notes,
    }
    if isinstance(item, WindowItem):
        row.update(
            style=item.style,
            sub_style=item.sub_option,
            vendor_style=item.vendor_style,
            opening_type=item.opening_type,
            number_of_panels=item.number_of_panels,
            stack_type=item.stack_type,
            pocket_type=item.pocket_type,
        )
    elif isinstance(item, DoorItem):
        row.update(
            style=item.panel_type,
            sub_style=item.handing,
            slab_type=item.slab_type,
            hardware_type=item.hardware_type,
        )
    else:
        raise TypeError(f"Variante d'article non gérée: {type(item).__name__}")
    return row


def row_to_item(row: Mapping[str, Any]) -> ItemType:
    """Reconstruit l'article typé depuis une ligne OrderItem, avec les valeurs par défaut."""
    item_type = row.get("type") or "window"
    if item_type not in LOAD_DEFAULTS:
        logger.warning(f"[mapping] Type d'article inconnu '{item_type}', lu comme fenêtre.")
        item_type = "window"
    defaults = LOAD_DEFAULTS[item_type]

    def value(column: str, field: Optional[str] = None) -> Any:
        found = row.get(column)
        if found is None:
            return defaults.get(field or column)
        return found

    common = {
        "width": format_dimension(row.get("width")),
        "height": format_dimension(row.get("height")),
        "custom_color": row.get("custom_color"),
        "notes": row.get("notes"),
        "measurement_given": value("measurement_given"),
    }
    if item_type == "door":
        return DoorItem(
            **common,
            color=row.get("color"),
            material=row.get("material"),
            panel_type=value("style", "panel_type"),
            handing=value("sub_style", "handing"),
            slab_type=value("slab_type"),
            hardware_type=value("hardware_type"),
        )
    return WindowItem(
        **common,
        color=value("color"),
        material=value("material"),
        style=value("style"),
        sub_option=row.get("sub_style"),
        vendor_style=value("vendor_style"),
        opening_type=value("opening_type"),
        number_of_panels=row.get("number_of_panels"),
        stack_type=row.get("stack_type"),
        pocket_type=row.get("pocket_type"),
    )
