"""Mise en forme texte des articles (liste à l'écran, PDF, email)."""
import re
from datetime import date, datetime
from typing import Dict, Optional, Union

from quotebuilder.items.domain.entities import DoorItem, WindowItem

INCH = "″"
TIMES = "×"

HANDING_NAMES: Dict[str, str] = {
    "lh-in": "Left Hand In-Swing",
    "lh-out": "Left Hand Out-Swing",
    "rh-in": "Right Hand In-Swing",
    "rh-out": "Right Hand Out-Swing",
}

WINDOW_STYLE_NAMES: Dict[str, str] = {
    "single-hung": "Single-Hung",
    "double-hung": "Double-Hung",
    "horizontal-roller": "Horizontal Roller",
    "sliding-glass-door": "Sliding Glass Door",
    "swing-door": "Swing Door",
}

PANEL_TYPE_NAMES: Dict[str, str] = {
    "single": "Single Panel",
    "double": "2 Panel French",
}

HARDWARE_TYPE_NAMES: Dict[str, str] = {
    "multipoint": "Multi-Point",
}

MEASUREMENT_NAMES: Dict[str, str] = {
    "dlo": "DLO",
    "rough": "Rough Opening",
    "masonry": "Masonry Opening",
    "frame": "Frame Size",
    "custom": "Custom",
}


def capitalize_first(text: Optional[str]) -> str:
    """'casement' -> 'Casement' (le reste est inchangé)."""
    if not text:
        return ""
    return text[0].upper() + text[1:]


def title_case(code: Optional[str]) -> str:
    """'three-panel' -> 'Three-Panel'."""
    if not code:
        return ""
    return "-".join(
        " ".join(capitalize_first(word) for word in part.split(" "))
        for part in code.split("-")
    )


def display_name(table: Dict[str, str], code: Optional[str]) -> str:
    """Nom d'affichage d'un code: table dédiée, sinon casse de titre."""
    if not code:
        return ""
    return table.get(code, title_case(code))


def handing_display_name(handing: Optional[str]) -> str:
    """Les codes de sens d'ouverture ne sont jamais affichés bruts."""
    if not handing:
        return ""
    if handing in HANDING_NAMES:
        return HANDING_NAMES[handing]
    side, _, swing = handing.partition("-")
    hand = {"lh": "Left Hand", "rh": "Right Hand"}.get(side.lower(), title_case(side))
    return f"{hand} {title_case(swing)}-Swing" if swing else hand


def measurement_display(code: Optional[str]) -> str:
    return MEASUREMENT_NAMES.get(code or "dlo", (code or "").upper())


def format_dimensions(width: object, height: object) -> str:
    """-> 36″×48″ (une seule marque de pouce, même si la saisie en contient déjà une)."""
    def clean(value: object) -> str:
        return str(value if value is not None else "").strip().rstrip(f'{INCH}"').strip()
    return f"{clean(width)}{INCH}{TIMES}{clean(height)}{INCH}"


def _color_text(item: Union[WindowItem, DoorItem]) -> Optional[str]:
    if item.color == "custom" and item.custom_color:
        return item.custom_color
    return item.color


def describe_window(item: WindowItem) -> str:
    style = display_name(WINDOW_STYLE_NAMES, item.style)
    if item.sub_option:
        style = f"{style} ({item.sub_option})"
    parts = [style, format_dimensions(item.width, item.height), _color_text(item), item.material]
    details = " ".join(part for part in parts if part)
    return f"{details} - Measurement Given: {measurement_display(item.measurement_given)}"


def describe_door(item: DoorItem) -> str:
    parts = [
        display_name(PANEL_TYPE_NAMES, item.panel_type),
        format_dimensions(item.width, item.height),
        handing_display_name(item.handing),
        title_case(item.slab_type),
        display_name(HARDWARE_TYPE_NAMES, item.hardware_type),
    ]
    details = " ".join(part for part in parts if part)
    return f"{details} - Measurement Given: {measurement_display(item.measurement_given)}"


def describe_item(item: Union[WindowItem, DoorItem]) -> str:
    """Ligne descriptive d'un article."""
    if isinstance(item, WindowItem):
        return describe_window(item)
    if isinstance(item, DoorItem):
        return describe_door(item)
    raise TypeError(f"Variante d'article non gérée: {type(item).__name__}")


def format_notes(item: Union[WindowItem, DoorItem]) -> Optional[str]:
    notes = (item.notes or "").strip()
    return f"Note: {notes}" if notes else None


def item_type_label(item: Union[WindowItem, DoorItem]) -> str:
    return capitalize_first(item.type)


def format_date(value: Union[date, datetime]) -> str:
    """-> 'October 19, 2026'."""
    return f"{value:%B} {value.day}, {value.year}"


def order_pdf_filename(job_name: Optional[str]) -> str:
    """'Smith Residence' -> 'Smith_Residence_order.pdf'."""
    base = re.sub(r"\s+", "_", (job_name or "").strip()) or "quote"
    return f"{base}_order.pdf"
