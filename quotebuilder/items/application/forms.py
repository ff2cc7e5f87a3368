"""Formulaires de configuration: saisie brute -> article typé.

Aucune logique inter-articles; seule la présence des champs requis est vérifiée.
"""
import logging
from typing import Any, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from quotebuilder.items.constants import STYLE_SUB_OPTIONS, WindowColor
from quotebuilder.items.domain.entities import DoorItem, WindowItem
from quotebuilder.quotes.domain.exceptions import ValidationError

logger = logging.getLogger(__name__)


def _clean(value: Optional[str]) -> Optional[str]:
    """Chaîne vide ou blanche -> None."""
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def _require(value: Optional[str], field: str) -> str:
    cleaned = _clean(value)
    if cleaned is None:
        raise ValidationError("missing_field", f"Le champ '{field}' est requis.", field=field)
    return cleaned


class _FormBase(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="ignore", coerce_numbers_to_str=True
    )

    width: Optional[str] = None
    height: Optional[str] = None
    notes: Optional[str] = None
    measurement_given: Optional[str] = "dlo"
    opening_photo: Optional[bytes] = None


class WindowForm(_FormBase):
    """Formulaire fenêtre avec les valeurs par défaut des listes déroulantes."""

    color: Optional[str] = "bronze"
    custom_color: Optional[str] = None
    material: Optional[str] = "aluminum"
    style: Optional[str] = "single-hung"
    sub_option: Optional[str] = None
    vendor_style: Optional[str] = "cws"
    opening_type: Optional[str] = "masonry"
    number_of_panels: Optional[str] = None
    stack_type: Optional[str] = None
    pocket_type: Optional[str] = None

    def to_item(self) -> WindowItem:
        color = _clean(self.color) or WindowColor.BRONZE.value
        custom_color = _clean(self.custom_color)
        if color == WindowColor.CUSTOM.value:
            custom_color = _require(custom_color, "customColor")

        style = _clean(self.style) or "single-hung"
        # L'option n'est proposée que pour certains styles
        sub_option = _clean(self.sub_option) if style in STYLE_SUB_OPTIONS else None

        panels = _clean(self.number_of_panels)
        return WindowItem(
            width=_require(self.width, "width"),
            height=_require(self.height, "height"),
            color=color,
            custom_color=custom_color,
            material=_clean(self.material) or "aluminum",
            notes=_clean(self.notes),
            opening_photo=self.opening_photo,
            measurement_given=_clean(self.measurement_given) or "dlo",
            style=style,
            sub_option=sub_option,
            vendor_style=_clean(self.vendor_style) or "cws",
            opening_type=_clean(self.opening_type) or "masonry",
            number_of_panels=int(panels) if panels and panels.isdigit() else None,
            stack_type=_clean(self.stack_type),
            pocket_type=_clean(self.pocket_type),
        )


class DoorForm(_FormBase):
    """Formulaire porte avec les valeurs par défaut des listes déroulantes."""

    panel_type: Optional[str] = "single"
    handing: Optional[str] = "lh-in"
    slab_type: Optional[str] = "flush"
    hardware_type: Optional[str] = "standard"

    def to_item(self) -> DoorItem:
        return DoorItem(
            width=_require(self.width, "width"),
            height=_require(self.height, "height"),
            notes=_clean(self.notes),
            opening_photo=self.opening_photo,
            measurement_given=_clean(self.measurement_given) or "dlo",
            panel_type=_clean(self.panel_type) or "single",
            handing=_clean(self.handing) or "lh-in",
            slab_type=_clean(self.slab_type) or "flush",
            hardware_type=_clean(self.hardware_type) or "standard",
        )


def build_item(form_data: Mapping[str, Any]) -> Union[WindowItem, DoorItem]:
    """Construit un article depuis les données brutes d'un formulaire (clé `type` requise)."""
    item_type = form_data.get("type")
    if item_type == "window":
        return WindowForm.model_validate(dict(form_data)).to_item()
    if item_type == "door":
        return DoorForm.model_validate(dict(form_data)).to_item()
    raise ValidationError("missing_field", f"Type d'article inconnu: {item_type!r}", field="type")
