"""Image représentative d'un article.

Table de correspondance fixe, indépendante du contenu; toute clé inconnue
retombe sur l'image par défaut de la catégorie.
"""
from typing import Dict, Optional, Tuple, Union

from quotebuilder.items.domain.entities import DoorItem, WindowItem

DEFAULT_WINDOW_IMAGE = "windows/fixed.png"
DEFAULT_DOOR_IMAGE = "doors/1p_LH_Inswing.jpg"

# (type, style ou sens d'ouverture, option) -> chemin relatif au dossier d'images
IMAGE_TABLE: Dict[Tuple[str, str, Optional[str]], str] = {
    ("window", "single-hung", None): "windows/single_hung.png",
    ("window", "double-hung", None): "windows/double_hung.png",
    ("window", "awning", None): "windows/awning.png",
    ("window", "fixed", None): "windows/fixed.png",
    ("window", "casement", None): "windows/casement_stationary.png",
    ("window", "casement", "left"): "windows/casement_left.png",
    ("window", "casement", "right"): "windows/casement_right.png",
    ("window", "casement", "stationary"): "windows/casement_stationary.png",
    ("window", "horizontal-roller", None): "windows/horizontal_roller.png",
    ("window", "horizontal-roller", "left-active"): "windows/horizontal_roller.png",
    ("window", "horizontal-roller", "right-active"): "windows/horizontal_roller.png",
    ("window", "horizontal-roller", "three-panel"): "windows/horizontal_roller.png",
    ("door", "lh-in", None): "doors/1p_LH_Inswing.jpg",
    ("door", "lh-out", None): "doors/1p_LH_Outswing.jpg",
    ("door", "rh-in", None): "doors/1p_RH_Inswing.jpg",
    ("door", "rh-out", None): "doors/1p_RH_Outswing.jpg",
}

CATEGORY_DEFAULTS: Dict[str, str] = {
    "window": DEFAULT_WINDOW_IMAGE,
    "door": DEFAULT_DOOR_IMAGE,
}


def lookup_image(item_type: str, key: Optional[str], sub_option: Optional[str] = None) -> str:
    """Chemin d'image pour (type, style-ou-sens, option). Ne lève jamais d'exception."""
    found = IMAGE_TABLE.get((item_type, key or "", sub_option or None))
    if found is None and sub_option:
        # Option inconnue: image du style seul
        found = IMAGE_TABLE.get((item_type, key or "", None))
    if found is None:
        found = CATEGORY_DEFAULTS.get(item_type, DEFAULT_WINDOW_IMAGE)
    return found


def resolve_item_image(item: Union[WindowItem, DoorItem]) -> str:
    if isinstance(item, DoorItem):
        return lookup_image("door", item.handing)
    if isinstance(item, WindowItem):
        return lookup_image("window", item.style, item.sub_option)
    raise TypeError(f"Variante d'article non gérée: {type(item).__name__}")
