"""Codes connus pour la configuration des fenêtres et des portes.

Les champs des articles restent typés `str`: un code inconnu est accepté et
retombe sur les règles d'affichage / d'image par défaut.
"""
from enum import Enum
from typing import Dict, Tuple


class ItemType(str, Enum):
    WINDOW = "window"
    DOOR = "door"


class WindowStyle(str, Enum):
    SINGLE_HUNG = "single-hung"
    DOUBLE_HUNG = "double-hung"
    AWNING = "awning"
    CASEMENT = "casement"
    FIXED = "fixed"
    HORIZONTAL_ROLLER = "horizontal-roller"
    SLIDING_GLASS_DOOR = "sliding-glass-door"
    SWING_DOOR = "swing-door"


class CasementOption(str, Enum):
    LEFT = "left"
    RIGHT = "right"
    STATIONARY = "stationary"


class HorizontalRollerOption(str, Enum):
    LEFT_ACTIVE = "left-active"
    RIGHT_ACTIVE = "right-active"
    THREE_PANEL = "three-panel"


# Styles proposant un choix d'option (bouton radio dans le formulaire)
STYLE_SUB_OPTIONS: Dict[str, Tuple[str, ...]] = {
    WindowStyle.CASEMENT.value: tuple(o.value for o in CasementOption),
    WindowStyle.HORIZONTAL_ROLLER.value: tuple(o.value for o in HorizontalRollerOption),
}


class MeasurementGiven(str, Enum):
    DLO = "dlo"
    ROUGH = "rough"
    MASONRY = "masonry"
    FRAME = "frame"
    CUSTOM = "custom"


class PanelType(str, Enum):
    SINGLE = "single"
    DOUBLE = "double"


class Handing(str, Enum):
    LH_IN = "lh-in"
    LH_OUT = "lh-out"
    RH_IN = "rh-in"
    RH_OUT = "rh-out"


class SlabType(str, Enum):
    FLUSH = "flush"
    PANEL = "panel"
    GLASS = "glass"


class HardwareType(str, Enum):
    STANDARD = "standard"
    MULTIPOINT = "multipoint"
    PANIC = "panic"


class WindowColor(str, Enum):
    BRONZE = "bronze"
    BLACK = "black"
    WHITE = "white"
    SILVER = "silver"
    CUSTOM = "custom"


class WindowMaterial(str, Enum):
    ALUMINUM = "aluminum"
    VINYL = "vinyl"
    WOOD = "wood"


class VendorStyle(str, Enum):
    CWS = "cws"
    ES_VINYL = "es-vinyl"
    ES_ELITE = "es-elite"
    ES_PRESTIGE = "es-prestige"
    ES_STOREFRONT = "es-storefront"
    PGT_VINYL = "pgt-vinyl"
    PGT_ALUMINUM = "pgt-aluminum"
    CWS_ALUMINUM_FLANGE = "cws-aluminum-flange"
    CWS_ALUMINUM_FIN = "cws-aluminum-fin"


class OpeningType(str, Enum):
    MASONRY = "masonry"
    RECESSED = "recessed"
    WOOD = "wood"
