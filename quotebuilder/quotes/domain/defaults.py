"""Valeurs appliquées au chargement quand une colonne OrderItem est NULL.

Table unique: aucune autre valeur de repli ne doit être codée ailleurs
dans la reconstruction des articles.
"""
from typing import Dict

from quotebuilder.items.constants import (
    HardwareType,
    Handing,
    MeasurementGiven,
    OpeningType,
    PanelType,
    SlabType,
    VendorStyle,
    WindowColor,
    WindowMaterial,
    WindowStyle,
)

# Champs communs aux deux variantes
COMMON_DEFAULTS: Dict[str, str] = {
    "measurement_given": MeasurementGiven.DLO.value,
}

WINDOW_DEFAULTS: Dict[str, str] = {
    "style": WindowStyle.SINGLE_HUNG.value,
    "color": WindowColor.BRONZE.value,
    "material": WindowMaterial.ALUMINUM.value,
    "vendor_style": VendorStyle.CWS.value,
    "opening_type": OpeningType.MASONRY.value,
}

DOOR_DEFAULTS: Dict[str, str] = {
    "panel_type": PanelType.SINGLE.value,
    "handing": Handing.LH_IN.value,
    "slab_type": SlabType.FLUSH.value,
    "hardware_type": HardwareType.STANDARD.value,
}

LOAD_DEFAULTS: Dict[str, Dict[str, str]] = {
    "window": {**COMMON_DEFAULTS, **WINDOW_DEFAULTS},
    "door": {**COMMON_DEFAULTS, **DOOR_DEFAULTS},
}
