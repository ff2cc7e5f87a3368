from typing import Annotated, Any, Literal, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic.alias_generators import to_camel

# Entités du Domaine "Items" (une fenêtre ou une porte configurée)


class ItemBase(BaseModel):
    """Champs communs aux deux variantes."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        coerce_numbers_to_str=True,
        extra="forbid",  # Une variante ne peut pas porter les champs de l'autre
    )

    # Saisies du formulaire, conservées telles quelles ("36", "48.5")
    width: str
    height: str
    color: Optional[str] = None
    material: Optional[str] = None
    custom_color: Optional[str] = None
    notes: Optional[str] = None
    # Photo de l'ouverture: jamais persistée ni sérialisée
    opening_photo: Optional[bytes] = Field(default=None, exclude=True, repr=False)
    measurement_given: str = "dlo"


class WindowItem(ItemBase):
    type: Literal["window"] = "window"
    color: str = "bronze"
    material: str = "aluminum"
    style: str
    sub_option: Optional[str] = None
    vendor_style: str = "cws"
    opening_type: str = "masonry"
    number_of_panels: Optional[int] = None
    stack_type: Optional[str] = None
    pocket_type: Optional[str] = None


class DoorItem(ItemBase):
    type: Literal["door"] = "door"
    panel_type: str
    handing: str
    slab_type: str = "flush"
    hardware_type: str = "standard"


Item = Annotated[Union[WindowItem, DoorItem], Field(discriminator="type")]

_item_adapter: TypeAdapter[Item] = TypeAdapter(Item)


def parse_item(data: Union[Mapping[str, Any], WindowItem, DoorItem]) -> Union[WindowItem, DoorItem]:
    """Valide un dictionnaire (clés camelCase ou snake_case) vers la bonne variante."""
    if isinstance(data, (WindowItem, DoorItem)):
        return data
    return _item_adapter.validate_python(dict(data))
