import logging
from typing import Iterable, Iterator, List, Optional, Tuple, Union

from .entities import DoorItem, WindowItem

logger = logging.getLogger(__name__)

ItemType = Union[WindowItem, DoorItem]


class ItemList:
    """Liste ordonnée des articles d'une session d'édition de devis.

    Les indices hors bornes (y compris négatifs) sont ignorés: l'opération
    devient un no-op et la méthode le signale par sa valeur de retour.
    """

    def __init__(self, items: Optional[Iterable[ItemType]] = None):
        self._items: List[ItemType] = list(items or [])

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[ItemType]:
        return iter(list(self._items))

    def __getitem__(self, index: int) -> ItemType:
        return self._items[index]

    def __repr__(self) -> str:
        return f"ItemList({self._items!r})"

    @property
    def items(self) -> Tuple[ItemType, ...]:
        """Instantané immuable de la liste courante."""
        return tuple(self._items)

    def _valid(self, index: int) -> bool:
        return 0 <= index < len(self._items)

    def add(self, item: ItemType) -> None:
        """Ajoute un article en fin de liste."""
        self._items.append(item)
        logger.debug(f"[ItemList] Ajout {item.type} (total: {len(self._items)})")

    def delete(self, index: int) -> bool:
        if not self._valid(index):
            logger.debug(f"[ItemList] Suppression ignorée, index {index} hors bornes.")
            return False
        del self._items[index]
        return True

    def duplicate(self, index: int) -> Optional[ItemType]:
        """Ajoute une copie de l'article `index` en FIN de liste (pas à côté de l'original)."""
        if not self._valid(index):
            logger.debug(f"[ItemList] Duplication ignorée, index {index} hors bornes.")
            return None
        copy = self._items[index].model_copy()
        self._items.append(copy)
        return copy

    def move(self, from_index: int, to_index: int) -> bool:
        """Retire l'article `from_index` et le réinsère à `to_index`."""
        if not self._valid(from_index) or not self._valid(to_index):
            logger.debug(f"[ItemList] Déplacement ignoré ({from_index} -> {to_index}).")
            return False
        item = self._items.pop(from_index)
        self._items.insert(to_index, item)
        return True

    def move_up(self, index: int) -> bool:
        return self.move(index, index - 1)

    def move_down(self, index: int) -> bool:
        return self.move(index, index + 1)

    def replace(self, items: Iterable[ItemType]) -> None:
        """Remplace tout le contenu (chargement d'un devis existant)."""
        self._items = list(items)

    def clear(self) -> None:
        self._items.clear()
