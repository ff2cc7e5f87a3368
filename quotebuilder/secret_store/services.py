import logging
import os
from typing import Iterable, Mapping, Optional

logger = logging.getLogger(__name__)


class SecretStore:
    """Lecture de secrets dans l'environnement, limitée à une liste autorisée."""

    def __init__(self, exposed: Iterable[str], environ: Optional[Mapping[str, str]] = None):
        self.exposed = frozenset(exposed)
        self.environ = environ if environ is not None else os.environ

    def get_secret(self, name: str) -> Optional[str]:
        if name not in self.exposed:
            logger.warning(f"[SecretStore] Secret '{name}' non exposé.")
            return None
        value = self.environ.get(name)
        if not value:
            logger.warning(f"[SecretStore] Secret '{name}' absent de l'environnement.")
            return None
        return value
