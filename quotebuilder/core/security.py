"""Identité de l'appelant.

L'authentification est assurée en amont (passerelle / fournisseur
d'identité) qui transmet l'utilisateur dans les en-têtes X-User-Id et
X-User-Email.
"""
import logging
from typing import Annotated, Optional

from fastapi import Depends, Header, HTTPException, status
from pydantic import BaseModel

logger = logging.getLogger(__name__)

# Exception commune pour les erreurs d'authentification
CREDENTIALS_EXCEPTION = HTTPException(
    status_code=status.HTTP_401_UNAUTHORIZED,
    detail="Could not validate credentials",
)


class CurrentUser(BaseModel):
    id: str
    email: Optional[str] = None


async def get_optional_user(
    x_user_id: Annotated[Optional[str], Header()] = None,
    x_user_email: Annotated[Optional[str], Header()] = None,
) -> Optional[CurrentUser]:
    """Utilisateur transmis par les en-têtes, ou None si anonyme."""
    user_id = (x_user_id or "").strip()
    if not user_id:
        return None
    return CurrentUser(id=user_id, email=(x_user_email or "").strip() or None)


async def get_current_user(
    user: Annotated[Optional[CurrentUser], Depends(get_optional_user)]
) -> CurrentUser:
    """Dépendance pour les routes réservées aux utilisateurs connectés."""
    if user is None:
        logger.warning("[Security] Requête sans en-tête X-User-Id refusée.")
        raise CREDENTIALS_EXCEPTION
    return user


OptionalUserDep = Annotated[Optional[CurrentUser], Depends(get_optional_user)]
CurrentUserDep = Annotated[CurrentUser, Depends(get_current_user)]
