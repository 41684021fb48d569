"""Owner identity dependency."""

from typing import Annotated

from fastapi import Depends, Request

from src.toggly.core.errors import OwnerUnresolved


def get_owner_id(request: Request) -> str:
    """Owner resolved by AuthenticationMiddleware."""
    owner_id = getattr(request.state, "owner_id", None)
    if not owner_id:
        raise OwnerUnresolved()
    return owner_id


OwnerId = Annotated[str, Depends(get_owner_id)]
