"""Body profile routes."""

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from ...db.store import RecordStore
from ...services import CalculatorSessionService, ProfileService, safe_action
from ..auth import get_authenticated_user_id
from ..dependencies import action_response, get_store

router = APIRouter(prefix="/profile", tags=["profile"])


class ProfileUpdate(BaseModel):
    weight: float | None = None
    height: float | None = None
    weight_unit: str | None = None


@router.get("")
async def get_profile(
    user_id: str | None = Depends(get_authenticated_user_id),
    store: RecordStore = Depends(get_store),
):
    """The user's profile, or null if none has been saved."""
    service = ProfileService(store)
    result = await safe_action(service.get_profile, user_id)
    if result.ok and result.data is not None:
        result.data = result.data.to_dict()
    return action_response(result)


@router.put("")
async def save_profile(
    body: ProfileUpdate,
    user_id: str | None = Depends(get_authenticated_user_id),
    store: RecordStore = Depends(get_store),
):
    """Save default weight, height or preferred unit."""
    service = ProfileService(store)
    result = await safe_action(service.save_profile, user_id, **body.model_dump())
    if result.ok:
        result.data = result.data.to_dict()
    return action_response(result)


@router.get("/weight-height")
async def weight_height(
    client_date: str = Query(...),
    user_id: str | None = Depends(get_authenticated_user_id),
    store: RecordStore = Depends(get_store),
):
    """Today's weight together with the profile height."""
    service = CalculatorSessionService(store)
    result = await safe_action(service.get_weight_height, user_id, client_date)
    return action_response(result)
