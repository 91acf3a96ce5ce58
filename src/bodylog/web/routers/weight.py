"""Daily weight routes."""

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from ...db.store import RecordStore
from ...services import DailyMetricRecorder, safe_action
from ..auth import get_authenticated_user_id
from ..dependencies import action_response, get_store

router = APIRouter(prefix="/weight", tags=["weight"])


class RecordWeightRequest(BaseModel):
    """Body for recording today's weight."""

    client_date: str
    weight: float
    weight_unit: str = "KG"


@router.get("/today")
async def todays_weight(
    client_date: str = Query(...),
    user_id: str | None = Depends(get_authenticated_user_id),
    store: RecordStore = Depends(get_store),
):
    """Today's weight: the logged entry if any, else the profile default."""
    recorder = DailyMetricRecorder(store)
    result = await safe_action(recorder.get_todays_weight, user_id, client_date)
    if result.ok:
        result.data = result.data.to_dict()
    return action_response(result)


@router.get("/today/logged")
async def todays_weight_logged(
    client_date: str = Query(...),
    user_id: str | None = Depends(get_authenticated_user_id),
    store: RecordStore = Depends(get_store),
):
    """Whether a weight has been logged for the client's date."""
    recorder = DailyMetricRecorder(store)
    result = await safe_action(recorder.is_todays_weight_logged, user_id, client_date)
    if result.ok:
        result.data = {"is_today_weight_logged": result.data}
    return action_response(result)


@router.put("/today")
async def record_todays_weight(
    body: RecordWeightRequest,
    user_id: str | None = Depends(get_authenticated_user_id),
    store: RecordStore = Depends(get_store),
):
    """Create or update the weight entry for the client's date."""
    recorder = DailyMetricRecorder(store)
    result = await safe_action(
        recorder.record_todays_weight,
        user_id,
        body.client_date,
        body.weight,
        body.weight_unit,
    )
    if result.ok:
        result.data = {"success": result.data}
    return action_response(result)


@router.get("/history")
async def weight_history(
    limit: int = Query(30),
    user_id: str | None = Depends(get_authenticated_user_id),
    store: RecordStore = Depends(get_store),
):
    """Most recent weight entries, newest first."""
    recorder = DailyMetricRecorder(store)
    result = await safe_action(recorder.list_weight_entries, user_id, limit)
    if result.ok:
        result.data = {"entries": [entry.to_dict() for entry in result.data]}
    return action_response(result)
