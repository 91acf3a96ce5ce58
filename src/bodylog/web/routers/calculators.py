"""Calculator session routes."""

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from ...db.store import RecordStore
from ...services import CalculatorSessionService, DailyMetricRecorder, safe_action
from ..auth import get_authenticated_user_id
from ..dependencies import action_response, get_store

router = APIRouter(prefix="/calculators", tags=["calculators"])


class BmiInput(BaseModel):
    weight: float
    height: float
    weight_unit: str = "KG"


class BmiRequest(BmiInput):
    client_date: str
    save_new_weight: bool = False
    update_height: bool = False


class BmrInput(BaseModel):
    weight: float
    height: float
    age: float
    gender: str
    activity_level: str
    weight_unit: str = "KG"


class BmrRequest(BmrInput):
    client_date: str
    save_new_weight: bool = False


class BodyFatInput(BaseModel):
    height: float
    waist: float
    neck: float
    gender: str
    hips: float | None = None


class BodyFatRequest(BodyFatInput):
    client_date: str


@router.post("/bmi/calculate")
async def calculate_bmi(
    body: BmiInput,
    user_id: str | None = Depends(get_authenticated_user_id),
    store: RecordStore = Depends(get_store),
):
    """Calculate BMI without logging it."""
    service = CalculatorSessionService(store)
    result = await safe_action(service.calculate_bmi, user_id, **body.model_dump())
    return action_response(result)


@router.post("/bmr/calculate")
async def calculate_bmr(
    body: BmrInput,
    user_id: str | None = Depends(get_authenticated_user_id),
    store: RecordStore = Depends(get_store),
):
    """Calculate BMR and daily calories without logging them."""
    service = CalculatorSessionService(store)
    result = await safe_action(service.calculate_bmr, user_id, **body.model_dump())
    return action_response(result)


@router.post("/body-fat/calculate")
async def calculate_body_fat(
    body: BodyFatInput,
    user_id: str | None = Depends(get_authenticated_user_id),
    store: RecordStore = Depends(get_store),
):
    """Calculate body fat percentage without logging it."""
    service = CalculatorSessionService(store)
    result = await safe_action(service.calculate_body_fat, user_id, **body.model_dump())
    return action_response(result)

@router.post("/bmi")
async def add_bmi(
    body: BmiRequest,
    user_id: str | None = Depends(get_authenticated_user_id),
    store: RecordStore = Depends(get_store),
):
    """Calculate and log BMI."""
    service = CalculatorSessionService(store)
    result = await safe_action(service.add_bmi, user_id, **body.model_dump())
    return action_response(result)


@router.post("/bmr")
async def add_bmr(
    body: BmrRequest,
    user_id: str | None = Depends(get_authenticated_user_id),
    store: RecordStore = Depends(get_store),
):
    """Calculate and log BMR with daily calorie needs."""
    service = CalculatorSessionService(store)
    result = await safe_action(service.add_bmr, user_id, **body.model_dump())
    return action_response(result)


@router.post("/body-fat")
async def add_body_fat(
    body: BodyFatRequest,
    user_id: str | None = Depends(get_authenticated_user_id),
    store: RecordStore = Depends(get_store),
):
    """Calculate and log body fat percentage."""
    service = CalculatorSessionService(store)
    result = await safe_action(service.add_body_fat, user_id, **body.model_dump())
    return action_response(result)


@router.get("/{category}/logged")
async def category_logged(
    category: str,
    client_date: str = Query(...),
    user_id: str | None = Depends(get_authenticated_user_id),
    store: RecordStore = Depends(get_store),
):
    """Whether a session of this category was logged for the client's date."""
    recorder = DailyMetricRecorder(store)
    result = await safe_action(
        recorder.is_todays_category_logged, user_id, client_date, category
    )
    if result.ok:
        result.data = {"is_today_logged": result.data}
    return action_response(result)


@router.get("/{category}/history")
async def category_history(
    category: str,
    page: int = Query(0),
    page_size: int = Query(5),
    user_id: str | None = Depends(get_authenticated_user_id),
    store: RecordStore = Depends(get_store),
):
    """Paginated sessions for a category, newest first."""
    service = CalculatorSessionService(store)
    result = await safe_action(service.get_history, user_id, category, page, page_size)
    return action_response(result)


@router.get("/{category}/for-date")
async def category_for_date(
    category: str,
    client_date: str = Query(...),
    user_id: str | None = Depends(get_authenticated_user_id),
    store: RecordStore = Depends(get_store),
):
    """The session of this category logged for a date, or null."""
    service = CalculatorSessionService(store)
    result = await safe_action(service.get_for_date, user_id, category, client_date)
    return action_response(result)
