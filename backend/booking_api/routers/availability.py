# backend/booking_api/routers/availability.py
# Weekly schedule rows. GET = public, writes = admin.

from fastapi import APIRouter, Depends, HTTPException, Path, status

from ..deps import get_store, require_admin
from ..schemas.availability import (
    WeeklyScheduleCreate,
    WeeklyScheduleRead,
    WeeklyScheduleSet,
    WeeklyScheduleUpdate,
    check_time_range,
)
from ..services.auth import AdminPrincipal
from ..services.booking_store import BookingStore, StoreConflictError

router = APIRouter(prefix="/availability", tags=["availability"])


@router.get("/", response_model=list[WeeklyScheduleRead])
def list_weekly_schedule(store: BookingStore = Depends(get_store)):
    return store.list_weekly_schedule()


@router.post("/", response_model=WeeklyScheduleRead, status_code=status.HTTP_201_CREATED)
def create_weekly_schedule(
    data: WeeklyScheduleCreate,
    store: BookingStore = Depends(get_store),
    admin: AdminPrincipal = Depends(require_admin),
):
    try:
        return store.create_weekly_schedule(data.model_dump(), admin)
    except StoreConflictError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e)) from None


@router.patch("/{id}", response_model=WeeklyScheduleRead)
def update_weekly_schedule(
    id: int,
    data: WeeklyScheduleUpdate,
    store: BookingStore = Depends(get_store),
    admin: AdminPrincipal = Depends(require_admin),
):
    existing = store.get_weekly_schedule(id)
    if not existing:
        raise HTTPException(status_code=404, detail="Availability not found")

    changes = data.model_dump(exclude_unset=True)
    try:
        check_time_range(
            changes.get("start_time", existing.start_time),
            changes.get("end_time", existing.end_time),
            changes.get("is_available", existing.is_available),
        )
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e)) from None

    try:
        return store.update_weekly_schedule(id, changes, admin)
    except StoreConflictError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e)) from None


@router.put("/day/{day_of_week}", response_model=WeeklyScheduleRead)
def set_weekly_schedule(
    data: WeeklyScheduleSet,
    day_of_week: int = Path(ge=0, le=6),
    store: BookingStore = Depends(get_store),
    admin: AdminPrincipal = Depends(require_admin),
):
    return store.set_weekly_schedule(day_of_week, data.model_dump(), admin)
