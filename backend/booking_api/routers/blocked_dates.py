# backend/booking_api/routers/blocked_dates.py
# PATCH = none, DELETE = hard

from fastapi import APIRouter, Depends, HTTPException, status

from ..deps import get_store, require_admin
from ..schemas.blocked_dates import BlockedDateCreate, BlockedDateRead
from ..services.auth import AdminPrincipal
from ..services.booking_store import BookingStore, StoreConflictError

router = APIRouter(prefix="/blocked-dates", tags=["blocked_dates"])


@router.get("/", response_model=list[BlockedDateRead])
def list_blocked_dates(store: BookingStore = Depends(get_store)):
    return store.list_blocked_dates()


@router.post("/", response_model=BlockedDateRead, status_code=status.HTTP_201_CREATED)
def create_blocked_date(
    data: BlockedDateCreate,
    store: BookingStore = Depends(get_store),
    admin: AdminPrincipal = Depends(require_admin),
):
    try:
        return store.add_blocked_date(data.date, data.reason, admin)
    except StoreConflictError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e)) from None


@router.delete("/{id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_blocked_date(
    id: int,
    store: BookingStore = Depends(get_store),
    admin: AdminPrincipal = Depends(require_admin),
):
    if not store.remove_blocked_date(id, admin):
        raise HTTPException(status_code=404, detail="Not found")
