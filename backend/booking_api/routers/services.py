# backend/booking_api/routers/services.py
# GET = public (active only in the list), writes = admin, DELETE = soft

from fastapi import APIRouter, Depends, HTTPException, status

from ..deps import get_store, require_admin
from ..schemas.services import ServiceCreate, ServiceRead, ServiceUpdate
from ..services.auth import AdminPrincipal
from ..services.booking_store import BookingStore

router = APIRouter(prefix="/services", tags=["services"])


@router.get("/", response_model=list[ServiceRead])
def list_services(store: BookingStore = Depends(get_store)):
    return store.list_active_services()


@router.get("/{id}", response_model=ServiceRead)
def get_service(id: int, store: BookingStore = Depends(get_store)):
    obj = store.get_service(id)
    if not obj:
        raise HTTPException(status_code=404, detail="Service not found")
    return obj


@router.post("/", response_model=ServiceRead, status_code=status.HTTP_201_CREATED)
def create_service(
    data: ServiceCreate,
    store: BookingStore = Depends(get_store),
    admin: AdminPrincipal = Depends(require_admin),
):
    return store.create_service(data.model_dump(), admin)


@router.patch("/{id}", response_model=ServiceRead)
def update_service(
    id: int,
    data: ServiceUpdate,
    store: BookingStore = Depends(get_store),
    admin: AdminPrincipal = Depends(require_admin),
):
    obj = store.update_service(id, data.model_dump(exclude_unset=True), admin)
    if not obj:
        raise HTTPException(status_code=404, detail="Service not found")
    return obj


@router.delete("/{id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_service(
    id: int,
    store: BookingStore = Depends(get_store),
    admin: AdminPrincipal = Depends(require_admin),
):
    if not store.deactivate_service(id, admin):
        raise HTTPException(status_code=404, detail="Service not found")
