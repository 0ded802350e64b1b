import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from . import redis_client as redis_module
from .config import settings
from .database import SessionLocal, get_db
from .routers import admin, availability, blocked_dates, bookings, services, slots
from .services.slots import InvalidTimeError

logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.seed_on_startup:
        from .seed import seed_database_if_empty

        db = SessionLocal()
        try:
            seed_database_if_empty(db)
        finally:
            db.close()
    yield


app = FastAPI(title="Booking API", lifespan=lifespan)

app.include_router(admin.router)
app.include_router(services.router)
app.include_router(bookings.router)
app.include_router(slots.router)
app.include_router(availability.router)
app.include_router(blocked_dates.router)


# ===== Error handling =====

@app.exception_handler(SQLAlchemyError)
async def storage_error_handler(request: Request, exc: SQLAlchemyError):
    # Fail closed: never answer with default availability when storage is down
    logger.exception(f"Storage error on {request.method} {request.url.path}")
    return JSONResponse(status_code=503, content={"detail": "Storage unavailable"})


@app.exception_handler(InvalidTimeError)
async def invalid_time_handler(request: Request, exc: InvalidTimeError):
    logger.error(f"Invalid stored time on {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content={"detail": "Invalid schedule data"})


@app.get("/health")
def health(db: Session = Depends(get_db)):
    try:
        db.execute(text("SELECT 1"))
        database = True
    except SQLAlchemyError:
        logger.exception("Health check: database unreachable")
        database = False

    redis = None
    if redis_module.redis_client is not None:
        try:
            redis = bool(redis_module.redis_client.ping())
        except Exception as e:
            logger.error(f"Health check: redis unreachable: {e}")
            redis = False

    return {"database": database, "redis": redis}
