# app/main.py
from dotenv import load_dotenv

load_dotenv()

import logging
import logging.config
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from config.appconfig import settings

# Apply logging configuration
logging.config.dictConfig(settings.LOGGING_CONFIG)

# Import routers
from app.system_services.admin_routes import router as admin_router
from app.system_services.doctor_routes import router as doctor_router
from app.system_services.system_routes import router as appointment_router
from app.users.auth_routers import router as auth_router
from config.reset_config_route import router as reset_config_route

from app.database.connection import init_models
from app.system_services.exceptions import BookingError
from app.system_services.slot_locks import SlotLockRegistry
from app.users.auth_cache import AuthCache

logger = logging.getLogger("app.main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    # Startup
    await init_models()
    logger.info("===============================================================")
    logger.info(" 🚀 Starting Telehealth Booking Server")
    logger.info(f" ✅ Auth cache TTL: {settings.AUTH_CACHE_TTL_SECONDS}s")
    logger.info(f" ✅ Prescription uploads: {settings.PRESCRIPTION_UPLOAD_DIR}")
    logger.info("===============================================================")
    yield
    # Shutdown
    logger.info("👋 Shutting down")


app = FastAPI(
    title="Telehealth Appointment Platform",
    description="Doctor availability, appointment booking and consultation lifecycle",
    version="1.0.0",
    lifespan=lifespan,
)

app.state.auth_cache = AuthCache(
    ttl_seconds=settings.AUTH_CACHE_TTL_SECONDS,
    max_entries=settings.AUTH_CACHE_MAX_ENTRIES,
)
app.state.slot_locks = SlotLockRegistry()


@app.exception_handler(BookingError)
async def booking_error_handler(request: Request, exc: BookingError):
    logger.info(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


# Include routers with prefixes
app.include_router(auth_router, prefix="/api/auth", tags=["Authentication"])
app.include_router(appointment_router, prefix="/api", tags=["Appointments"])
app.include_router(doctor_router, prefix="/api/doctors", tags=["Doctors"])
app.include_router(admin_router, prefix="/api/admin", tags=["Admin"])
app.include_router(reset_config_route, prefix="/api/system")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host="0.0.0.0", port=8000, reload=True)
