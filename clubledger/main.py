from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
import logging

from clubledger.core.config import get_settings
from clubledger.core.errors import ClubLedgerError, status_code_for
from clubledger.routers.auth import router as auth_router
from clubledger.routers.health import router as health_router
from clubledger.routers.dashboard import router as dashboard_router
from clubledger.routers.events import router as events_router
from clubledger.routers.general_costs import router as general_costs_router
from clubledger.routers.ingredients import router as ingredients_router
from clubledger.routers.recipes import router as recipes_router
from clubledger.routers.menu import router as menu_router

settings = get_settings()

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.APP_NAME,
    description="Bookkeeping for a nonprofit club - events and their sale items, general expenses, ingredients and recipe costing.",
    version="0.1.0",
    debug=settings.DEBUG,
)


@app.exception_handler(ClubLedgerError)
async def domain_exception_handler(request: Request, exc: ClubLedgerError):
    """Domain errors carry their own title and message."""
    return JSONResponse(
        status_code=status_code_for(exc),
        content={"detail": exc.message, "title": exc.title},
    )


@app.exception_handler(SQLAlchemyError)
async def store_exception_handler(request: Request, exc: SQLAlchemyError):
    """Database errors: the service has already rolled back, report what the store said."""
    logger.error(f"Store error on {request.method} {request.url.path}: {exc}", exc_info=True)
    is_integrity = isinstance(exc, IntegrityError)
    return JSONResponse(
        status_code=409 if is_integrity else 500,
        content={
            "error": "store_error",
            "title": "Constraint violation" if is_integrity else "Database error",
            "message": str(getattr(exc, "orig", None) or exc),
        }
    )


# Global exception handler for unhandled errors
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Handle unexpected server errors with structured response."""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={
            "error": "internal_server_error",
            "message": "An unexpected error occurred. Please try again later.",
            "request_id": request.headers.get("X-Request-ID"),
        }
    )

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health_router)
app.include_router(auth_router, prefix="/api")
app.include_router(dashboard_router, prefix="/api")
app.include_router(events_router, prefix="/api")
app.include_router(general_costs_router, prefix="/api")
app.include_router(ingredients_router, prefix="/api")
app.include_router(recipes_router, prefix="/api")
app.include_router(menu_router, prefix="/api")


@app.get("/")
def read_root():
    return {
        "message": "Welcome to Club Ledger API",
        "docs": "/docs",
        "health": "/health"
    }
