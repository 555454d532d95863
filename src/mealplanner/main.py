"""FastAPI application entry point."""

import uuid
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from mealplanner.config import settings
from mealplanner.database import AsyncSessionLocal, Base, async_engine
from mealplanner.logging_config import LoggingContext, configure_logging, get_logger
from mealplanner.routers import (
    households_router,
    ingredients_router,
    meal_plans_router,
    pantries_router,
    recipes_router,
    shopping_lists_router,
)
from mealplanner.seed import seed_ingredients

# Configure logging on module load
configure_logging(log_level=settings.log_level, json_format=settings.log_format == "json")
logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan handler for startup and shutdown events."""
    logger.info("Starting Mealplanner API")

    async with async_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables initialized")

    if settings.seed_ingredients:
        async with AsyncSessionLocal() as session:
            await seed_ingredients(session, settings.ingredient_seed_file)

    yield

    logger.info("Shutting down Mealplanner API")
    await async_engine.dispose()


app = FastAPI(
    title="Mealplanner API",
    description="Household recipes, weekly meal plans, pantry and shopping lists",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def request_context(request: Request, call_next):
    """Tag every log record of a request with its request id and echo it back."""
    request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
    with LoggingContext(request_id=request_id):
        response = await call_next(request)
    response.headers[REQUEST_ID_HEADER] = request_id
    return response


def _validation_message(error: dict) -> str:
    ctx_error = error.get("ctx", {}).get("error")
    if isinstance(ctx_error, ValueError):
        return str(ctx_error)
    location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
    return f"{location}: {error.get('msg')}" if location else str(error.get("msg"))


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report every failed validation rule of a request as a 400."""
    errors = [_validation_message(error) for error in exc.errors()]
    logger.info(f"Rejected {request.method} {request.url.path}: {errors}")
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"errors": errors})


app.include_router(households_router)
app.include_router(pantries_router)
app.include_router(ingredients_router)
app.include_router(recipes_router)
app.include_router(meal_plans_router)
app.include_router(shopping_lists_router)


@app.get("/health")
async def health_check() -> dict:
    """Basic health check endpoint."""
    return {"status": "ok", "service": "mealplanner-api"}


@app.get("/")
async def root() -> dict:
    """Root endpoint with API information."""
    return {
        "name": "Mealplanner API",
        "version": "0.1.0",
        "docs": "/docs",
        "health": "/health",
    }
