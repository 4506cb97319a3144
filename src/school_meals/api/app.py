"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from school_meals.api.inventory import router as inventory_router
from school_meals.api.menus import router as menus_router
from school_meals.api.reports import router as reports_router
from school_meals.api.schedules import router as schedules_router
from school_meals.app_logging import configure_logging
from school_meals.containers import AppContainer
from school_meals.domain.errors import (
    EmptyInventoryError,
    InvalidReportPeriodError,
    MenuGenerationError,
    NotFoundError,
    ScheduleConflictError,
    StateStoreError,
    UnknownReportError,
)


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(inventory_router)
    app.include_router(schedules_router)
    app.include_router(menus_router)
    app.include_router(reports_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.exception_handler(NotFoundError)
    async def not_found(request: Request, exc: NotFoundError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)}
        )

    @app.exception_handler(ScheduleConflictError)
    async def schedule_conflict(
        request: Request, exc: ScheduleConflictError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_409_CONFLICT,
            content={
                "detail": str(exc),
                "conflicting_id": str(exc.conflicting.id),
                "date": exc.conflicting.date.isoformat(),
                "meal_type": exc.conflicting.meal_type.value,
            },
        )

    @app.exception_handler(MenuGenerationError)
    async def menu_failed(request: Request, exc: MenuGenerationError) -> JSONResponse:
        if isinstance(exc, EmptyInventoryError):
            return JSONResponse(
                status_code=422,
                content={"detail": str(exc)},
            )
        logger.exception("Menu generation failed", exc_info=exc)
        return JSONResponse(
            status_code=status.HTTP_502_BAD_GATEWAY,
            content={"detail": f"Failed to generate menu: {exc}"},
        )

    @app.exception_handler(InvalidReportPeriodError)
    async def invalid_period(
        request: Request, exc: InvalidReportPeriodError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST, content={"detail": str(exc)}
        )

    @app.exception_handler(UnknownReportError)
    async def unknown_report(request: Request, exc: UnknownReportError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)}
        )

    @app.exception_handler(StateStoreError)
    async def state_store_failed(
        request: Request, exc: StateStoreError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"detail": str(exc)},
        )

    return app
