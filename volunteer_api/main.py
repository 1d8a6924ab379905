import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError

from volunteer_api.config import settings
from volunteer_api.db import VolunteerDb
from volunteer_api.exceptions import VolunteerApiError
from volunteer_api.routers import feedbacks, health, requests, volunteer_views, volunteers

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(VolunteerApiError)
    async def volunteer_api_error_handler(request: Request, exc: VolunteerApiError):
        return _error(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return _error(400, "Request body must be a JSON object")

    @app.exception_handler(PyMongoError)
    async def database_error_handler(request: Request, exc: PyMongoError):
        logger.error("Database error on %s %s", request.method, request.url.path, exc_info=exc)
        return _error(500, "Server error")

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
        return _error(500, "Server error")


def create_app(db: VolunteerDb | None = None) -> FastAPI:
    """Build the API; a caller-supplied db is used as is and left open on shutdown."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owned = app.state.db is None
        if owned:
            app.state.db = VolunteerDb.from_settings(settings)
        try:
            yield
        finally:
            if owned:
                app.state.db.close()
                app.state.db = None

    app = FastAPI(title="Volunteer Marketplace API", lifespan=lifespan)
    app.state.db = db

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_error_handlers(app)

    # routers
    app.include_router(health.router)           # GET /
    app.include_router(volunteers.router)       # /volunteers/*
    app.include_router(requests.router)         # /requests/*, /myRequests
    app.include_router(feedbacks.router)        # /feedbacks/*
    app.include_router(volunteer_views.router)  # /notifications, /history
    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
