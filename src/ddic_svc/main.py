"""FastAPI application - Data Dictionary Service.

Serves a three-layer data dictionary (domains and data elements, tables
and structures, views, search helps and lock objects) together with
DDL generation, where-used analysis and consistency validation.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from . import __version__
from .api import analysis_routes, catalog_routes, patient_routes
from .config import Config, load_config
from .ddl.generator import DdlGenerator
from .errors import DuplicateNameError, InvalidArgumentError
from .patient import schema as patient_schema
from .patient.registry import PatientRegistry
from .persistence.repository import DictionaryRepository
from .registry.dictionary import DataDictionary

logger = logging.getLogger(__name__)


def build_dictionary(config: Config, repository: DictionaryRepository) -> DataDictionary:
    """
    Create the dictionary served by the app.

    Loads the snapshot when configured and present. Otherwise starts empty,
    optionally with the sample patient schema.
    """
    if config.storage.load_on_startup and repository.exists():
        return repository.load()

    dictionary = DataDictionary()
    if config.bootstrap.patient_schema:
        patient_schema.initialize(dictionary)
    return dictionary


def create_app(config: Config | None = None) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        config: Service configuration (loaded from DDIC_CONFIG if omitted)
    """
    config = config or load_config()
    repository = DictionaryRepository(config.storage.snapshot_path)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan - startup and shutdown."""
        logger.info("Starting data dictionary service...")

        dictionary = build_dictionary(config, repository)
        catalog_routes.configure(dictionary, repository)
        analysis_routes.configure(dictionary, DdlGenerator())
        patient_routes.configure(dictionary, PatientRegistry())
        app.state.dictionary = dictionary

        logger.info(f"Data dictionary service started ({dictionary.count()['total']} objects)")

        yield

        logger.info("Shutting down data dictionary service...")
        if config.storage.save_on_shutdown:
            repository.save(dictionary)
        logger.info("Data dictionary service stopped")

    app = FastAPI(
        title="Data Dictionary Service",
        description="Three-layer data dictionary with DDL generation and where-used analysis.",
        version=__version__,
        lifespan=lifespan,
    )

    @app.exception_handler(InvalidArgumentError)
    async def invalid_argument_handler(request: Request, exc: InvalidArgumentError):
        return JSONResponse(
            status_code=400,
            content={"error": "Invalid request", "detail": str(exc)},
        )

    @app.exception_handler(DuplicateNameError)
    async def duplicate_name_handler(request: Request, exc: DuplicateNameError):
        return JSONResponse(
            status_code=409,
            content={"error": "Already exists", "detail": str(exc)},
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=400,
            content={"error": "Invalid request", "detail": str(exc.errors())},
        )

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        dictionary = getattr(app.state, "dictionary", None)
        return {
            "status": "healthy" if dictionary is not None else "starting",
            "objects": dictionary.count()["total"] if dictionary is not None else 0,
        }

    app.include_router(catalog_routes.router)
    app.include_router(analysis_routes.router)
    app.include_router(patient_routes.router)

    return app


def run():
    """Run the service with uvicorn."""
    import uvicorn

    config = load_config()
    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    uvicorn.run(
        "ddic_svc.main:create_app",
        factory=True,
        host=config.server.host,
        port=config.server.port,
        reload=config.server.reload,
    )


if __name__ == "__main__":
    run()
