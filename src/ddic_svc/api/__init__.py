"""HTTP API - FastAPI routers over the data dictionary."""

from . import analysis_routes, catalog_routes, patient_routes

__all__ = ["analysis_routes", "catalog_routes", "patient_routes"]
