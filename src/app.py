"""
Employee Records API Server
CRUD over the employees table, with schema bootstrap on startup.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config.settings import ALLOWED_ORIGINS, LOG_LEVEL
from database.connection import RecordStore
from database.bootstrap import bootstrap_database
from services.employees_service import EmployeesService
from api.routes import health, employees
from utils.error_handling import setup_error_handling

# Configure logging
logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)


async def open_store(store: RecordStore) -> bool:
    """Connect and bootstrap the schema. Failures leave the app running degraded."""
    if not store.is_connected:
        try:
            await store.connect()
        except Exception as e:
            logger.error(f"Error connecting to database: {e}")
            return False

    if not await bootstrap_database(store):
        logger.warning("Database bootstrap incomplete - requests may fail until the schema exists")
        return False

    return True


def create_app(store: Optional[RecordStore] = None) -> FastAPI:
    """
    Build the FastAPI application

    Args:
        store: Record store to serve from. A store for the configured
            database is created when omitted.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager - traffic is accepted only after bootstrap has run"""
        record_store = store or RecordStore()
        app.state.record_store = record_store
        app.state.database_ready = await open_store(record_store)
        app.state.employees_service = EmployeesService(record_store)
        yield
        await record_store.close()

    app = FastAPI(
        title="Employee Management System API",
        description="CRUD API for employee records",
        version="1.0.0",
        lifespan=lifespan
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_credentials="*" not in ALLOWED_ORIGINS,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    setup_error_handling(app)

    app.include_router(health.router, tags=["Health"])
    app.include_router(employees.router, prefix="/api/employees", tags=["Employees"])

    return app


# FastAPI app instance for uvicorn
app = create_app()
