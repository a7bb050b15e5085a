import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError

from sheetledger import __version__
from sheetledger.api.middleware.error_handler import (
    handle_database_error,
    handle_generic_error,
    handle_ledger_error,
    handle_validation_error,
)
from sheetledger.api.middleware.logging import RequestLoggingMiddleware
from sheetledger.api.routes import router
from sheetledger.config import settings
from sheetledger.context import build_context
from sheetledger.core.exceptions import LedgerError
from sheetledger.core.log import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    setup_logging(settings.log_level, json_logs=settings.log_json, log_file=settings.log_file)
    context = build_context(settings)
    app.state.context = context
    logger.info(f"SheetLedger {__version__} started ({settings.app_env})")
    yield
    # Shutdown
    await context.close()


def create_app() -> FastAPI:
    app = FastAPI(
        title="SheetLedger API",
        description="User accounts and a Google Sheets transaction ledger",
        version=__version__,
        debug=settings.debug,
        lifespan=lifespan,
    )

    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register exception handlers (order matters - most specific first)
    app.add_exception_handler(LedgerError, handle_ledger_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(SQLAlchemyError, handle_database_error)
    app.add_exception_handler(Exception, handle_generic_error)

    app.include_router(router)

    return app


app = create_app()
