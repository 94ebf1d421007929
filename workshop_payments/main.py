"""
Workshop Payments — FastAPI app factory with startup snapshot restore.
"""
from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from workshop_payments.api.dependencies import set_workspace
from workshop_payments.api.router_export import router as export_router
from workshop_payments.api.router_meta import router as meta_router
from workshop_payments.api.router_sheets import router as sheets_router
from workshop_payments.api.router_upload import router as upload_router
from workshop_payments.config import data_folder
from workshop_payments.data.snapshot import SnapshotStore
from workshop_payments.logging_setup import configure_logging, get_logger
from workshop_payments.workspace import Workspace

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the workspace and restore the last saved session."""
    configure_logging()
    folder = data_folder()
    folder.mkdir(parents=True, exist_ok=True)

    workspace = Workspace(SnapshotStore(folder))
    if workspace.restore():
        logger.info(
            "Workshop Payments ready — %d sheet(s), %d row(s) restored",
            len(workspace.store.sheet_names()), workspace.store.row_count(),
        )
    else:
        logger.info("Workshop Payments ready — no saved data. Upload a workbook to begin.")
    set_workspace(workspace)
    yield
    set_workspace(None)


def create_app() -> FastAPI:
    app = FastAPI(
        title="Workshop Payments API",
        description="Load, edit and export workshop payment sheets",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(meta_router)
    app.include_router(sheets_router)
    app.include_router(upload_router)
    app.include_router(export_router)

    return app


app = create_app()
