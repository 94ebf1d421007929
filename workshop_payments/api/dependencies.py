"""
FastAPI dependencies — Workspace singleton and error translation.
"""
from __future__ import annotations

from contextlib import contextmanager

from fastapi import HTTPException

from workshop_payments.errors import DatasetError, RowReferenceError, ValidationError
from workshop_payments.workspace import Workspace

# ---------------------------------------------------------------------------
# Global workspace singleton (set during startup)
# ---------------------------------------------------------------------------
_workspace: Workspace | None = None


def set_workspace(workspace: Workspace | None) -> None:
    global _workspace
    _workspace = workspace


def get_workspace() -> Workspace:
    if _workspace is None:
        raise HTTPException(503, "Server not initialized yet")
    return _workspace


# ---------------------------------------------------------------------------
# Core errors → HTTP status
# ---------------------------------------------------------------------------

@contextmanager
def http_errors():
    """Translate payments errors raised inside the block into HTTPExceptions."""
    try:
        yield
    except (ValidationError, DatasetError) as exc:
        raise HTTPException(400, str(exc)) from exc
    except RowReferenceError as exc:
        raise HTTPException(404, str(exc)) from exc
