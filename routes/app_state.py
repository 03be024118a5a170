"""Accessors for the shared collaborators attached to `app.state` at startup."""

from fastapi import Request

from dal.analysis_dal import AnalysisDAL
from services.genai.retrying_invoker import RetryingInvoker
from utils.errors import StoreError
from utils.settings import Settings


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_analysis_dal(request: Request) -> AnalysisDAL:
    """Return a DAL over the shared database, or fail if the store never came up."""
    db_initializer = getattr(request.app.state, "db_initializer", None)
    if db_initializer is None:
        raise StoreError("Database not initialized")
    return AnalysisDAL(db_initializer)


def get_invoker(request: Request) -> RetryingInvoker:
    invoker = getattr(request.app.state, "invoker", None)
    if invoker is None:
        raise RuntimeError("Model invoker not initialized")
    return invoker
