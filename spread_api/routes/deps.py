"""Request-scoped dependencies for routers."""

from fastapi import Request

from spread_api.services.context import ServiceContext


def get_context(request: Request) -> ServiceContext:
    """ServiceContext built by the application lifespan."""
    ctx = getattr(request.app.state, "context", None)
    if ctx is None:
        raise RuntimeError("Service context not initialized (lifespan did not run)")
    return ctx
