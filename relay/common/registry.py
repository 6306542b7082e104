from fastapi import APIRouter, FastAPI, HTTPException, Path
from fastapi.responses import ORJSONResponse
from starlette.requests import Request
from .types import Namespace, NamespaceInfo, Route
import structlog

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api", tags=["namespace"], default_response_class=ORJSONResponse)


def get_namespaces(app: FastAPI) -> dict[str, NamespaceInfo]:
    if not hasattr(app.state, "namespaces"):
        app.state.namespaces = {}
    return app.state.namespaces


def register_namespace(app: FastAPI, key: str, namespace: Namespace, routes: list[Route], namespace_router: APIRouter):
    """mount a namespace's router under /{key} and record its metadata"""

    namespaces = get_namespaces(app)
    if key in namespaces:
        raise ValueError(f"namespace {key!r} is already registered")
    namespaces[key] = NamespaceInfo(key=key, routes=routes, **namespace.model_dump())
    app.include_router(namespace_router, prefix=f"/{key}")
    logger.info("namespace_registered", key=key, routes=[route.path for route in routes])


@router.get("/namespace", response_model=list[NamespaceInfo])
async def list_namespaces(request: Request):
    return list(get_namespaces(request.app).values())


@router.get("/namespace/{key}", response_model=NamespaceInfo, responses={404: {"description": "Namespace not found"}})
async def get_namespace(request: Request, key: str = Path(description="Mount prefix, e.g. generic_proxy")):
    try:
        return get_namespaces(request.app)[key]
    except KeyError:
        raise HTTPException(404, "namespace not found")


__all__ = ["router", "register_namespace", "get_namespaces"]
