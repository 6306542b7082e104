from ..common.types import Namespace, Route, RouteFeatures, ViewType
from ..common.registry import register_namespace
from .errors import ProxyError, render_proxy_error
from .handler import ProxyHandler, decode_target_url, decode_path_param, filter_headers, ALLOWED_HEADERS
from ..common.config import load_proxy_config
from fastapi import APIRouter, FastAPI, Path
from starlette.responses import Response
from starlette.requests import Request

KEY = "generic_proxy"

# every method reaches the handler so that it answers 405 itself
METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]

# relayed bodies keep the origin encoding, compression middleware skips them
COMPRESSION_EXCLUDED = [rf"^/{KEY}/"]

namespace = Namespace(
    name="Generic Proxy",
    description="A utility route that proxies arbitrary HTTP/HTTPS resources. "
                "Useful for accessing files from remote servers through RSSHub.",
    categories=["other"],
    lang="en",
)

route = Route(
    path="/:url{.+}",
    name="Generic File Proxy",
    description="Proxies arbitrary http/https resources. The target URL must be URL-encoded.",
    categories=["other"],
    example=f"/{KEY}/https%3A%2F%2Fremote-server.com%2Frss.xml",
    parameters={"url": "URL-encoded absolute http/https URL, e.g. `https%3A%2F%2Fremote-server.com%2Frss.xml`"},
    maintainers=["synchrone"],
    view=ViewType.Notifications,
    features=RouteFeatures(),
)


def raw_url_param(request: Request, url: str) -> str:
    """the url segment as the client sent it, decoded once without starlette's lenient fallback"""

    raw_path = request.scope.get("raw_path")
    if raw_path is None:
        return url
    raw = raw_path.split(b"?", 1)[0].decode("latin-1")
    _, found, segment = raw.partition(f"/{KEY}/")
    return decode_path_param(segment) if found else url


def create_router(handler: ProxyHandler) -> APIRouter:
    router = APIRouter(tags=[KEY])

    @router.api_route("/{url:path}", methods=METHODS, response_class=Response, summary=route.name,
                      description=route.description,
                      responses={400: {"description": "URL parameter is required / Invalid URL format"},
                                 405: {"description": "Method Not Allowed"}, 408: {"description": "Request timeout"},
                                 413: {"description": "Response too large"},
                                 500: {"description": "Internal server error while fetching the file"}})
    async def proxy(request: Request, url: str = Path(description=route.parameters["url"])):
        return await handler.handle(request.method, raw_url_param(request, url))

    return router


def register(app: FastAPI, handler: ProxyHandler = None):
    handler = handler or ProxyHandler(load_proxy_config())
    app.add_exception_handler(ProxyError, render_proxy_error)
    register_namespace(app, KEY, namespace, [route], create_router(handler))
    return handler


__all__ = ["namespace", "route", "register", "create_router", "raw_url_param", "COMPRESSION_EXCLUDED", "ProxyHandler",
           "decode_target_url", "decode_path_param", "filter_headers", "ALLOWED_HEADERS"]
