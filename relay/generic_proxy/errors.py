from starlette.exceptions import HTTPException
from starlette.responses import PlainTextResponse
from starlette.requests import Request


class ProxyError(HTTPException):
    status_code = 500
    message = "Internal server error"

    def __init__(self, headers: dict[str, str] | None = None):
        super().__init__(self.status_code, self.message, headers)


class InvalidMethod(ProxyError):
    status_code = 405
    message = "Method Not Allowed"

    def __init__(self):
        super().__init__({"Allow": "GET"})


class MissingParameter(ProxyError):
    status_code = 400
    message = "URL parameter is required"


class MalformedURL(ProxyError):
    status_code = 400
    message = "Invalid URL format"


class FetchTimeout(ProxyError):
    status_code = 408
    message = "Request timeout"


class FetchFailure(ProxyError):
    status_code = 500
    message = "Internal server error while fetching the file"


class OversizedResponse(ProxyError):
    status_code = 413
    message = "Response too large"


async def render_proxy_error(request: Request, exc: ProxyError):
    return PlainTextResponse(exc.detail, exc.status_code, exc.headers)


__all__ = ["ProxyError", "InvalidMethod", "MissingParameter", "MalformedURL",
           "FetchTimeout", "FetchFailure", "OversizedResponse", "render_proxy_error"]
