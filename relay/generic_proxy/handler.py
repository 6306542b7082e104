from .errors import ProxyError, InvalidMethod, MissingParameter, MalformedURL, FetchTimeout, FetchFailure, \
    OversizedResponse
from ..common.config import ProxyConfig
from starlette.responses import Response
from urllib.parse import unquote, urlsplit
from httpx import AsyncClient
import structlog
import asyncio
import httpx
import re

logger = structlog.get_logger(__name__)

ALLOWED_HEADERS = ("content-type", "content-length", "cache-control", "etag", "last-modified", "content-disposition")
ALLOWED_SCHEMES = ("http", "https")

broken_escape_reg = re.compile(r"%(?![0-9A-Fa-f]{2})")
forbidden_host_reg = re.compile(r"[\s#%/<>?@\\^|\[\]]")


def strict_unquote(encoded: str) -> str:
    # unquote leaves broken escapes in place, a strict decoder must reject them
    if broken_escape_reg.search(encoded):
        raise ValueError(f"broken percent escape in {encoded!r}")
    return unquote(encoded, errors="strict")


def decode_path_param(raw: str) -> str:
    """router-level decode of a raw path segment, kept raw when it does not decode"""

    try:
        return strict_unquote(raw)
    except ValueError:
        return raw


def decode_target_url(encoded: str | None) -> str:
    """percent-decode the path parameter and require an absolute http(s) url"""

    if not encoded:
        raise MissingParameter()

    try:
        target = strict_unquote(encoded)
        parsed = httpx.URL(target)
        urlsplit(target).port
    except (ValueError, httpx.InvalidURL):
        raise MalformedURL() from None

    if parsed.scheme.lower() not in ALLOWED_SCHEMES or not parsed.host or forbidden_host_reg.search(parsed.host):
        raise MalformedURL()
    return target


def filter_headers(headers: httpx.Headers) -> dict[str, str]:
    return {name: headers[name] for name in ALLOWED_HEADERS if name in headers}


class ProxyHandler:
    """fetch a caller-supplied url and relay it, bounded by a deadline and a size cap

    Every target host is reachable, including loopback and private ranges.
    Deployments that must not act as an open relay need a network-level restriction.
    """

    def __init__(self, config: ProxyConfig | None = None):
        self.config = config or ProxyConfig()
        self.headers = {"user-agent": self.config.user_agent, "accept": "*/*"}

    async def handle(self, method: str | None, encoded_url: str | None) -> Response:
        if (method or "").upper() != "GET":
            logger.debug("proxy_rejected", reason="method", method=method)
            raise InvalidMethod()

        try:
            target = decode_target_url(encoded_url)
        except ProxyError as err:
            logger.debug("proxy_rejected", reason=type(err).__name__)
            raise

        host = httpx.URL(target).host
        try:
            status, headers, body = await asyncio.wait_for(self.fetch(target), self.config.timeout)
        except ProxyError:
            raise
        except (asyncio.TimeoutError, httpx.TimeoutException):
            logger.warning("proxy_timeout", host=host, timeout_ms=self.config.timeout_ms)
            raise FetchTimeout() from None
        except Exception as err:
            logger.warning("proxy_fetch_failed", host=host, error=type(err).__name__)
            raise FetchFailure() from err

        logger.info("proxy_relayed", host=host, status=status, size=len(body))
        return Response(body, status, headers)

    async def fetch(self, url: str) -> tuple[int, dict[str, str], bytes]:
        limit = self.config.max_response_size

        async with AsyncClient(http2=True, follow_redirects=True, timeout=self.config.timeout) as client:
            async with client.stream("GET", url, headers=self.headers) as response:
                headers = filter_headers(response.headers)
                body = bytearray()
                async for chunk in response.aiter_bytes():
                    body += chunk
                    if len(body) > limit:
                        logger.warning("proxy_oversized", host=response.url.host, limit=limit)
                        raise OversizedResponse()

        # the client decodes content-encoding, so the origin length may not match
        if "content-length" in headers:
            headers["content-length"] = str(len(body))
        return response.status_code, headers, bytes(body)


__all__ = ["ProxyHandler", "decode_target_url", "decode_path_param", "strict_unquote", "filter_headers", "ALLOWED_HEADERS"]
