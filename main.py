from relay.common.config import AppSettings, load_proxy_config
from relay.common.log import configure_logging
from relay.generic_proxy import ProxyHandler
from fastapi.responses import ORJSONResponse
from brotli_asgi import BrotliMiddleware
from relay.common import registry
from relay import generic_proxy
from fastapi import FastAPI

settings = AppSettings()
configure_logging(settings.log_level, settings.log_json)

app = FastAPI(title="Relay", version="0.1.0",
              license_info={"name": "MIT License", "url": "https://mit-license.org/"},
              openapi_tags=[
                  {"name": "namespace", "description": "Registered namespaces and their **route metadata**."},
                  {"name": "generic_proxy", "description": "Relay arbitrary http/https resources, "
                                                           "**bounded by a timeout and a size cap**."},
              ],
              default_response_class=ORJSONResponse)
app.add_middleware(BrotliMiddleware, quality=5, minimum_size=256, excluded_handlers=generic_proxy.COMPRESSION_EXCLUDED)

app.include_router(registry.router)
generic_proxy.register(app, ProxyHandler(load_proxy_config(shared=settings)))
