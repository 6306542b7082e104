from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import BaseModel, ConfigDict, Field

DEFAULT_TIMEOUT_MS = 10_000
DEFAULT_MAX_RESPONSE_SIZE = 10 * 1024 * 1024
DEFAULT_UA = "RSSHub (Generic Proxy)"


class AppSettings(BaseSettings):
    """app-wide settings shared by every namespace"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    request_timeout: int | None = Field(None, gt=0, description="outbound request timeout (ms)")
    ua: str | None = Field(None, description="outbound user-agent")
    log_level: str = "INFO"
    log_json: bool = False


class GenericProxySettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="GENERIC_PROXY_", env_file=".env", env_file_encoding="utf-8",
                                      extra="ignore")

    timeout: int | None = Field(None, gt=0)
    max_size: int | None = Field(None, gt=0)
    ua: str | None = None


class ProxyConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    timeout_ms: int = Field(DEFAULT_TIMEOUT_MS, gt=0)
    max_response_size: int = Field(DEFAULT_MAX_RESPONSE_SIZE, gt=0)
    user_agent: str = DEFAULT_UA

    @property
    def timeout(self) -> float:
        """timeout in seconds, as asyncio and httpx take it"""
        return self.timeout_ms / 1000


def first_set(*values):
    return next((value for value in values if value is not None), None)


def load_proxy_config(env: GenericProxySettings = None, shared: AppSettings = None) -> ProxyConfig:
    """resolve once at startup: route env > shared config > defaults"""

    env = env or GenericProxySettings()
    shared = shared or AppSettings()
    return ProxyConfig(
        timeout_ms=first_set(env.timeout, shared.request_timeout, DEFAULT_TIMEOUT_MS),
        max_response_size=first_set(env.max_size, DEFAULT_MAX_RESPONSE_SIZE),
        user_agent=first_set(env.ua, shared.ua, DEFAULT_UA),
    )


__all__ = ["AppSettings", "GenericProxySettings", "ProxyConfig", "load_proxy_config",
           "DEFAULT_TIMEOUT_MS", "DEFAULT_MAX_RESPONSE_SIZE", "DEFAULT_UA"]
