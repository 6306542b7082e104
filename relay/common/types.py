from pydantic import BaseModel, ConfigDict, Field
from enum import IntEnum


class ViewType(IntEnum):
    Articles = 0
    SocialMedia = 1
    Pictures = 2
    Videos = 3
    Audio = 4
    Notifications = 5


class Namespace(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = Field(title="Namespace name")
    description: str = Field("", title="Description")
    categories: list[str] = Field(default_factory=list, title="Categories")
    lang: str = Field("en", title="Language")


class RouteFeatures(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    require_config: list[str] = Field(default_factory=list, alias="requireConfig")
    require_puppeteer: bool = Field(False, alias="requirePuppeteer")
    anti_crawler: bool = Field(False, alias="antiCrawler")
    support_bt: bool = Field(False, alias="supportBT")
    support_podcast: bool = Field(False, alias="supportPodcast")
    support_scihub: bool = Field(False, alias="supportScihub")


class Route(BaseModel):
    """declarative registration data, the router never reads it"""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    path: str = Field(title="Route path")
    name: str = Field(title="Route name")
    description: str = Field("", title="Description")
    categories: list[str] = Field(default_factory=list)
    example: str = Field(title="Example path")
    parameters: dict[str, str] = Field(default_factory=dict, description="Parameter name to description")
    maintainers: list[str] = Field(default_factory=list)
    view: ViewType | None = None
    features: RouteFeatures = Field(default_factory=RouteFeatures)


class NamespaceInfo(Namespace):
    key: str = Field(title="Mount prefix")
    routes: list[Route] = Field(default_factory=list)


__all__ = ["ViewType", "Namespace", "RouteFeatures", "Route", "NamespaceInfo"]
