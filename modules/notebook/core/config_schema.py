"""
Configuration Schemas.

Pydantic models defining the expected structure of each YAML config file.
Used by AppConfig to validate configuration at load time. If a YAML file
has missing keys, wrong types, or unknown fields, a clear ValidationError
is raised at startup instead of a cryptic KeyError deep in application code.

Each top-level class corresponds to one file in config/settings/:
    ApplicationSchema  → application.yaml
    DatabaseSchema     → database.yaml
    LoggingSchema      → logging.yaml
    FeaturesSchema     → features.yaml
    SecuritySchema     → security.yaml
    SearchSchema       → search.yaml
    AiSchema           → ai.yaml
"""

from pydantic import BaseModel, ConfigDict, Field


class _StrictBase(BaseModel):
    """Base with extra='forbid' so unknown YAML keys are caught immediately."""

    model_config = ConfigDict(extra="forbid")


# =============================================================================
# application.yaml
# =============================================================================


class ServerSchema(_StrictBase):
    host: str
    port: int


class CorsSchema(_StrictBase):
    origins: list[str]


class PaginationSchema(_StrictBase):
    default_limit: int
    max_limit: int


class TimeoutsSchema(_StrictBase):
    database: int
    external_api: int


class ApplicationSchema(_StrictBase):
    name: str
    version: str
    description: str
    environment: str
    debug: bool
    api_prefix: str
    docs_enabled: bool
    server: ServerSchema
    cors: CorsSchema
    pagination: PaginationSchema
    timeouts: TimeoutsSchema


# =============================================================================
# database.yaml
# =============================================================================


class DatabaseSchema(_StrictBase):
    driver: str
    host: str
    port: int
    name: str
    user: str
    pool_size: int
    max_overflow: int
    pool_timeout: int
    pool_recycle: int
    echo: bool


# =============================================================================
# logging.yaml
# =============================================================================


class ConsoleHandlerSchema(_StrictBase):
    enabled: bool


class FileHandlerSchema(_StrictBase):
    enabled: bool
    path: str
    max_bytes: int
    backup_count: int


class HandlersSchema(_StrictBase):
    console: ConsoleHandlerSchema
    file: FileHandlerSchema


class LoggingSchema(_StrictBase):
    level: str
    format: str
    handlers: HandlersSchema


# =============================================================================
# features.yaml
# =============================================================================


class FeaturesSchema(_StrictBase):
    ai_enabled: bool
    api_request_logging: bool


# =============================================================================
# security.yaml
# =============================================================================


class JwtSchema(_StrictBase):
    algorithm: str
    audience: str
    access_token_expire_minutes: int


class SecuritySchema(_StrictBase):
    jwt: JwtSchema


# =============================================================================
# search.yaml
# =============================================================================


class TagsSchema(_StrictBase):
    max_length: int = 20
    max_per_batch: int = 6


class SearchSchema(_StrictBase):
    """
    Search, suggestion and tag limits.

    Defaults mirror the shipped search.yaml so services can be built
    without loading configuration (tests, scripts).
    """

    default_limit: int = 20
    suggestion_limit: int = 10
    popular_tags_limit: int = 5
    completion_limit: int = 5
    completion_note_limit: int = 50
    min_query_length: int = 2
    min_token_length: int = 2
    preview_length: int = 100
    recency_window_days: int = 10
    title_match_score: int = 10
    content_match_score: int = 5
    tags: TagsSchema = Field(default_factory=TagsSchema)


# =============================================================================
# ai.yaml
# =============================================================================


class AiSchema(_StrictBase):
    model: str
    base_url: str
    timeout_seconds: float
    token_limit: int
    summary_token_limit: int
    max_generated_tags: int
