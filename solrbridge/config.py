import logging
import os
import sys
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, model_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource
from typing_extensions import Self

from solrbridge.domain.index.model.definition import FacetField, IndexDefinition


# =============================================================================
# Index Configuration
# =============================================================================


class IndexConfig(BaseModel):
    """Configuration for one Solr core."""

    name: str  # Core name, also used in the search API
    enabled: bool = True
    classes: list[str] = []
    fulltext_fields: list[str] = []
    sort_fields: list[str] = []
    filter_fields: list[str] = []
    facet_fields: list[FacetField] = []
    boosted_fields: dict[str, float] = {}

    def to_definition(self) -> IndexDefinition:
        return IndexDefinition.model_validate(self.model_dump(exclude={"enabled"}))


class IndexingConfig(BaseModel):
    """Change-hook behaviour (nested in Config, uses env_nested_delimiter)."""

    enabled: bool = True  # False stops hooks pushing writes, e.g. during a bulk rebuild


# =============================================================================
# Solr Configuration
# =============================================================================


class SolrConfig(BaseModel):
    """Solr endpoint (nested in Config, uses env_nested_delimiter)."""

    scheme: str = "http"
    host: str = "localhost"
    port: int = 8983
    path: str = "/solr"
    username: str | None = None
    password: str | None = None
    timeout: float = 10.0

    @property
    def base_url(self) -> str:
        return f"{self.scheme}://{self.host}:{self.port}{self.path.rstrip('/')}"

    @property
    def auth(self) -> tuple[str, str] | None:
        if self.username and self.password:
            return (self.username, self.password)
        return None


# =============================================================================
# Application Configuration
# =============================================================================


class YamlConfigSettingsSource(PydanticBaseSettingsSource):
    """Load settings from YAML file specified by SOLRBRIDGE_CONFIG_FILE env var."""

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        yaml_data = self._load_yaml_config()
        return yaml_data.get(field_name), field_name, False

    def __call__(self) -> dict[str, Any]:
        return self._load_yaml_config()

    def _load_yaml_config(self) -> dict[str, Any]:
        config_file = os.environ.get("SOLRBRIDGE_CONFIG_FILE")
        if config_file:
            path = Path(config_file)
            if path.exists():
                return yaml.safe_load(path.read_text()) or {}
        return {}


class Server(BaseModel):
    name: str = "solrbridge"
    version: str = "0.1.0"
    description: str = "Solr index synchronization and search"


class DatabaseConfig(BaseModel):
    """Database holding dirty records.

    An empty url derives a SQLite file under SOLRBRIDGE_DATA_DIR.
    """

    url: str = ""
    echo: bool = False
    auto_migrate: bool = True


class LoggingConfig(BaseModel):
    level: str = "INFO"
    format: str = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"
    date_format: str = "%Y-%m-%d %H:%M:%S"

    @property
    def file(self) -> str | None:
        """Get log file path from SOLRBRIDGE_LOG_FILE env var."""
        return os.environ.get("SOLRBRIDGE_LOG_FILE")


class Config(BaseSettings):
    server: Server = Server()
    database: DatabaseConfig = DatabaseConfig()
    logging: LoggingConfig = LoggingConfig()
    solr: SolrConfig = SolrConfig()
    indexing: IndexingConfig = IndexingConfig()
    indexes: list[IndexConfig] = []
    hierarchy: dict[str, str | None] = Field(default_factory=dict)  # class -> parent class

    model_config = {
        "env_prefix": "SOLRBRIDGE_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_nested_delimiter": "__",  # Allows SOLRBRIDGE_SOLR__HOST override
    }

    @model_validator(mode="after")
    def derive_database_url(self) -> Self:
        if not self.database.url:
            data_dir = Path(os.environ.get("SOLRBRIDGE_DATA_DIR", "~/.solrbridge")).expanduser()
            self.database = DatabaseConfig(
                url=f"sqlite+aiosqlite:///{data_dir / 'solrbridge.db'}",
                echo=self.database.echo,
                auto_migrate=self.database.auto_migrate,
            )
        return self

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Priority: init, env, .env, YAML file, file secrets."""
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            YamlConfigSettingsSource(settings_cls),
            file_secret_settings,
        )


def configure_logging(config: LoggingConfig) -> None:
    """Configure Python logging based on config.

    Should be called early in application startup.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(config.level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    formatter = logging.Formatter(config.format, datefmt=config.date_format)

    handler: logging.Handler
    if config.file:
        log_path = Path(config.file).expanduser()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(log_path)
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(config.level)
    handler.setFormatter(formatter)
    root_logger.addHandler(handler)

    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

    logging.debug("Logging configured: level=%s, file=%s", config.level, config.file)
