"""Application configuration: settings schema and mdblog.yaml loader"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field


CONFIG_FILE = "mdblog.yaml"
DEFAULT_PRODUCTION_URL = "https://rjleyva-writes.pages.dev"
LEGACY_URL_ENV = "VITE_PRODUCTION_URL"


class Settings(BaseModel):
    app_name:       str = "mdblog"
    app_env:        str = Field(default="development", pattern="^(development|production|test)$")
    content_dir:    str = Field(default="content/blog", description="Root directory of topic/post.md files")
    generated_path: str = Field(default="build/generated_content.json", description="Generated content artifact")
    public_dir:     str = Field(default="public", description="Directory receiving rss.xml and rss-viewer.html")
    production_url: str = Field(default=DEFAULT_PRODUCTION_URL, description="Base URL for feed links")
    site_title:       str = "RJ Leyva's Blog"
    site_description: str = "RJ Leyva's personal blog documenting web development insights through writing."
    stylesheets:    list[str] = Field(
        default_factory=lambda: ["src/styles/tokens.css", "src/styles/themes.css"],
        description="Theme stylesheets inlined verbatim into the feed preview",
    )
    max_rss_items:    int = Field(default=20,  ge=1, description="Max items in rss.xml and its preview")
    words_per_minute: int = Field(default=200, ge=1, description="Reading speed for reading time estimates")
    cache_enabled:    bool = True
    cache_max_size:   int = Field(default=50,   ge=1, description="Max rendered documents kept in memory")
    cache_ttl_development: float = Field(default=300.0,  ge=0, description="Render cache TTL (s) in development")
    cache_ttl_production:  float = Field(default=3600.0, ge=0, description="Render cache TTL (s) in production")
    log_json: bool = False
    verbose:  bool = False

    @property
    def is_production(self) -> bool:
        return self.app_env == "production"

    @property
    def cache_ttl(self) -> float:
        """Short TTL while content is edited, hour-scale once it is deployed."""
        return self.cache_ttl_production if self.is_production else self.cache_ttl_development


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from mdblog.yaml, then MDBLOG_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Invalid {CONFIG_FILE}: expected a mapping, got {type(data).__name__}")

    # Vite-era deployments export the base URL under its old name.
    if val := os.getenv(LEGACY_URL_ENV):
        data["production_url"] = val

    for name, field in Settings.model_fields.items():
        if val := os.getenv(f"MDBLOG_{name.upper()}"):
            if field.annotation == list[str]:
                data[name] = [v.strip() for v in val.split(",") if v.strip()]
            else:
                data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**data)
