"""
Service configuration.

Values come from environment variables (a ``.env`` file next to the
working directory is loaded first) and are handed to the application
factory explicitly.
"""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://www.awesometarkov.com"
DEFAULT_PORT = 8082

_TRUE_VALUES = {"1", "true", "yes", "on"}


class OGPalette(BaseModel):
    """Colours used by the social preview images, as ``#rrggbb``."""

    bg_start: str = "#0a0a0a"
    bg_end: str = "#1a1a1a"
    accent: str = "#c49a3c"
    text_primary: str = "#e5e5e5"
    text_muted: str = "#737373"
    card_bg: str = "#1e1e1e"
    military: str = "#4a5d23"

    @field_validator("*")
    @classmethod
    def check_hex(cls, value: str) -> str:
        if not re.fullmatch(r'#[0-9a-fA-F]{6}', value):
            raise ValueError(f"Colour must look like #rrggbb, got {value!r}.")
        return value


class Settings(BaseModel):
    content_dir: Path = Field(Path("resources"), description="Root of resource documents.")
    base_url: str = Field(DEFAULT_BASE_URL, description="Canonical site URL.")
    site_name: str = "Awesome Tarkov"
    site_tagline: str = "Escape From Tarkov Resources"
    host: str = "0.0.0.0"
    port: int = Field(DEFAULT_PORT, ge=1, le=65535)
    cors_origins: List[str] = Field(default_factory=lambda: ["*"])
    ping_search_engines: bool = False
    og_font_path: Optional[Path] = Field(None, description="TrueType font for preview images.")
    og_palette: OGPalette = Field(default_factory=OGPalette)

    @field_validator("base_url")
    @classmethod
    def clean_base_url(cls, value: str) -> str:
        cleaned = value.strip().rstrip("/")
        if not cleaned:
            raise ValueError("Base URL cannot be empty.")
        return cleaned

    @property
    def sitemap_url(self) -> str:
        return f"{self.base_url}/sitemap.xml"

    @classmethod
    def from_env(cls, env_file: Path = Path(".env")) -> "Settings":
        """Read settings from the environment, loading ``env_file`` if present."""
        if env_file.exists():
            load_dotenv(env_file)
            logger.info(f"Loaded environment from {env_file}")

        values = {}
        if "CONTENT_DIR" in os.environ:
            values["content_dir"] = Path(os.environ["CONTENT_DIR"])
        if "BASE_URL" in os.environ:
            values["base_url"] = os.environ["BASE_URL"]
        if "SITE_NAME" in os.environ:
            values["site_name"] = os.environ["SITE_NAME"]
        if "SITE_TAGLINE" in os.environ:
            values["site_tagline"] = os.environ["SITE_TAGLINE"]
        if os.environ.get("OG_FONT_PATH", "").strip():
            values["og_font_path"] = Path(os.environ["OG_FONT_PATH"].strip())
        if "HOST" in os.environ:
            values["host"] = os.environ["HOST"]
        if "PORT" in os.environ:
            values["port"] = int(os.environ["PORT"])

        # For production, set CORS_ORIGINS="https://yourdomain.com,https://app.yourdomain.com"
        cors_origins_str = os.environ.get("CORS_ORIGINS", "*")
        if cors_origins_str.strip() == "*":
            values["cors_origins"] = ["*"]
        else:
            values["cors_origins"] = [
                origin.strip() for origin in cors_origins_str.split(",") if origin.strip()
            ]

        values["ping_search_engines"] = (
            os.environ.get("PING_SEARCH_ENGINES", "").strip().lower() in _TRUE_VALUES
        )
        return cls(**values)
