"""Tests for service settings."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from server.config import DEFAULT_BASE_URL, OGPalette, Settings

ENV_VARS = [
    "CONTENT_DIR", "BASE_URL", "SITE_NAME", "SITE_TAGLINE", "HOST", "PORT", "CORS_ORIGINS",
    "PING_SEARCH_ENGINES", "OG_FONT_PATH",
]


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    # setenv first so values loaded from .env files are removed on teardown
    for name in ENV_VARS:
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)
    return monkeypatch


class TestSettings:
    """Tests for Settings."""

    def test_defaults(self, clean_env):
        settings = Settings.from_env()
        assert settings.content_dir == Path("resources")
        assert settings.base_url == DEFAULT_BASE_URL
        assert settings.port == 8082
        assert settings.cors_origins == ["*"]
        assert settings.ping_search_engines is False

    def test_from_environment(self, clean_env):
        clean_env.setenv("CONTENT_DIR", "/srv/content")
        clean_env.setenv("BASE_URL", "https://example.test/")
        clean_env.setenv("PORT", "9000")
        clean_env.setenv("CORS_ORIGINS", "https://a.test, https://b.test,")
        clean_env.setenv("PING_SEARCH_ENGINES", "yes")

        settings = Settings.from_env()

        assert settings.content_dir == Path("/srv/content")
        assert settings.base_url == "https://example.test"
        assert settings.sitemap_url == "https://example.test/sitemap.xml"
        assert settings.port == 9000
        assert settings.cors_origins == ["https://a.test", "https://b.test"]
        assert settings.ping_search_engines is True

    def test_dotenv_file(self, clean_env, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("SITE_NAME=Test Catalog\n", encoding="utf-8")
        settings = Settings.from_env(env_file)
        assert settings.site_name == "Test Catalog"

    def test_invalid_port(self):
        with pytest.raises(ValidationError):
            Settings(port=0)

    def test_empty_base_url(self):
        with pytest.raises(ValidationError):
            Settings(base_url=" / ")

    def test_preview_image_settings(self, clean_env):
        clean_env.setenv("OG_FONT_PATH", "/usr/share/fonts/Arial.ttf")
        clean_env.setenv("SITE_TAGLINE", "Community Tools")

        settings = Settings.from_env()

        assert settings.og_font_path == Path("/usr/share/fonts/Arial.ttf")
        assert settings.site_tagline == "Community Tools"
        assert settings.og_palette.accent == "#c49a3c"

    def test_font_path_defaults_to_none(self, clean_env):
        assert Settings.from_env().og_font_path is None

    def test_invalid_palette_colour(self):
        with pytest.raises(ValidationError):
            Settings(og_palette=OGPalette(accent="gold"))
