"""
Social preview (Open Graph) images for the catalog pages.

Every image is a 1200x630 PNG:
    home      - site title, tagline and three stat boxes
    search    - magnifying glass, title and catalog totals
    category  - category name, resource count and subcategory preview
    resource  - resource name, wrapped description and facet boxes

Rendered bytes are kept in an ImageCache keyed by page. The cache never
evicts; keys are only created for pages that exist in the catalog, so it
holds at most one entry per category and resource plus two.
"""

from __future__ import annotations

import io
import logging
import threading
from typing import Dict, List, Optional, Sequence, Tuple
from urllib.parse import urlparse

from PIL import Image, ImageDraw, ImageFont

from .config import OGPalette, Settings

logger = logging.getLogger(__name__)

WIDTH = 1200
HEIGHT = 630

FONT_HUGE = 72
FONT_LARGE = 48
FONT_MEDIUM = 36
FONT_SMALL = 28
FONT_TINY = 22

NAME_LIMIT = 30
DESCRIPTION_LINES = 3

Color = Tuple[int, int, int]


def hex_to_rgb(value: str) -> Color:
    """Convert a validated ``#rrggbb`` colour to an RGB tuple."""
    value = value.lstrip("#")
    return tuple(int(value[i:i + 2], 16) for i in (0, 2, 4))


def home_key() -> str:
    return "og:home"


def search_key() -> str:
    return "og:search"


def category_key(slug: str) -> str:
    return f"og:category:{slug}"


def resource_key(category_slug: str, resource_slug: str) -> str:
    return f"og:resource:{category_slug}/{resource_slug}"


class ImageCache:
    """Thread-safe map of cache key to PNG bytes."""

    def __init__(self):
        self._lock = threading.Lock()
        # Unbounded: no eviction or TTL, one entry per distinct key
        self._images: Dict[str, bytes] = {}

    def get(self, key: str) -> Optional[bytes]:
        with self._lock:
            return self._images.get(key)

    def set(self, key: str, data: bytes) -> None:
        with self._lock:
            self._images[key] = data

    def __len__(self) -> int:
        with self._lock:
            return len(self._images)


class PreviewGenerator:
    """Renders preview images using the fonts and colours from Settings."""

    def __init__(self, settings: Settings):
        self.font_path = settings.og_font_path
        self.tagline = settings.site_tagline
        self.title = settings.site_name.upper()
        self.branding = _branding(settings.base_url)
        self.palette = _Palette(settings.og_palette)
        self.cache = ImageCache()
        self._fonts: Dict[int, ImageFont.ImageFont] = {}
        self._fonts_lock = threading.Lock()

    def cached(self, key: str, render) -> bytes:
        """Return the cached image for ``key``, rendering it on a miss."""
        data = self.cache.get(key)
        if data is None:
            data = render()
            self.cache.set(key, data)
        return data

    def generate_home(self, total_resources: int, category_count: int) -> bytes:
        canvas = self._new_canvas()
        draw = canvas.draw

        # Faint grid
        for x in range(0, WIDTH, 40):
            draw.line([(x, 0), (x, HEIGHT)], fill=(255, 255, 255, 8), width=1)
        for y in range(0, HEIGHT, 40):
            draw.line([(0, y), (WIDTH, y)], fill=(255, 255, 255, 8), width=1)

        self._text_centered(draw, self.title, 140, self.palette.accent, FONT_HUGE)
        self._text_centered(draw, self.tagline, 220, self.palette.text_primary, FONT_LARGE)

        boxes = [
            (f"{total_resources}+", "Resources"),
            (str(category_count), "Categories"),
            ("Community", "Driven"),
        ]
        self._stat_row(draw, boxes, top=300, box_height=100, border=3, label_size=FONT_SMALL)

        return self._finish(canvas, HEIGHT - 35, FONT_TINY)

    def generate_search(self, total_resources: int, category_count: int) -> bytes:
        canvas = self._new_canvas()
        draw = canvas.draw

        # Magnifying glass
        cx, cy, radius = WIDTH // 2, 130, 60
        draw.ellipse([cx - radius, cy - radius, cx + radius, cy + radius],
                     outline=self.palette.accent, width=8)
        draw.line([(cx + 45, 175), (cx + 85, 215)], fill=self.palette.accent, width=8)

        self._text_centered(draw, "Search Resources", 300, self.palette.accent, FONT_HUGE)
        self._text_centered(draw, "Find maps, ammo charts, trackers, and more", 390,
                            self.palette.text_primary, FONT_LARGE)
        stats = f"{total_resources}+ Resources  •  {category_count} Categories"
        self._text_centered(draw, stats, 470, self.palette.text_muted, FONT_MEDIUM)

        return self._finish(canvas, HEIGHT - 40, FONT_SMALL)

    def generate_category(self, name: str, resource_count: int,
                          subcategories: Sequence[str]) -> bytes:
        canvas = self._new_canvas()
        draw = canvas.draw

        draw.text((60, 30), self.branding, fill=self.palette.text_muted, font=self._font(FONT_SMALL))
        self._text_centered(draw, name, 220, self.palette.accent, FONT_HUGE)
        self._text_centered(draw, f"{resource_count} Resources", 320,
                            self.palette.text_primary, FONT_LARGE)

        if subcategories:
            preview = "  •  ".join(subcategories[:3])
            if len(subcategories) > 3:
                preview += "  •  ..."
            self._text_centered(draw, preview, 420, self.palette.text_muted, FONT_MEDIUM)

        return self._finish(canvas, HEIGHT - 40, FONT_SMALL)

    def generate_resource(self, name: str, description: str, category: str,
                          platform: str, audience: str, price: str) -> bytes:
        canvas = self._new_canvas()
        draw = canvas.draw

        draw.text((60, 30), category, fill=self.palette.text_muted, font=self._font(FONT_SMALL))

        if len(name) > NAME_LIMIT:
            name = name[:NAME_LIMIT - 3] + "..."
        self._text_centered(draw, name, 150, self.palette.accent, FONT_HUGE)

        font = self._font(FONT_SMALL)
        line_height = int(FONT_SMALL * 1.4)
        for number, line in enumerate(self._wrap(draw, description, font, WIDTH - 120)):
            self._text_centered(draw, line, 250 + number * line_height,
                                self.palette.text_primary, FONT_SMALL)

        boxes = [(platform, "Platform"), (audience, "Audience"), (price, "Price")]
        self._stat_row(draw, boxes, top=360, box_height=120, border=4, label_size=FONT_MEDIUM)

        return self._finish(canvas, HEIGHT - 40, FONT_SMALL)

    def _new_canvas(self) -> "_Canvas":
        image = Image.new("RGB", (WIDTH, HEIGHT), self.palette.bg_start)
        draw = ImageDraw.Draw(image, "RGBA")

        # Vertical gradient
        start, end = self.palette.bg_start, self.palette.bg_end
        for y in range(HEIGHT):
            t = y / HEIGHT
            color = tuple(int(a + (b - a) * t) for a, b in zip(start, end))
            draw.line([(0, y), (WIDTH, y)], fill=color)

        # Corner stripes
        for i in range(4):
            offset = i * 15
            draw.line([(0, 30 + offset), (30 + offset, 0)], fill=self.palette.military, width=3)
            draw.line([(WIDTH - 30 - offset, 0), (WIDTH, 30 + offset)],
                      fill=self.palette.military, width=3)

        return _Canvas(image, draw)

    def _finish(self, canvas: "_Canvas", branding_y: int, branding_size: int) -> bytes:
        canvas.draw.rectangle([0, HEIGHT - 6, WIDTH, HEIGHT], fill=self.palette.accent)
        self._text_centered(canvas.draw, self.branding, branding_y,
                            self.palette.text_muted, branding_size)

        buffer = io.BytesIO()
        canvas.image.save(buffer, format="PNG")
        return buffer.getvalue()

    def _stat_row(self, draw: ImageDraw.ImageDraw, boxes: Sequence[Tuple[str, str]],
                  top: int, box_height: int, border: int, label_size: int) -> None:
        box_width, gap = 300, 40
        left = (WIDTH - (3 * box_width + 2 * gap)) // 2

        for value, label in boxes:
            draw.rounded_rectangle(
                [left, top, left + box_width, top + box_height],
                radius=12,
                fill=self.palette.card_bg,
                outline=self.palette.accent,
                width=border,
            )
            center = left + box_width // 2
            self._text_centered(draw, value, top + int(box_height * 0.4),
                                self.palette.text_primary, FONT_MEDIUM, center_x=center)
            self._text_centered(draw, label, top + int(box_height * 0.75),
                                self.palette.text_muted, label_size, center_x=center)
            left += box_width + gap

    def _text_centered(self, draw: ImageDraw.ImageDraw, text: str, center_y: int,
                       color: Color, size: int, center_x: int = WIDTH // 2) -> None:
        font = self._font(size)
        left, top, right, bottom = draw.textbbox((0, 0), text, font=font)
        x = center_x - (right - left) / 2 - left
        y = center_y - (bottom - top) / 2 - top
        draw.text((x, y), text, fill=color, font=font)

    def _wrap(self, draw: ImageDraw.ImageDraw, text: str, font, max_width: int) -> List[str]:
        lines: List[str] = []
        current = ""
        for word in text.split():
            candidate = f"{current} {word}".strip()
            if current and draw.textlength(candidate, font=font) > max_width:
                lines.append(current)
                current = word
            else:
                current = candidate
        if current:
            lines.append(current)

        if len(lines) > DESCRIPTION_LINES:
            lines = lines[:DESCRIPTION_LINES]
            lines[-1] = lines[-1] + "..."
        return lines

    def _font(self, size: int):
        with self._fonts_lock:
            font = self._fonts.get(size)
            if font is None:
                font = self._load_font(size)
                self._fonts[size] = font
            return font

    def _load_font(self, size: int):
        if self.font_path is not None:
            try:
                return ImageFont.truetype(str(self.font_path), size)
            except OSError as exc:
                logger.warning(f"Could not load font {self.font_path}: {exc}; using default font")
        return ImageFont.load_default(size=size)


class _Canvas:
    def __init__(self, image: Image.Image, draw: ImageDraw.ImageDraw):
        self.image = image
        self.draw = draw


class _Palette:
    def __init__(self, palette: OGPalette):
        self.bg_start = hex_to_rgb(palette.bg_start)
        self.bg_end = hex_to_rgb(palette.bg_end)
        self.accent = hex_to_rgb(palette.accent)
        self.text_primary = hex_to_rgb(palette.text_primary)
        self.text_muted = hex_to_rgb(palette.text_muted)
        self.card_bg = hex_to_rgb(palette.card_bg)
        self.military = hex_to_rgb(palette.military)


def _branding(base_url: str) -> str:
    host = urlparse(base_url).netloc or base_url
    return host[4:] if host.startswith("www.") else host
