"""
Search engine helpers: sitemap.xml, robots.txt and sitemap pings.
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from datetime import date
from typing import List, Optional, Tuple

import requests

from catalog.models import SiteData

logger = logging.getLogger(__name__)

SITEMAP_NAMESPACE = "http://www.sitemaps.org/schemas/sitemap/0.9"

SEARCH_ENGINES: List[Tuple[str, str]] = [
    ("Google", "http://www.google.com/ping"),
    ("Bing", "http://www.bing.com/ping"),
]


def build_sitemap(site_data: SiteData, base_url: str, today: Optional[date] = None) -> bytes:
    """Render the sitemap for every category and resource page.

    Each page is listed once, even when several resources share its slug.

    Args:
        site_data: Built catalog
        base_url: Canonical site URL without trailing slash
        today: Date used for ``lastmod`` (default: today)

    Returns:
        UTF-8 encoded XML document
    """
    lastmod = (today or date.today()).isoformat()
    urlset = ET.Element("urlset", xmlns=SITEMAP_NAMESPACE)
    seen = set()

    def add_url(path: str, changefreq: str, priority: float) -> None:
        # Resources sharing a slug share one page
        if path in seen:
            return
        seen.add(path)
        entry = ET.SubElement(urlset, "url")
        ET.SubElement(entry, "loc").text = f"{base_url}{path}"
        ET.SubElement(entry, "lastmod").text = lastmod
        ET.SubElement(entry, "changefreq").text = changefreq
        ET.SubElement(entry, "priority").text = f"{priority:.1f}"

    add_url("/", "daily", 1.0)

    for category in site_data.categories:
        add_url(f"/category/{category.slug}", "weekly", 0.8)

    for category in site_data.categories:
        for subcategory in category.subcategories:
            for resource in subcategory.resources:
                add_url(f"/resource/{category.slug}/{resource.slug}", "monthly", 0.6)

    ET.indent(urlset, space="  ")
    return ET.tostring(urlset, encoding="utf-8", xml_declaration=True)


def build_robots(base_url: str) -> str:
    return (
        f"# robots.txt for {base_url}\n"
        "User-agent: *\n"
        "Allow: /\n"
        "Disallow: /search\n"
        "Disallow: /static/\n"
        "\n"
        "# Sitemap location\n"
        f"Sitemap: {base_url}/sitemap.xml\n"
    )


class SearchEnginePinger:
    """Notify search engines that the sitemap changed."""

    def __init__(self, sitemap_url: str, timeout: float = 30.0):
        self.sitemap_url = sitemap_url
        self.timeout = timeout

    def ping_all(self) -> None:
        for name, ping_url in SEARCH_ENGINES:
            self.ping(name, ping_url)

    def ping(self, name: str, ping_url: str) -> bool:
        """Send one sitemap notification.

        Returns:
            True if the engine answered 200, False otherwise. Network errors
            are logged and never raised.
        """
        try:
            response = requests.get(
                ping_url,
                params={"sitemap": self.sitemap_url},
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.warning(f"Failed to ping {name}: {exc}")
            return False

        if response.status_code == 200:
            logger.info(f"Successfully pinged {name} with sitemap")
            return True

        logger.warning(f"Ping to {name} returned status: {response.status_code}")
        return False
