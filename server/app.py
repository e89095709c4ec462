from __future__ import annotations

import logging
import threading
from contextlib import asynccontextmanager
from typing import Dict, Optional

import uvicorn
from fastapi import FastAPI, HTTPException, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse, RedirectResponse, Response

from catalog import CatalogBuilder
from catalog.models import Category, SiteData
from retrieval import CatalogIndex

from .config import Settings
from .og import PreviewGenerator, category_key, home_key, resource_key, search_key
from .seo import SearchEnginePinger, build_robots, build_sitemap

logger = logging.getLogger(__name__)

META_DESCRIPTION_LIMIT = 160
SUBCATEGORY_PREVIEW_LIMIT = 3
IMAGE_CACHE_CONTROL = "public, max-age=86400"


def truncate(text: str, limit: int = META_DESCRIPTION_LIMIT) -> str:
    """Shorten text to ``limit`` characters, ending with an ellipsis."""
    if len(text) <= limit:
        return text
    return text[:limit - 3] + "..."


def subcategory_preview(category: Category) -> str:
    names = [sub.name for sub in category.subcategories[:SUBCATEGORY_PREVIEW_LIMIT]]
    if len(category.subcategories) > SUBCATEGORY_PREVIEW_LIMIT:
        names.append("and more")
    return ", ".join(names)


def build_meta(settings: Settings, title: str, description: str, path: str,
               page_type: str, og_type: str = "website") -> Dict[str, str]:
    """Page metadata, including the URL of the page's preview image."""
    if page_type in ("home", "search"):
        og_image = f"{settings.base_url}/og/{page_type}.png"
    else:
        og_image = f"{settings.base_url}/og{path}.png"

    return {
        "title": title,
        "description": description,
        "canonical_url": settings.base_url + path,
        "og_type": og_type,
        "og_image": og_image,
        "page_type": page_type,
    }


def category_summary(category: Category) -> Dict[str, object]:
    return {
        "name": category.name,
        "slug": category.slug,
        "description": category.description,
        "resource_count": category.resource_count,
        "subcategories": [
            {"name": sub.name, "slug": sub.slug, "resource_count": len(sub.resources)}
            for sub in category.subcategories
        ],
    }


def create_app(settings: Optional[Settings] = None, site_data: Optional[SiteData] = None) -> FastAPI:
    """Build the catalog and return the FastAPI application serving it.

    The catalog is built synchronously before the app is returned, so no
    request can observe a partially built catalog.

    Args:
        settings: Service settings (default: read from the environment)
        site_data: Prebuilt catalog; when omitted it is built from
            ``settings.content_dir``

    Raises:
        OSError: If the content directory or one of its documents is unreadable
    """
    settings = settings or Settings.from_env()
    if site_data is None:
        site_data = CatalogBuilder(settings.content_dir).build()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if settings.ping_search_engines:
            pinger = SearchEnginePinger(settings.sitemap_url)
            threading.Thread(target=pinger.ping_all, name="sitemap-ping", daemon=True).start()
        yield

    app = FastAPI(title=settings.site_name, version="1.0.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.index = CatalogIndex(site_data)
    app.state.previews = PreviewGenerator(settings)

    if settings.cors_origins == ["*"]:
        logger.warning("CORS is set to allow all origins. This is not recommended for production!")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    def get_index(request: Request) -> CatalogIndex:
        return request.app.state.index

    @app.get("/health")
    def health_check(request: Request) -> JSONResponse:
        index = get_index(request)
        return JSONResponse({
            "status": "ok",
            "categories": len(index.categories),
            "resources": index.total_resources,
        })

    @app.get("/")
    def read_home(request: Request) -> JSONResponse:
        index = get_index(request)
        meta = build_meta(
            settings,
            title=f"{settings.site_name} - Curated Community Resources",
            description=(
                f"A curated collection of {index.total_resources}+ community resources "
                "including maps, ammo charts, quest trackers, and tools."
            ),
            path="/",
            page_type="home",
        )
        return JSONResponse({
            "meta": meta,
            "categories": [category_summary(category) for category in index.categories],
            "total_resources": index.total_resources,
        })

    @app.get("/category/{slug}")
    def read_category(slug: str, request: Request) -> JSONResponse:
        index = get_index(request)
        category = index.get_category(slug)
        if category is None:
            raise HTTPException(status_code=404, detail=f"Category '{slug}' not found.")

        description = category.description or (
            f"Browse {category.resource_count} {category.name} resources "
            f"including {subcategory_preview(category)}."
        )
        path = f"/category/{slug}"
        meta = build_meta(
            settings,
            title=f"{category.name} - {settings.site_name}",
            description=description,
            path=path,
            page_type="category",
        )
        breadcrumbs = [
            {"name": "Home", "url": settings.base_url + "/"},
            {"name": category.name, "url": settings.base_url + path},
        ]
        return JSONResponse({
            "meta": meta,
            "breadcrumbs": breadcrumbs,
            "category": category.to_dict(),
            "total_resources": index.total_resources,
        })

    @app.get("/resource/{category_slug}/{resource_slug}")
    def read_resource(category_slug: str, resource_slug: str, request: Request) -> JSONResponse:
        index = get_index(request)
        resource = index.get_resource(category_slug, resource_slug)
        if resource is None:
            raise HTTPException(status_code=404, detail="Resource not found.")

        path = f"/resource/{category_slug}/{resource_slug}"
        meta = build_meta(
            settings,
            title=f"{resource.name} - {resource.category_name} | {settings.site_name}",
            description=truncate(resource.description),
            path=path,
            page_type="resource",
            og_type="article",
        )
        breadcrumbs = [
            {"name": "Home", "url": settings.base_url + "/"},
            {"name": resource.category_name, "url": f"{settings.base_url}/category/{category_slug}"},
            {"name": resource.name, "url": settings.base_url + path},
        ]
        return JSONResponse({
            "meta": meta,
            "breadcrumbs": breadcrumbs,
            "resource": resource.to_dict(),
        })

    @app.get("/search")
    def handle_search(request: Request, q: str = Query("", max_length=200)) -> JSONResponse:
        index = get_index(request)
        results = index.search(q)

        if q:
            logger.debug(f"Search '{q}' matched {len(results)} resources")
            title = f"Search: {q} - {settings.site_name}"
            description = f"Found {len(results)} resources matching '{q}'."
        else:
            title = f"Search - {settings.site_name}"
            description = "Search community resources including maps, ammo charts, quest trackers, and more."

        return JSONResponse({
            "meta": build_meta(settings, title, description, "/search", "search"),
            "query": q,
            "results": [result.to_dict() for result in results],
            "result_count": len(results),
        })

    # Redirect targets come only from the catalog
    @app.get("/go/{category_slug}/{resource_slug}")
    def redirect_primary(category_slug: str, resource_slug: str, request: Request) -> RedirectResponse:
        return _redirect(get_index(request), category_slug, resource_slug, 0)

    @app.get("/go/{category_slug}/{resource_slug}/{link_index}")
    def redirect_link(category_slug: str, resource_slug: str, link_index: str,
                      request: Request) -> RedirectResponse:
        try:
            position = int(link_index)
        except ValueError as exc:
            raise HTTPException(status_code=404, detail="Link not found.") from exc
        return _redirect(get_index(request), category_slug, resource_slug, position)

    @app.get("/sitemap.xml")
    def read_sitemap(request: Request) -> Response:
        content = build_sitemap(get_index(request).data, settings.base_url)
        return Response(content=content, media_type="application/xml; charset=utf-8")

    @app.get("/robots.txt")
    def read_robots() -> PlainTextResponse:
        return PlainTextResponse(build_robots(settings.base_url))

    def get_previews(request: Request) -> PreviewGenerator:
        return request.app.state.previews

    @app.get("/og/home.png")
    def read_home_image(request: Request) -> Response:
        index, previews = get_index(request), get_previews(request)
        data = previews.cached(home_key(), lambda: previews.generate_home(
            index.total_resources, len(index.categories),
        ))
        return _png(data)

    @app.get("/og/search.png")
    def read_search_image(request: Request) -> Response:
        index, previews = get_index(request), get_previews(request)
        data = previews.cached(search_key(), lambda: previews.generate_search(
            index.total_resources, len(index.categories),
        ))
        return _png(data)

    @app.get("/og/category/{slug}.png")
    def read_category_image(slug: str, request: Request) -> Response:
        category = get_index(request).get_category(slug)
        if category is None:
            raise HTTPException(status_code=404, detail=f"Category '{slug}' not found.")

        previews = get_previews(request)
        data = previews.cached(category_key(slug), lambda: previews.generate_category(
            category.name,
            category.resource_count,
            [sub.name for sub in category.subcategories],
        ))
        return _png(data)

    @app.get("/og/resource/{category_slug}/{resource_slug}.png")
    def read_resource_image(category_slug: str, resource_slug: str, request: Request) -> Response:
        resource = get_index(request).get_resource(category_slug, resource_slug)
        if resource is None:
            raise HTTPException(status_code=404, detail="Resource not found.")

        previews = get_previews(request)
        key = resource_key(category_slug, resource_slug)
        data = previews.cached(key, lambda: previews.generate_resource(
            resource.name,
            resource.description,
            resource.category_name,
            resource.platform,
            resource.audience,
            resource.price,
        ))
        return _png(data)

    return app


def _redirect(index: CatalogIndex, category_slug: str, resource_slug: str,
              position: int) -> RedirectResponse:
    resource = index.get_resource(category_slug, resource_slug)
    if resource is None:
        raise HTTPException(status_code=404, detail="Resource not found.")

    links = [link.url for link in resource.links]
    if position < 0 or position >= len(links):
        raise HTTPException(status_code=404, detail="Link not found.")
    return RedirectResponse(links[position], status_code=302)


def _png(data: bytes) -> Response:
    return Response(content=data, media_type="image/png",
                    headers={"Cache-Control": IMAGE_CACHE_CONTROL})


def run_server(settings: Optional[Settings] = None) -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    settings = settings or Settings.from_env()

    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_level="info",
    )


if __name__ == "__main__":
    run_server()
