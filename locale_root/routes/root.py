"""
Root URL Routes

    GET  /                     → redirect to the visitor's language root (301)
    GET  /{language}/          → homepage in that language, 301 to the default
                                 language, or 404 for malformed segments
    GET  /dev/build            → create the content schema, then return to returnURL

Registered last in create_app() so that /{language} does not shadow other routes.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from fastapi.responses import JSONResponse, RedirectResponse
from pydantic import BaseModel

from locale_root.config import Settings
from locale_root.routing.decision import (
    BootstrapRedirect,
    NotFound,
    Redirect,
    RequestContext,
    RootRouter,
    RoutingDecision,
    ServeContent,
)
from locale_root.services.content_service import SQLContentStore
from locale_root.services.preference_service import CookiePreferenceStore

router = APIRouter(tags=["Root"])
logger = logging.getLogger(__name__)


class HomepageResponse(BaseModel):
    """Hand-off to the content layer for a served language root."""

    locale: str
    path: str
    homepage_link: str


# ── Dependencies ──────────────────────────────────────────────────────────────


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_root_router(request: Request) -> RootRouter:
    return request.app.state.root_router


def get_preference_store(request: Request, settings: Settings = Depends(get_app_settings)) -> CookiePreferenceStore:
    return CookiePreferenceStore(
        request,
        cookie_name=settings.language_cookie_name,
        max_age=settings.language_cookie_max_age,
    )


# ── Decision → response ───────────────────────────────────────────────────────


def build_response(request: Request, decision: RoutingDecision, preferences: CookiePreferenceStore) -> Response:
    """Turn a routing decision into the HTTP response for it."""
    if isinstance(decision, NotFound):
        raise HTTPException(status_code=decision.status_code, detail=decision.message)

    if isinstance(decision, (Redirect, BootstrapRedirect)):
        response: Response = RedirectResponse(decision.target_path, status_code=decision.status_code)
    elif isinstance(decision, ServeContent):
        request.state.locale = decision.locale
        body = HomepageResponse(
            locale=decision.locale,
            path=f"{request.app.state.root_router.base_path}{decision.canonical_path_prefix}",
            homepage_link=decision.homepage_link,
        )
        response = JSONResponse(status_code=decision.status_code, content=body.model_dump())
        response.headers["Content-Language"] = decision.locale.replace("_", "-")
    else:
        raise TypeError(f"Unsupported routing decision: {decision!r}")

    request.state.routing_decision = type(decision).__name__
    return preferences.apply(response)


def _route(request: Request, language: str | None, root_router: RootRouter, preferences: CookiePreferenceStore):
    context = RequestContext(
        path_segment=language,
        accept_language=request.headers.get("Accept-Language"),
        request_path=request.url.path,
    )
    decision = root_router.decide(context, preferences)
    return build_response(request, decision, preferences)


# ── Routes ────────────────────────────────────────────────────────────────────


@router.get("/dev/build", include_in_schema=False)
def dev_build(request: Request, returnURL: str | None = None, settings: Settings = Depends(get_app_settings)):
    """Create the content schema and send the visitor back where they came from."""
    content_store = request.app.state.content_store
    if not isinstance(content_store, SQLContentStore):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="The requested page could not be found.")

    content_store.create_schema()

    # Only local paths, never another host
    target = returnURL if returnURL and returnURL.startswith("/") and not returnURL.startswith("//") else None
    logger.info(f"Content schema built, returning to {target or settings.base_path}")
    return RedirectResponse(target or settings.base_path, status_code=status.HTTP_302_FOUND)


@router.get("/")
def root(
    request: Request,
    root_router: RootRouter = Depends(get_root_router),
    preferences: CookiePreferenceStore = Depends(get_preference_store),
):
    return _route(request, None, root_router, preferences)


@router.get("/{language}")
@router.get("/{language}/")
def language_root(
    request: Request,
    language: str,
    root_router: RootRouter = Depends(get_root_router),
    preferences: CookiePreferenceStore = Depends(get_preference_store),
):
    return _route(request, language, root_router, preferences)
