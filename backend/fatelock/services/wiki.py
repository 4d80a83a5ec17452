"""Reveal artwork: static icon URLs and background wiki thumbnail lookups.

Nothing here affects game state; lookups that fail are logged and dropped.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, Mapping, Optional

import aiohttp

from ..config import settings
from ..data.catalog import REGION_ICONS, SLOT_ICONS, SPECIAL_ICONS, WIKI_OVERRIDES, parent_region
from ..models.category import Category
from ..models.progression import PendingUnlock
from .unlocks import UnlockStateMachine

logger = logging.getLogger(__name__)

ImageFetcher = Callable[[str], Awaitable[Optional[str]]]


def unlock_image_url(category: Category, item: str) -> Optional[str]:
    """Return the static icon shown while a reveal is pending."""

    base = settings.wiki_image_base_url
    match category:
        case Category.SKILLS:
            return f"{base}{item}_icon.png"
        case Category.EQUIPMENT:
            icon = SLOT_ICONS.get(item)
        case Category.REGIONS:
            icon = REGION_ICONS.get(parent_region(item) or "", "Globe_icon.png")
        case _:
            icon = SPECIAL_ICONS.get(item)
    return f"{base}{icon}" if icon else None


def extract_thumbnail(payload: Mapping[str, Any]) -> Optional[str]:
    """Pull the thumbnail URL out of a ``prop=pageimages`` response."""

    pages = (payload.get("query") or {}).get("pages")
    if not pages:
        return None
    page_id, page = next(iter(pages.items()))
    if page_id == "-1":
        return None
    return (page.get("thumbnail") or {}).get("source")


async def fetch_wiki_image(
    page_name: str,
    *,
    session: Optional[aiohttp.ClientSession] = None,
) -> Optional[str]:
    """Look up the main image of a wiki page; ``None`` on any failure."""

    params = {
        "action": "query",
        "titles": WIKI_OVERRIDES.get(page_name, page_name),
        "prop": "pageimages",
        "format": "json",
        "pithumbsize": str(settings.wiki_thumbnail_size),
        "origin": "*",
    }
    timeout = aiohttp.ClientTimeout(total=settings.wiki_timeout_seconds)
    owns_session = session is None
    if session is None:
        session = aiohttp.ClientSession(timeout=timeout)
    try:
        async with session.get(settings.wiki_api_url, params=params) as response:
            response.raise_for_status()
            payload = await response.json(content_type=None)
        return extract_thumbnail(payload)
    except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as exc:
        logger.warning("Wiki image lookup failed for %r: %s", page_name, exc)
        return None
    finally:
        if owns_session:
            await session.close()


async def enrich_pending_image(
    machine: UnlockStateMachine,
    pending: PendingUnlock,
    fetcher: ImageFetcher = fetch_wiki_image,
) -> bool:
    """Fetch artwork for ``pending`` and attach it if it is still pending.

    Meant to run fire-and-forget; returns ``True`` only when applied.
    """

    try:
        image_url = await fetcher(pending.item)
    except Exception:  # pragma: no cover - fetchers are expected to swallow errors
        logger.exception("Artwork lookup crashed for %s", pending.item)
        return False
    if not image_url:
        return False
    return machine.apply_display_image(pending, image_url)
