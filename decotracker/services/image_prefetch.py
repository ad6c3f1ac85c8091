"""
Image prefetch service.

Warms the image host for items about to be displayed. Prefetching is
fire-and-forget: each image gets a bounded wait, failures are only
logged, and nothing here affects classification results.
"""

import asyncio
import logging
from collections.abc import Iterable

import httpx

from decotracker.config import settings

logger = logging.getLogger(__name__)

# Strong references to in-flight prefetch tasks
_background_tasks: set[asyncio.Task[int]] = set()


def image_url(image_ref: str, base_url: str) -> str:
    return f"{base_url.rstrip('/')}/{image_ref.lstrip('/')}"


async def prefetch_image(client: httpx.AsyncClient, url: str, timeout: float) -> bool:
    """Fetch one image, giving up after `timeout` seconds."""
    try:
        response = await asyncio.wait_for(client.get(url), timeout=timeout)
    except (TimeoutError, httpx.HTTPError) as e:
        logger.debug("Image prefetch failed for %s: %s", url, e)
        return False
    return response.is_success


async def prefetch_images(
    image_refs: Iterable[str | None],
    base_url: str,
    timeout: float | None = None,
    client: httpx.AsyncClient | None = None,
) -> int:
    """
    Prefetch distinct images concurrently.

    Returns:
        Number of images fetched successfully.
    """
    if timeout is None:
        timeout = settings.image_prefetch_timeout

    urls = list(dict.fromkeys(image_url(ref, base_url) for ref in image_refs if ref))
    if not urls:
        return 0

    if client is None:
        async with httpx.AsyncClient() as owned_client:
            results = await asyncio.gather(
                *(prefetch_image(owned_client, url, timeout) for url in urls)
            )
    else:
        results = await asyncio.gather(*(prefetch_image(client, url, timeout) for url in urls))

    fetched = sum(results)
    logger.debug("Prefetched %d of %d images", fetched, len(urls))
    return fetched


def schedule_prefetch(
    image_refs: Iterable[str | None],
    base_url: str | None = None,
) -> asyncio.Task[int] | None:
    """
    Start prefetching in the background and return immediately.

    Does nothing when no image base URL is configured. Must be called
    from within a running event loop.
    """
    if base_url is None:
        base_url = settings.image_base_url
    if not base_url:
        return None

    task = asyncio.create_task(prefetch_images(list(image_refs), base_url))
    _background_tasks.add(task)
    task.add_done_callback(_background_tasks.discard)
    return task
