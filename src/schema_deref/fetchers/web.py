"""Web fetcher backed by httpx."""

import logging

import httpx

from schema_deref.config import get_deref_config
from schema_deref.exceptions import RetrievalError

logger = logging.getLogger("schema-deref.fetch")


def create_http_client() -> httpx.AsyncClient:
    """Create an AsyncClient configured from the environment."""
    config = get_deref_config()
    return httpx.AsyncClient(
        timeout=httpx.Timeout(config.http_timeout_s),
        follow_redirects=config.follow_redirects,
        headers={"User-Agent": config.user_agent},
    )


async def fetch_web(location: str, client: httpx.AsyncClient | None = None) -> str:
    """GET ``location`` and return the response body as text.

    Without a ``client`` a short-lived one is created for this call.

    Raises:
        RetrievalError: Transport failure or non-2xx status.
    """
    if client is None:
        async with create_http_client() as owned:
            return await fetch_web(location, owned)

    logger.info("Fetching %s", location)
    try:
        response = await client.get(location)
        response.raise_for_status()
    except httpx.TimeoutException as exc:
        logger.warning("Timed out fetching %s", location)
        raise RetrievalError.web(location, "request timed out") from exc
    except httpx.HTTPStatusError as exc:
        logger.warning("Fetching %s returned %s", location, exc.response.status_code)
        raise RetrievalError.web(location, f"HTTP {exc.response.status_code}") from exc
    except httpx.HTTPError as exc:
        logger.warning("Fetching %s failed: %s", location, exc)
        raise RetrievalError.web(location, str(exc) or type(exc).__name__) from exc

    return response.text
