"""
Shared JSON-over-HTTP helper for upstream adapters.
"""

import asyncio
import logging
from typing import Any, Optional

import aiohttp

from cryptocast.services.base import DataUnavailableError, UpstreamTimeoutError

logger = logging.getLogger(__name__)


def build_session(timeout_seconds: float) -> aiohttp.ClientSession:
    """Create a client session with a per-request total timeout."""
    return aiohttp.ClientSession(
        timeout=aiohttp.ClientTimeout(total=timeout_seconds),
        headers={"Accept": "application/json"},
    )


async def fetch_json(
    session: aiohttp.ClientSession,
    url: str,
    source: str,
    params: Optional[dict] = None,
) -> Any:
    """
    GET a JSON document.

    Raises:
        UpstreamTimeoutError: the call exceeded the session timeout
        DataUnavailableError: non-200 status, transport failure or bad JSON
    """
    try:
        async with session.get(url, params=params) as response:
            if response.status != 200:
                raise DataUnavailableError(
                    source, f"{url} returned status {response.status}"
                )
            return await response.json(content_type=None)
    except asyncio.TimeoutError:
        raise UpstreamTimeoutError(source, f"{url} timed out")
    except aiohttp.ClientError as e:
        raise DataUnavailableError(source, f"{url} request failed: {e}")
    except ValueError as e:
        raise DataUnavailableError(source, f"{url} returned invalid JSON: {e}")
