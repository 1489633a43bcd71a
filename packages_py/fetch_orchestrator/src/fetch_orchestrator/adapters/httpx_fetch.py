"""
httpx adapter: builds fetch functions that issue GET requests on an
httpx.AsyncClient, taking query parameters from the fetch key.
"""
import logging
from typing import Any, Callable, Dict, Mapping, Optional, Union

import httpx

from ..types import FetchFn, FetchKey

logger = logging.getLogger(__name__)

LOG_PREFIX = "[fetch_orchestrator.httpx]"

UrlSource = Union[str, Callable[[FetchKey], str]]


def _query_params(
    fetch_key: FetchKey, params_index: Optional[int], params: Optional[Any]
) -> Dict[str, Any]:
    query: Dict[str, Any] = {}
    if params_index is not None and 0 <= params_index < len(fetch_key):
        key_params = fetch_key[params_index]
        if isinstance(key_params, Mapping):
            query.update(key_params)
    if isinstance(params, Mapping):
        query.update(params)
    return query


def create_httpx_fetch_fn(
    client: httpx.AsyncClient,
    url: UrlSource,
    *,
    params_index: Optional[int] = 1,
    raise_for_status: bool = True,
) -> FetchFn:
    """
    Create a fetch function backed by an httpx client.

    Args:
        client: Client used for the requests; its base_url applies
        url: Request path, or a callable computing it from the fetch key
        params_index: Index of the key part holding query parameters, or None
        raise_for_status: Raise httpx.HTTPStatusError on 4xx/5xx responses

    Returns:
        Fetch function returning the httpx.Response

    Example:
        client = httpx.AsyncClient(base_url="https://jsonplaceholder.typicode.com")
        fetch_posts = create_httpx_fetch_fn(client, "/posts")
        orchestrator = FetchOrchestrator(
            ["posts", {"_limit": 10, "_page": 1}], fetch_posts, transform=json_body
        )
    """

    async def fetch(fetch_key: FetchKey, params: Optional[Any] = None) -> httpx.Response:
        path = url(fetch_key) if callable(url) else url
        query = _query_params(fetch_key, params_index, params)
        logger.debug(f"{LOG_PREFIX} fetch: GET {path} params={query}")

        response = await client.get(path, params=query or None)
        if raise_for_status:
            response.raise_for_status()
        return response

    return fetch


def json_body(response: httpx.Response) -> Any:
    """Transform returning the decoded JSON body."""
    return response.json()
