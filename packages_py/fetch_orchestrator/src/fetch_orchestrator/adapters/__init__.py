"""
Fetch function adapters for fetch_orchestrator.
"""
from .httpx_fetch import create_httpx_fetch_fn, json_body

__all__ = [
    "create_httpx_fetch_fn",
    "json_body",
]
