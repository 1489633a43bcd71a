"""
Configuration utilities for fetch_orchestrator.

Process-wide defaults come from FETCHER_* environment variables, read once.
Per-instance FetcherOptions override them field by field.
"""
from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .types import FetcherOptions


DEFAULT_FETCHER_OPTIONS = FetcherOptions(
    initial=True,
    enabled=True,
    enable_cache=True,
    ttl_cache=10,
    initial_data=None,
)


class FetcherSettings(BaseSettings):
    """Fetcher defaults loaded from environment variables."""

    model_config = SettingsConfigDict(env_prefix="FETCHER_", case_sensitive=False)

    initial: bool = DEFAULT_FETCHER_OPTIONS.initial
    enabled: bool = DEFAULT_FETCHER_OPTIONS.enabled
    enable_cache: bool = DEFAULT_FETCHER_OPTIONS.enable_cache
    ttl_cache: float = Field(default=DEFAULT_FETCHER_OPTIONS.ttl_cache, ge=0)


@lru_cache()
def get_settings() -> FetcherSettings:
    """Get cached settings instance."""
    return FetcherSettings()


def get_default_fetcher_options() -> FetcherOptions:
    """Build default options from the current settings."""
    settings = get_settings()
    return FetcherOptions(
        initial=settings.initial,
        enabled=settings.enabled,
        enable_cache=settings.enable_cache,
        ttl_cache=settings.ttl_cache,
        initial_data=None,
    )


def merge_fetcher_options(options: Optional[FetcherOptions] = None) -> FetcherOptions:
    """
    Merge user options with defaults.

    Raises:
        ValueError: If ttl_cache is negative
    """
    defaults = get_default_fetcher_options()
    if options is None:
        return defaults

    merged = FetcherOptions(
        initial=options.initial if options.initial is not None else defaults.initial,
        enabled=options.enabled if options.enabled is not None else defaults.enabled,
        enable_cache=options.enable_cache
        if options.enable_cache is not None
        else defaults.enable_cache,
        ttl_cache=options.ttl_cache
        if options.ttl_cache is not None
        else defaults.ttl_cache,
        initial_data=options.initial_data,
    )

    if merged.ttl_cache < 0:
        raise ValueError(f"ttl_cache must be >= 0, got {merged.ttl_cache}")

    return merged
