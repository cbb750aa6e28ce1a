"""Dependency injection container."""

from typing import Optional

from dishka import AsyncContainer, make_async_container

from ask.config import Settings
from ask.util.di import PROVIDERS, ProdConfigProvider, get_provider


def create_container(settings: Optional[Settings] = None) -> AsyncContainer:
    """Build production container (all prod implementations).

    Args:
        settings: Settings shared by every provider; loaded from the
            environment when omitted

    Returns:
        Configured DI container with production providers
    """
    provider_instances = [
        ProdConfigProvider(settings)
        if base is ProdConfigProvider
        else get_provider(base, use_mock=False)()
        for base in PROVIDERS
    ]
    return make_async_container(*provider_instances)
