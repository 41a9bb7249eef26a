"""Application composition root.

This module wires together configuration, logging and the geocoding gateway for the search layer.
"""

from __future__ import annotations

from dataclasses import dataclass

from src.config.logging import configure_logging
from src.config.settings import Settings
from src.search.service import SearchService


@dataclass(frozen=True)
class App:
    """Shared application dependencies for request handlers."""

    settings: Settings
    search: SearchService


def create_app(settings: Settings) -> App:
    """Create the application container.

    Note:
        No network call is made here; the gateway only talks to the geocoder on demand.
    """

    configure_logging(settings.log_level)
    search = SearchService.from_settings(settings)
    return App(settings=settings, search=search)
