"""
Application root
Wires settings, logging and the container, then hydrates the store.
"""

from core import Settings, configure_from_settings, create_container, get_logger, get_settings
from .store import PageModelStore


logger = get_logger(__name__)


def bootstrap(settings: Settings | None = None) -> PageModelStore:
    """
    Build the store owned by the application root.

    The returned store is the one UI consumers receive; nothing else keeps
    a reference to it.

    Args:
        settings: Settings override (defaults to environment settings)

    Returns:
        Store hydrated from persisted state
    """
    settings = settings or get_settings()
    configure_from_settings(settings)

    logger.info("starting", storage=settings.storage_backend, theme=settings.default_theme)

    container = create_container(settings)
    store = container.get(PageModelStore)
    store.load_pages()

    logger.info(
        "store_ready",
        pages=len(store.pages),
        current_page=store.current_page_id,
    )
    return store


__all__ = ["bootstrap"]
