"""Storefront page builder: page model, cart, search and persistence."""

from .app import bootstrap
from .errors import BuilderError, DuplicateComponentError, ReorderError, UnknownFieldError
from .models import (
    Cart,
    CartLine,
    ComponentNode,
    ImportedProduct,
    Page,
    PageMeta,
    Position,
    Product,
    SearchState,
    Size,
    SocialLinks,
    StoreInfo,
    Theme,
    View,
)
from .persistence import PagePersistence
from .storage import FileStorage, KeyValueStorage, MemoryStorage
from .store import PageModelStore
from .templates import Templates
from .themes import DEFAULT_THEMES, get_theme
from .tree import ComponentTree

__all__ = [
    # Errors
    "BuilderError",
    "DuplicateComponentError",
    "ReorderError",
    "UnknownFieldError",
    # Models
    "Cart",
    "CartLine",
    "ComponentNode",
    "ImportedProduct",
    "Page",
    "PageMeta",
    "Position",
    "Product",
    "SearchState",
    "Size",
    "SocialLinks",
    "StoreInfo",
    "Theme",
    "View",
    # Store
    "bootstrap",
    "PageModelStore",
    "ComponentTree",
    "Templates",
    "DEFAULT_THEMES",
    "get_theme",
    # Persistence
    "PagePersistence",
    "KeyValueStorage",
    "MemoryStorage",
    "FileStorage",
]
