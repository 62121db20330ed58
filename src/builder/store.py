"""
Page Model Store - state container behind the storefront builder.

Owns the pages and the current page's component tree, the active theme,
the shopping cart, the product catalog with its search state, the store
info and the navigation view. The UI calls one method per gesture; each
call is applied completely before it returns.

Failure policy:
- A mutation whose target id is unknown is a no-op and returns False.
- A mutation that would break an invariant (duplicate component ids,
  out-of-range reorder) raises a ``BuilderError`` and changes nothing.
- Persisted state that cannot be read is logged and ignored.
"""

import time
from collections.abc import Callable, Iterable, Mapping
from typing import Any

from pydantic import BaseModel, ValidationError as ModelValidationError

from core import get_logger
from core.id import copy_id, new_page_id
from .errors import UnknownFieldError
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
    StoreInfo,
    Theme,
    View,
)
from .persistence import PagePersistence
from .storage import MemoryStorage
from .themes import DEFAULT_THEMES, get_theme
from .tree import ComponentTree, renamed_copy

logger = get_logger(__name__)

DEFAULT_PAGE_ID = "home"
DUPLICATE_OFFSET = 20.0


def _check_fields(model: type[BaseModel], updates: Mapping[str, Any]) -> None:
    unknown = sorted(set(updates) - set(model.model_fields))
    if unknown:
        raise UnknownFieldError(model.__name__, unknown)


class PageModelStore:
    """
    Builder state for one application root.

    Pages have a single source of truth: ``pages`` holds every page and
    ``current_page`` is the entry of ``pages`` whose id is
    ``current_page_id``. Edits to the current page are edits to that entry.
    """

    def __init__(
        self,
        persistence: PagePersistence | None = None,
        themes: Iterable[Theme] = DEFAULT_THEMES,
        default_theme: str = "modern",
        duplicate_offset: float = DUPLICATE_OFFSET,
        clock: Callable[[], int] | None = None,
    ) -> None:
        """
        Initialize an empty store.

        Args:
            persistence: Where save/load go (defaults to in-memory storage)
            themes: Theme catalog
            default_theme: Id of the theme active at startup
            duplicate_offset: Position delta applied to duplicated components
            clock: Millisecond clock used for copy ids
        """
        self.persistence = persistence or PagePersistence(MemoryStorage())
        self.duplicate_offset = duplicate_offset
        self._clock = clock or (lambda: time.time_ns() // 1_000_000)

        self.themes: list[Theme] = list(themes)
        if not self.themes:
            raise ValueError("At least one theme is required")
        self.current_theme: Theme = next(
            (t for t in self.themes if t.id == default_theme), self.themes[0]
        )

        self.pages: list[Page] = []
        self.current_page_id: str | None = None
        self._tree: ComponentTree | None = None

        self.selected_component: str | None = None
        self.is_editing = False
        self.is_preview = False

        self.products: list[Product] = []
        self.imported_products: list[ImportedProduct] = []
        self.cart = Cart()
        self.search = SearchState()
        self.store_info = StoreInfo()
        self.current_view = View.HOME

        logger.info("store_initialized", theme=self.current_theme.id, themes=len(self.themes))

    # ========================================================================
    # Pages
    # ========================================================================

    @property
    def current_page(self) -> Page | None:
        if self.current_page_id is None:
            return None
        return self.get_page(self.current_page_id)

    @property
    def tree(self) -> ComponentTree | None:
        """Index over the current page's components."""
        return self._tree

    def get_page(self, page_id: str) -> Page | None:
        for page in self.pages:
            if page.id == page_id:
                return page
        return None

    def _upsert_page(self, page: Page) -> None:
        for i, existing in enumerate(self.pages):
            if existing.id == page.id:
                self.pages[i] = page
                return
        self.pages.append(page)

    def set_current_page(self, page: Page) -> None:
        """
        Make ``page`` the current page, replacing any page with the same id.

        Raises:
            DuplicateComponentError: If the page's tree reuses a component id
        """
        tree = ComponentTree(page.components)
        self._upsert_page(page)
        self.current_page_id = page.id
        self._tree = tree
        logger.info("current_page_set", page_id=page.id, components=len(tree))

    def new_page(self, name: str, slug: str | None = None, meta: PageMeta | None = None) -> Page:
        """Create an empty page with a generated id. The current page is unchanged."""
        page = Page(
            id=new_page_id(),
            name=name,
            slug=slug or "-".join(name.lower().split()),
            theme=self.current_theme,
            meta=meta or PageMeta(title=name),
        )
        self.pages.append(page)
        logger.info("page_created", page_id=page.id, slug=page.slug)
        return page

    def _default_page(self, components: list[ComponentNode]) -> Page:
        return Page(
            id=DEFAULT_PAGE_ID,
            name="Home Page",
            slug="home",
            components=components,
            theme=self.current_theme,
            meta=PageMeta(title="My Store", description="Welcome to my store"),
        )

    # ========================================================================
    # Component tree
    # ========================================================================

    def add_component(self, component: ComponentNode) -> None:
        """
        Append ``component`` to the root level of the current page.

        Without a current page, a default "home" page is created holding
        only this component.

        Raises:
            DuplicateComponentError: If an id in ``component``'s subtree is taken
        """
        if self._tree is None:
            self.set_current_page(self._default_page([component]))
        else:
            self._tree.append_root(component)
        logger.info("component_added", component_id=component.id, type=component.type)

    def update_component(self, component_id: str, updates: Mapping[str, Any]) -> bool:
        """
        Shallow-merge ``updates`` (node fields) into the matching node.

        Returns:
            True if a node was updated, False if it was not found

        Raises:
            DuplicateComponentError: If a changed id or children collide
            UnknownFieldError: If ``updates`` names a field nodes do not have
        """
        _check_fields(ComponentNode, updates)
        node = self._tree.get(component_id) if self._tree is not None else None
        if node is None:
            logger.debug("component_not_found", op="update", component_id=component_id)
            return False

        data = {name: getattr(node, name) for name in ComponentNode.model_fields}
        data.update(updates)
        self._tree.replace(component_id, ComponentNode.model_validate(data))

        if data["id"] != component_id and self.selected_component == component_id:
            self.selected_component = data["id"]
        logger.debug("component_updated", component_id=component_id, fields=sorted(updates))
        return True

    def update_component_props(self, component_id: str, props: Mapping[str, Any]) -> bool:
        """Shallow-merge ``props`` into the matching node's props."""
        node = self._tree.get(component_id) if self._tree is not None else None
        if node is None:
            logger.debug("component_not_found", op="update_props", component_id=component_id)
            return False
        return self.update_component(component_id, {"props": {**node.props, **props}})

    def remove_component(self, component_id: str) -> bool:
        """Remove a node and its whole subtree, at any depth."""
        if self._tree is None or component_id not in self._tree:
            logger.debug("component_not_found", op="remove", component_id=component_id)
            return False

        removed = self._tree.subtree_ids(component_id)
        self._tree.remove(component_id)
        if self.selected_component in removed:
            self.selected_component = None
        logger.info("component_removed", component_id=component_id, subtree=len(removed))
        return True

    def select_component(self, component_id: str | None) -> None:
        self.selected_component = component_id

    def duplicate_component(self, component_id: str) -> str | None:
        """
        Insert a copy of a node right after it, at the same depth.

        The copy and each of its descendants get ``{id}_copy_{timestamp_ms}``
        ids, and the copy is offset by ``duplicate_offset`` on both axes.

        Returns:
            The copy's id, or None if the node was not found
        """
        node = self._tree.get(component_id) if self._tree is not None else None
        if node is None:
            logger.debug("component_not_found", op="duplicate", component_id=component_id)
            return None

        now = self._clock()
        taken = self._tree.ids()
        new_ids: list[str] = []
        for n in node.walk():
            new_id = copy_id(n.id, taken, clock=lambda: now)
            taken.add(new_id)
            new_ids.append(new_id)

        clone = renamed_copy(node, new_ids)
        clone.position = Position(
            x=node.position.x + self.duplicate_offset,
            y=node.position.y + self.duplicate_offset,
        )
        self._tree.insert_after(component_id, clone)
        logger.info("component_duplicated", component_id=component_id, copy_id=clone.id)
        return clone.id

    def move_component(self, component_id: str, position: Position | Mapping[str, float]) -> bool:
        return self.update_component(component_id, {"position": position})

    def reorder_components(self, start_index: int, end_index: int) -> bool:
        """
        Move the root component at ``start_index`` to ``end_index``.

        Raises:
            ReorderError: If either index is out of range
        """
        if self._tree is None:
            return False
        self._tree.move_root(start_index, end_index)
        logger.debug("components_reordered", start=start_index, end=end_index)
        return True

    def move_component_up(self, component_id: str) -> bool:
        index = self._tree.root_index(component_id) if self._tree is not None else None
        if not index:
            return False
        self._tree.swap_roots(index, index - 1)
        return True

    def move_component_down(self, component_id: str) -> bool:
        index = self._tree.root_index(component_id) if self._tree is not None else None
        if index is None or index >= len(self._tree.roots) - 1:
            return False
        self._tree.swap_roots(index, index + 1)
        return True

    # ========================================================================
    # Theme & modes
    # ========================================================================

    def set_theme(self, theme: Theme) -> None:
        """Replace the active theme and the current page's theme."""
        self.current_theme = theme
        page = self.current_page
        if page is not None:
            page.theme = theme
        logger.info("theme_set", theme=theme.id)

    def set_theme_by_id(self, theme_id: str) -> bool:
        theme = next((t for t in self.themes if t.id == theme_id), None) or get_theme(theme_id)
        if theme is None:
            logger.debug("theme_not_found", theme=theme_id)
            return False
        self.set_theme(theme)
        return True

    def toggle_editing(self) -> None:
        self.is_editing = not self.is_editing

    def toggle_preview(self) -> None:
        self.is_preview = not self.is_preview

    # ========================================================================
    # Persistence
    # ========================================================================

    def save_pages(self) -> None:
        self.persistence.save(self.pages, self.current_page, self.store_info)

    def load_pages(self) -> None:
        """Restore pages, current page and store info; unreadable parts are skipped."""
        loaded = self.persistence.load()

        if "pages" in loaded:
            previous = self.current_page
            self.pages = []
            for page in loaded["pages"]:
                self._upsert_page(page)
            if previous is not None and "current_page" not in loaded:
                if self.get_page(previous.id) is None:
                    self.pages.append(previous)
                self.set_current_page(self.get_page(previous.id))

        if "current_page" in loaded:
            page = loaded["current_page"]
            if page is None:
                self.current_page_id = None
                self._tree = None
            else:
                self.set_current_page(page)

        if "store_info" in loaded:
            self.store_info = loaded["store_info"]

    # ========================================================================
    # Catalog & search
    # ========================================================================

    def set_products(self, products: Any) -> None:
        """Replace the catalog. Non-list input empties it; invalid entries are skipped."""
        if not isinstance(products, list):
            self.products = []
            return

        catalog: list[Product] = []
        for item in products:
            try:
                catalog.append(item if isinstance(item, Product) else Product.model_validate(item))
            except ModelValidationError as e:
                logger.warning("product_skipped", error=str(e))
        self.products = catalog
        logger.info("products_set", count=len(catalog))

    def set_imported_products(self, products: Iterable[ImportedProduct | Mapping[str, Any]]) -> None:
        self.imported_products = [
            p if isinstance(p, ImportedProduct) else ImportedProduct.model_validate(p)
            for p in products
        ]

    def clear_imported_products(self) -> None:
        self.imported_products = []

    def set_search_query(self, query: str) -> None:
        self.search.query = query

    def perform_search(self) -> list[Product]:
        """Recompute results from the catalog for the current query."""
        query = self.search.query.strip().lower()
        if not query:
            self.search.results = []
            return self.search.results

        def matches(product: Product) -> bool:
            fields = (product.name, product.description, product.category)
            return any(value and query in value.lower() for value in fields)

        self.search.results = [p for p in self.products if matches(p)]
        return self.search.results

    def toggle_search(self) -> None:
        self.search.is_open = not self.search.is_open

    # ========================================================================
    # Cart
    # ========================================================================

    def add_to_cart(self, product: Product | Mapping[str, Any]) -> CartLine:
        """Add one unit; a product already in the cart gets its quantity bumped."""
        if not isinstance(product, Product):
            product = Product.model_validate(product)

        line = self.cart.find(product.id)
        if line is None:
            line = CartLine(product_id=product.id, name=product.name, price=product.price)
            self.cart.items.append(line)
        else:
            line.quantity += 1
        logger.debug("cart_item_added", product_id=product.id, quantity=line.quantity)
        return line

    def remove_from_cart(self, product_id: str) -> bool:
        line = self.cart.find(product_id)
        if line is None:
            return False
        self.cart.items.remove(line)
        return True

    def update_cart_quantity(self, product_id: str, quantity: int) -> bool:
        """Set a line's quantity; zero or less removes the line."""
        line = self.cart.find(product_id)
        if line is None:
            return False
        if quantity <= 0:
            self.cart.items.remove(line)
        else:
            line.quantity = int(quantity)
        return True

    def toggle_cart(self) -> None:
        self.cart.is_open = not self.cart.is_open

    def clear_cart(self) -> None:
        self.cart = Cart()

    # ========================================================================
    # Navigation & store info
    # ========================================================================

    def set_current_view(self, view: View | str) -> None:
        self.current_view = View(view)

    def update_store_info(self, info: Mapping[str, Any]) -> StoreInfo:
        """
        Merge ``info`` into the store info and persist it right away.

        Raises:
            UnknownFieldError: If ``info`` names a field store info does not have
        """
        _check_fields(StoreInfo, info)
        data = {name: getattr(self.store_info, name) for name in StoreInfo.model_fields}
        data.update(info)
        self.store_info = StoreInfo.model_validate(data)
        self.persistence.save_store_info(self.store_info)
        logger.info("store_info_updated", fields=sorted(info))
        return self.store_info

    # ========================================================================
    # Introspection
    # ========================================================================

    def snapshot(self) -> dict[str, Any]:
        """JSON-ready view of the whole state, for renderers and debugging."""
        page = self.current_page
        return {
            "current_page": page.model_dump(mode="json") if page else None,
            "pages": [p.id for p in self.pages],
            "current_theme": self.current_theme.id,
            "selected_component": self.selected_component,
            "is_editing": self.is_editing,
            "is_preview": self.is_preview,
            "products": len(self.products),
            "cart": self.cart.model_dump(mode="json"),
            "search": self.search.model_dump(mode="json"),
            "store_info": self.store_info.model_dump(mode="json"),
            "current_view": self.current_view.value,
        }


__all__ = ["PageModelStore", "DEFAULT_PAGE_ID", "DUPLICATE_OFFSET"]
