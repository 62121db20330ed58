"""Page Builder Data Models."""

from decimal import Decimal
from enum import Enum
from typing import Any
from pydantic import BaseModel, ConfigDict, Field, computed_field


class Position(BaseModel):
    """Free-form placement of a component."""

    x: float = 0
    y: float = 0


class Size(BaseModel):
    """Component dimensions."""

    width: float = 100
    height: float = 100


class ComponentNode(BaseModel):
    """A node of a page's component tree."""

    id: str = Field(..., min_length=1, description="Unique identifier within the page tree")
    type: str = Field(..., description="Renderer tag, e.g. 'hero' or 'product-grid'")
    props: dict[str, Any] = Field(default_factory=dict)
    children: list["ComponentNode"] = Field(default_factory=list)
    position: Position = Field(default_factory=Position)
    size: Size = Field(default_factory=Size)

    def walk(self):
        """Yield this node and its descendants in pre-order."""
        yield self
        for child in self.children:
            yield from child.walk()


ComponentNode.model_rebuild()


# ============================================================================
# Theme
# ============================================================================


class _FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True)


class ThemeColors(_FrozenModel):
    primary: str
    secondary: str
    accent: str
    background: str
    text: str
    border: str


class FontSizes(_FrozenModel):
    xs: str = "0.75rem"
    sm: str = "0.875rem"
    md: str = "1rem"
    lg: str = "1.125rem"
    xl: str = "1.25rem"


class ThemeFonts(_FrozenModel):
    heading: str
    body: str
    sizes: FontSizes = Field(default_factory=FontSizes)


class Spacing(_FrozenModel):
    xs: str = "0.25rem"
    sm: str = "0.5rem"
    md: str = "1rem"
    lg: str = "1.5rem"
    xl: str = "3rem"


class BorderRadius(_FrozenModel):
    none: str = "0"
    sm: str = "0.125rem"
    md: str = "0.375rem"
    lg: str = "0.5rem"
    full: str = "9999px"


class Theme(_FrozenModel):
    """Named visual configuration. Replaced wholesale, never patched."""

    id: str
    name: str
    colors: ThemeColors
    fonts: ThemeFonts
    spacing: Spacing = Field(default_factory=Spacing)
    border_radius: BorderRadius = Field(default_factory=BorderRadius)


# ============================================================================
# Page
# ============================================================================


class PageMeta(BaseModel):
    title: str = ""
    description: str = ""


class Page(BaseModel):
    """A page: root component list plus its theme and metadata."""

    id: str = Field(..., min_length=1)
    name: str
    slug: str
    components: list[ComponentNode] = Field(default_factory=list)
    theme: Theme
    meta: PageMeta = Field(default_factory=PageMeta)


# ============================================================================
# Catalog
# ============================================================================


class Product(BaseModel):
    """Catalog product as supplied by the products endpoint."""

    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)

    id: str
    name: str
    price: Decimal = Field(..., ge=0)
    description: str | None = None
    category: str | None = None
    image: str | None = None


class ImportedProduct(BaseModel):
    """Product staged by a partner import, before it joins the catalog."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    id: str
    title: str
    price: Decimal = Field(..., ge=0)
    image: str = ""
    description: str = ""
    link: str = ""
    source: str = ""


# ============================================================================
# Cart
# ============================================================================


class CartLine(BaseModel):
    """One product in the cart with its quantity."""

    product_id: str
    name: str
    price: Decimal = Field(..., ge=0)
    quantity: int = Field(default=1, ge=1)

    @property
    def line_total(self) -> Decimal:
        return self.price * self.quantity


class Cart(BaseModel):
    """Cart lines; totals are always derived from the lines."""

    items: list[CartLine] = Field(default_factory=list)
    is_open: bool = False

    @computed_field
    @property
    def total_items(self) -> int:
        return sum(line.quantity for line in self.items)

    @computed_field
    @property
    def total_price(self) -> Decimal:
        return sum((line.line_total for line in self.items), Decimal("0"))

    def find(self, product_id: str) -> CartLine | None:
        for line in self.items:
            if line.product_id == product_id:
                return line
        return None


class SearchState(BaseModel):
    query: str = ""
    results: list[Product] = Field(default_factory=list)
    is_open: bool = False


# ============================================================================
# Store info & navigation
# ============================================================================


class SocialLinks(BaseModel):
    facebook: str = ""
    instagram: str = ""
    twitter: str = ""


class StoreInfo(BaseModel):
    """Storefront business metadata."""

    name: str = ""
    description: str = ""
    email: str = ""
    phone: str = ""
    address: str = ""
    social_links: SocialLinks = Field(default_factory=SocialLinks)


class View(str, Enum):
    """Storefront navigation targets."""

    HOME = "home"
    PRODUCTS = "products"
    ABOUT = "about"
    CONTACT = "contact"
    SEARCH = "search"
    CART = "cart"


__all__ = [
    "Position",
    "Size",
    "ComponentNode",
    "ThemeColors",
    "FontSizes",
    "ThemeFonts",
    "Spacing",
    "BorderRadius",
    "Theme",
    "PageMeta",
    "Page",
    "Product",
    "ImportedProduct",
    "CartLine",
    "Cart",
    "SearchState",
    "SocialLinks",
    "StoreInfo",
    "View",
]
