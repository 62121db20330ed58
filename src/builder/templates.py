"""Storefront component templates with default props and generated ids."""

from typing import Any

from core.id import new_component_id
from .models import ComponentNode, Position, Size


def _node(type_: str, props: dict[str, Any], x: float, y: float, width: float, height: float,
          children: list[ComponentNode] | None = None, id: str | None = None) -> ComponentNode:
    return ComponentNode(
        id=id or new_component_id(),
        type=type_,
        props=props,
        children=children or [],
        position=Position(x=x, y=y),
        size=Size(width=width, height=height),
    )


class Templates:
    """Component factories for the builder palette."""

    @staticmethod
    def hero(title: str = "Welcome to Your Store",
             subtitle: str = "Discover amazing products at unbeatable prices",
             button_text: str = "Shop Now", x: float = 0, y: float = 0,
             id: str | None = None) -> ComponentNode:
        return _node(
            "hero",
            {
                "title": title,
                "subtitle": subtitle,
                "buttonText": button_text,
                "backgroundImage": "/api/placeholder/1200/400",
                "overlay": True,
            },
            x, y, 1200, 400, id=id,
        )

    @staticmethod
    def product_grid(title: str = "Featured Products", columns: int = 3,
                     show_view_all: bool = True, x: float = 0, y: float = 0,
                     id: str | None = None) -> ComponentNode:
        if not 1 <= columns <= 4:
            raise ValueError("columns must be between 1 and 4")
        return _node(
            "product-grid",
            {"title": title, "columns": columns, "showViewAll": show_view_all},
            x, y, 1200, 600, id=id,
        )

    @staticmethod
    def product_card(name: str = "Sample Product", price: str = "$99", rating: float = 4.5,
                     reviews: int = 127, x: float = 0, y: float = 0,
                     id: str | None = None) -> ComponentNode:
        return _node(
            "product-card",
            {
                "name": name,
                "price": price,
                "image": "/api/placeholder/300/200",
                "rating": rating,
                "reviews": reviews,
            },
            x, y, 300, 400, id=id,
        )

    @staticmethod
    def cart_icon(item_count: int = 0, show_badge: bool = True, x: float = 0, y: float = 0,
                  id: str | None = None) -> ComponentNode:
        return _node("cart-icon", {"itemCount": item_count, "showBadge": show_badge}, x, y, 48, 48, id=id)

    @staticmethod
    def newsletter(title: str = "Stay Updated",
                   subtitle: str = "Get the latest deals and new arrivals in your inbox.",
                   button_text: str = "Subscribe", x: float = 0, y: float = 0,
                   id: str | None = None) -> ComponentNode:
        return _node(
            "newsletter",
            {
                "title": title,
                "subtitle": subtitle,
                "placeholder": "Enter your email address",
                "buttonText": button_text,
            },
            x, y, 1200, 240, id=id,
        )

    @staticmethod
    def features(items: list[dict[str, str]] | None = None, x: float = 0, y: float = 0,
                 id: str | None = None) -> ComponentNode:
        items = items if items is not None else [
            {"icon": "truck", "title": "Free Shipping", "description": "On orders over $50"},
        ]
        return _node("features", {"features": items}, x, y, 1200, 200, id=id)

    @staticmethod
    def container(children: list[ComponentNode], layout: str = "vertical", gap: int = 0,
                  x: float = 0, y: float = 0, id: str | None = None) -> ComponentNode:
        return _node("container", {"layout": layout, "gap": gap}, x, y, 1200, 800,
                     children=children, id=id)


__all__ = ["Templates"]
