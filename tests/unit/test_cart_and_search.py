"""Tests for cart, catalog and search state."""

from decimal import Decimal

import pytest

from builder import Product, View


def recomputed(cart):
    """Totals computed independently of the cart's own properties."""
    items = sum(line.quantity for line in cart.items)
    price = sum((line.price * line.quantity for line in cart.items), Decimal("0"))
    return items, price


@pytest.fixture
def catalog_store(store, sample_products):
    store.set_products(sample_products)
    return store


# ============================================================================
# Cart
# ============================================================================

@pytest.mark.unit
def test_add_to_cart_creates_line(catalog_store):
    catalog_store.add_to_cart(catalog_store.products[0])

    cart = catalog_store.cart
    assert [line.product_id for line in cart.items] == ["p1"]
    assert cart.total_items == 1
    assert cart.total_price == Decimal("39.99")


@pytest.mark.unit
def test_adding_same_product_bumps_quantity(catalog_store):
    shirt = catalog_store.products[0]
    catalog_store.add_to_cart(shirt)
    line = catalog_store.add_to_cart(shirt)

    assert line.quantity == 2
    assert len(catalog_store.cart.items) == 1
    assert catalog_store.cart.total_items == 2
    assert catalog_store.cart.total_price == Decimal("79.98")


@pytest.mark.unit
def test_add_to_cart_accepts_mapping(store):
    store.add_to_cart({"id": 7, "name": "Gift Card", "price": "25"})
    assert store.cart.items[0].product_id == "7"
    assert store.cart.total_price == Decimal("25")


@pytest.mark.unit
def test_remove_from_cart(catalog_store):
    for product in catalog_store.products[:3]:
        catalog_store.add_to_cart(product)

    assert catalog_store.remove_from_cart("p2")
    assert [line.product_id for line in catalog_store.cart.items] == ["p1", "p3"]
    assert catalog_store.cart.total_items == 2
    assert catalog_store.cart.total_price == Decimal("69.49")


@pytest.mark.unit
def test_remove_missing_product_keeps_totals(catalog_store):
    """Removing an absent product must not touch the totals."""
    catalog_store.add_to_cart(catalog_store.products[0])

    assert catalog_store.remove_from_cart("nope") is False
    assert catalog_store.cart.total_items == 1
    assert catalog_store.cart.total_price == Decimal("39.99")


@pytest.mark.unit
def test_update_cart_quantity(catalog_store):
    catalog_store.add_to_cart(catalog_store.products[0])
    catalog_store.add_to_cart(catalog_store.products[3])

    assert catalog_store.update_cart_quantity("p1", 3)
    assert catalog_store.cart.total_items == 4
    assert catalog_store.cart.total_price == Decimal("39.99") * 3 + Decimal("12")

    # Setting the same quantity again must not drift
    catalog_store.update_cart_quantity("p1", 3)
    assert catalog_store.cart.total_items == 4


@pytest.mark.unit
def test_update_cart_quantity_zero_removes_line(catalog_store):
    catalog_store.add_to_cart(catalog_store.products[0])
    catalog_store.update_cart_quantity("p1", 0)

    assert catalog_store.cart.items == []
    assert catalog_store.cart.total_items == 0
    assert catalog_store.cart.total_price == Decimal("0")


@pytest.mark.unit
def test_update_cart_quantity_unknown_is_noop(catalog_store):
    assert catalog_store.update_cart_quantity("p9", 5) is False
    assert catalog_store.cart.total_items == 0


@pytest.mark.unit
def test_cart_totals_match_lines_after_mixed_operations(catalog_store):
    products = catalog_store.products
    steps = [
        lambda: catalog_store.add_to_cart(products[0]),
        lambda: catalog_store.add_to_cart(products[1]),
        lambda: catalog_store.add_to_cart(products[0]),
        lambda: catalog_store.update_cart_quantity("p2", 4),
        lambda: catalog_store.remove_from_cart("p1"),
        lambda: catalog_store.remove_from_cart("p1"),
        lambda: catalog_store.update_cart_quantity("p2", 1),
        lambda: catalog_store.add_to_cart(products[4]),
    ]
    for step in steps:
        step()
        cart = catalog_store.cart
        assert (cart.total_items, cart.total_price) == recomputed(cart)


@pytest.mark.unit
def test_toggle_and_clear_cart(catalog_store):
    catalog_store.add_to_cart(catalog_store.products[0])
    catalog_store.toggle_cart()
    assert catalog_store.cart.is_open

    catalog_store.clear_cart()
    assert catalog_store.cart.items == []
    assert catalog_store.cart.is_open is False
    assert catalog_store.cart.total_items == 0


@pytest.mark.unit
def test_cart_dump_includes_totals(catalog_store):
    catalog_store.add_to_cart(catalog_store.products[3])
    dumped = catalog_store.cart.model_dump(mode="json")
    assert dumped["total_items"] == 1
    assert Decimal(dumped["total_price"]) == Decimal("12")


# ============================================================================
# Catalog
# ============================================================================

@pytest.mark.unit
def test_set_products_coerces_non_list(store):
    store.set_products({"id": "p1"})
    assert store.products == []

    store.set_products(None)
    assert store.products == []


@pytest.mark.unit
def test_set_products_skips_invalid_entries(store):
    store.set_products([
        {"id": "ok", "name": "Fine", "price": "1"},
        {"id": "bad", "name": "Negative", "price": "-5"},
        {"name": "No id", "price": "2"},
    ])
    assert [p.id for p in store.products] == ["ok"]


@pytest.mark.unit
def test_set_products_keeps_extra_fields(store):
    store.set_products([{"id": "p", "name": "P", "price": 3, "rating": 4.5}])
    assert store.products[0].model_extra == {"rating": 4.5}


@pytest.mark.unit
def test_imported_products(store):
    store.set_imported_products([
        {"id": "i1", "title": "Imported", "price": "9.5", "source": "partner"},
    ])
    assert store.imported_products[0].source == "partner"

    store.clear_imported_products()
    assert store.imported_products == []


# ============================================================================
# Search
# ============================================================================

@pytest.mark.unit
def test_blank_query_yields_no_results(catalog_store):
    catalog_store.set_search_query("   ")
    assert catalog_store.perform_search() == []
    assert catalog_store.search.results == []


@pytest.mark.unit
def test_search_matches_name_and_category_in_catalog_order(catalog_store):
    catalog_store.set_search_query("SHIRT")
    results = catalog_store.perform_search()
    assert [p.id for p in results] == ["p1", "p3"]


@pytest.mark.unit
def test_search_matches_description(catalog_store):
    catalog_store.set_search_query("hydrating")
    assert [p.id for p in catalog_store.perform_search()] == ["p5"]


@pytest.mark.unit
def test_set_query_does_not_recompute(catalog_store):
    catalog_store.set_search_query("shirt")
    catalog_store.perform_search()

    catalog_store.set_search_query("mug")
    assert [p.id for p in catalog_store.search.results] == ["p1", "p3"]

    catalog_store.perform_search()
    assert [p.id for p in catalog_store.search.results] == ["p4"]


@pytest.mark.unit
def test_search_recomputes_from_current_catalog(catalog_store):
    catalog_store.set_search_query("shirt")
    catalog_store.set_products([Product(id="n", name="Night Shirt", price=Decimal("5"))])
    assert [p.id for p in catalog_store.perform_search()] == ["n"]


@pytest.mark.unit
def test_toggle_search(store):
    store.toggle_search()
    assert store.search.is_open
    store.toggle_search()
    assert not store.search.is_open


# ============================================================================
# Navigation & modes
# ============================================================================

@pytest.mark.unit
def test_set_current_view(store):
    store.set_current_view("cart")
    assert store.current_view is View.CART

    store.set_current_view(View.ABOUT)
    assert store.current_view is View.ABOUT


@pytest.mark.unit
def test_set_current_view_rejects_unknown(store):
    with pytest.raises(ValueError):
        store.set_current_view("checkout")
    assert store.current_view is View.HOME


@pytest.mark.unit
def test_toggle_editing_and_preview(store):
    store.toggle_editing()
    store.toggle_preview()
    assert store.is_editing and store.is_preview
    store.toggle_editing()
    assert not store.is_editing
