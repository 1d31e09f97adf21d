from decimal import Decimal

from bazaar.models.schemas import CartLine, CartLineKey
from bazaar.services.cart_service import (
    add_to_cart,
    cart_count,
    cart_total,
    line_key,
    remove_line,
    toggle_wishlist,
    update_quantity,
)


def line(product_id="p1", quantity=1, size=None, color=None, price="10", name="Item"):
    return CartLine(product_id=product_id, name=name, price=Decimal(price), quantity=quantity, size=size, color=color)


def test_add_merges_matching_line():
    cart = [line("p1", 2, size="M")]
    result = add_to_cart(cart, line("p1", 1, size="M"))
    assert len(result) == 1
    assert result[0].quantity == 3
    # input untouched
    assert cart[0].quantity == 2


def test_add_keeps_first_snapshot_fields():
    cart = [line("p1", 1, name="Old name", price="10")]
    result = add_to_cart(cart, line("p1", 4, name="New name", price="12"))
    assert result[0].name == "Old name"
    assert result[0].price == Decimal("10")
    assert result[0].quantity == 5


def test_add_appends_when_variant_differs():
    cart = [line("p1", 1, size="M")]
    result = add_to_cart(cart, line("p1", 1, size="L"))
    assert [l.size for l in result] == ["M", "L"]


def test_missing_size_is_distinct_from_concrete_size():
    cart = [line("p1", 1, size=None)]
    result = add_to_cart(cart, line("p1", 1, size="M"))
    assert len(result) == 2
    result = add_to_cart(result, line("p1", 2, size=None))
    assert len(result) == 2
    assert result[0].quantity == 3


def test_add_changes_length_by_at_most_one():
    cart = [line("p1"), line("p2", color="Red")]
    for new in (line("p1"), line("p2", color="Red"), line("p3"), line("p2", color="Blue")):
        before = len(cart)
        cart = add_to_cart(cart, new)
        assert len(cart) - before in (0, 1)


def test_update_quantity_to_zero_removes_line():
    cart = [line("p1", 1), line("p2", 3)]
    result = update_quantity(cart, CartLineKey("p1", None, None), -1)
    assert [l.product_id for l in result] == ["p2"]


def test_update_quantity_never_negative():
    cart = [line("p1", 2)]
    result = update_quantity(cart, CartLineKey("p1", None, None), -10)
    assert result == []


def test_update_quantity_increase():
    cart = [line("p1", 2, size="S")]
    result = update_quantity(cart, CartLineKey("p1", "S", None), 3)
    assert result[0].quantity == 5


def test_update_quantity_unknown_key_is_noop():
    cart = [line("p1", 2)]
    result = update_quantity(cart, CartLineKey("p9", None, None), -1)
    assert result == cart


def test_remove_line_is_idempotent():
    cart = [line("p1", size="M"), line("p1", size="L")]
    key = CartLineKey("p1", "M", None)
    once = remove_line(cart, key)
    twice = remove_line(once, key)
    assert once == twice
    assert [line_key(l) for l in once] == [CartLineKey("p1", "L", None)]


def test_cart_total_and_count():
    cart = [line("p1", 2, price="40"), line("p2", 3, price="15.5")]
    assert cart_total(cart) == Decimal("126.5")
    assert cart_count(cart) == 5
    assert cart_total([]) == Decimal(0)


def test_toggle_wishlist_adds_and_removes():
    ids, member = toggle_wishlist(["a"], "b")
    assert ids == ["a", "b"]
    assert member is True
    ids, member = toggle_wishlist(ids, "a")
    assert ids == ["b"]
    assert member is False


def test_toggle_wishlist_is_its_own_inverse():
    for start in ([], ["a"], ["a", "b", "c"]):
        for pid in ("a", "b", "z"):
            once, _ = toggle_wishlist(start, pid)
            twice, _ = toggle_wishlist(once, pid)
            assert set(twice) == set(start)
            assert len(twice) == len(start)
