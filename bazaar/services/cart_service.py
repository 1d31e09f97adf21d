"""
Cart and wishlist merging.

Plain functions over the session-held collections. None of them mutate their
input; each returns the full new collection, which the caller writes back to
the session in one go.
"""
from decimal import Decimal
from typing import List, Tuple

from bazaar.models.schemas import CartLine, CartLineKey


def line_key(line: CartLine) -> CartLineKey:
    return CartLineKey(line.product_id, line.size, line.color)


def add_to_cart(lines: List[CartLine], new_line: CartLine) -> List[CartLine]:
    """Merge into the line with the same (product, size, color) or append.

    The existing line keeps its name, price and image; only the quantity grows.
    Quantity must already be checked positive.
    """
    key = line_key(new_line)
    result = []
    merged = False
    for line in lines:
        if not merged and line_key(line) == key:
            line = line.model_copy(update={"quantity": line.quantity + new_line.quantity})
            merged = True
        result.append(line)
    if not merged:
        result.append(new_line.model_copy())
    return result


def update_quantity(lines: List[CartLine], key: CartLineKey, delta: int) -> List[CartLine]:
    result = []
    for line in lines:
        if line_key(line) == key:
            quantity = max(0, line.quantity + delta)
            if quantity == 0:
                continue
            line = line.model_copy(update={"quantity": quantity})
        result.append(line)
    return result


def remove_line(lines: List[CartLine], key: CartLineKey) -> List[CartLine]:
    return [line for line in lines if line_key(line) != key]


def cart_total(lines: List[CartLine]) -> Decimal:
    return sum((line.price * line.quantity for line in lines), Decimal(0))


def cart_count(lines: List[CartLine]) -> int:
    return sum(line.quantity for line in lines)


def toggle_wishlist(ids: List[str], product_id: str) -> Tuple[List[str], bool]:
    """Remove the first occurrence of product_id, or append it. Returns (ids, now_member)."""
    result = list(ids)
    if product_id in result:
        result.remove(product_id)
        return result, False
    result.append(product_id)
    return result, True
