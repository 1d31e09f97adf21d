from fastapi import APIRouter, Depends, HTTPException

from bazaar.api.deps import get_session, store_failure
from bazaar.core.session import SessionKey, SessionState
from bazaar.db.supabase import StoreError, get_client
from bazaar.i18n import t
from bazaar.models.schemas import CartItemIn, CartLine, CartLineRef, CartOut, CartUpdate, Category
from bazaar.services import products_service
from bazaar.services.cart_service import (
    add_to_cart,
    cart_count,
    cart_total,
    remove_line,
    update_quantity,
)

router = APIRouter()

PLACEHOLDER_IMAGE = "/placeholder.svg"


def cart_view(lines) -> CartOut:
    return CartOut(items=lines, count=cart_count(lines), total=cart_total(lines))


def add_product_line(client, session: SessionState, item: CartItemIn) -> CartOut:
    """Snapshot the product into a cart line and merge it into the session cart."""
    lang = session.language()
    try:
        product = products_service.get_product(client, item.product_id)
    except StoreError as e:
        raise store_failure(str(e))
    if product is None:
        raise HTTPException(status_code=404, detail=t("product_not_found", lang))
    if product.category == Category.WOMENS_CLOTHING.value and not item.size:
        raise HTTPException(status_code=400, detail=t("select_size", lang))

    line = CartLine(
        product_id=product.id,
        name=product.name,
        price=product.price,
        quantity=item.quantity,
        size=item.size or None,
        color=item.color or None,
        image=product.image or PLACEHOLDER_IMAGE,
    )
    lines = add_to_cart(session.cart_lines(), line)
    session.save_cart(lines)
    return cart_view(lines)


@router.get("/", response_model=CartOut)
def get_cart(session: SessionState = Depends(get_session)):
    return cart_view(session.cart_lines())


@router.post("/add", response_model=CartOut)
def add(item: CartItemIn, session: SessionState = Depends(get_session), client=Depends(get_client)):
    return add_product_line(client, session, item)


@router.post("/update", response_model=CartOut)
def update(payload: CartUpdate, session: SessionState = Depends(get_session)):
    lines = update_quantity(session.cart_lines(), payload.key(), payload.delta)
    session.save_cart(lines)
    return cart_view(lines)


@router.post("/remove", response_model=CartOut)
def remove(payload: CartLineRef, session: SessionState = Depends(get_session)):
    lines = remove_line(session.cart_lines(), payload.key())
    session.save_cart(lines)
    return cart_view(lines)


@router.delete("/", response_model=CartOut)
def clear(session: SessionState = Depends(get_session)):
    session.clear(SessionKey.CART)
    return cart_view([])
