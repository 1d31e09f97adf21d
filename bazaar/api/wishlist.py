from fastapi import APIRouter, Depends

from bazaar.api.cart import add_product_line
from bazaar.api.deps import get_session, store_failure
from bazaar.core.session import SessionState
from bazaar.db.supabase import StoreError, get_client
from bazaar.models.schemas import CartItemIn, CartOut, WishlistOut, WishlistToggle
from bazaar.services import products_service
from bazaar.services.cart_service import toggle_wishlist

router = APIRouter()


@router.get("/", response_model=WishlistOut)
def get_wishlist(session: SessionState = Depends(get_session), client=Depends(get_client)):
    ids = session.wishlist_ids()
    try:
        products = products_service.products_by_ids(client, ids)
    except StoreError as e:
        raise store_failure(str(e))
    return WishlistOut(ids=ids, products=products)


@router.post("/toggle", response_model=WishlistOut)
def toggle(payload: WishlistToggle, session: SessionState = Depends(get_session)):
    ids, member = toggle_wishlist(session.wishlist_ids(), payload.product_id)
    session.save_wishlist(ids)
    return WishlistOut(ids=ids, in_wishlist=member)


@router.post("/{product_id}/cart", response_model=CartOut)
def move_to_cart(product_id: str, session: SessionState = Depends(get_session), client=Depends(get_client)):
    return add_product_line(client, session, CartItemIn(product_id=product_id, quantity=1))
