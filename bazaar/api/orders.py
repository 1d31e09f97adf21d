import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException

from bazaar.api.deps import get_language, get_session, store_failure
from bazaar.core.session import SessionKey, SessionState
from bazaar.db.supabase import StoreError, get_client
from bazaar.i18n import status_label, t
from bazaar.models.schemas import CheckoutIn, OrderOut
from bazaar.services.orders_service import ALGERIAN_STATES, get_order, place_guest_order, track_orders

logger = logging.getLogger("bazaar.orders")

router = APIRouter()


def labelled(order: OrderOut, lang: str) -> OrderOut:
    order.status_label = status_label(order.status, lang)
    return order


@router.post("/checkout", response_model=OrderOut)
def checkout(form: CheckoutIn, session: SessionState = Depends(get_session), client=Depends(get_client)):
    lang = session.language()
    if form.missing_fields():
        raise HTTPException(status_code=400, detail=t("fill_required", lang))
    lines = session.cart_lines()
    if not lines:
        raise HTTPException(status_code=400, detail=t("cart_empty", lang))
    try:
        order = place_guest_order(client, form, lines)
    except StoreError as e:
        logger.error(f"Checkout error: {e}")
        raise store_failure(str(e) or t("order_failed", lang))
    session.clear(SessionKey.CART)
    return labelled(order, lang)


@router.get("/states", response_model=List[str])
def states():
    return ALGERIAN_STATES


@router.get("/track", response_model=List[OrderOut])
def track(phone: Optional[str] = None, client=Depends(get_client), lang: str = Depends(get_language)):
    try:
        orders = track_orders(client, phone)
    except StoreError:
        raise store_failure(t("load_orders_error", lang))
    return [labelled(o, lang) for o in orders]


@router.get("/{order_id}", response_model=OrderOut)
def confirmation(order_id: str, client=Depends(get_client), lang: str = Depends(get_language)):
    try:
        order = get_order(client, order_id)
    except StoreError:
        raise store_failure("Failed to load order details")
    if order is None:
        raise HTTPException(status_code=404, detail=t("order_not_found", lang))
    return labelled(order, lang)
