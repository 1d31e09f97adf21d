from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException

from bazaar.api.deps import get_language, store_failure
from bazaar.db.supabase import StoreError, get_client
from bazaar.i18n import CATEGORY_DISPLAY, category_from_slug, t
from bazaar.models.schemas import ProductDetail, ProductOut
from bazaar.services import products_service

router = APIRouter()


@router.get("/", response_model=List[ProductOut])
def list_products(category: Optional[str] = None, client=Depends(get_client)):
    try:
        return products_service.list_products(client, category_from_slug(category))
    except StoreError as e:
        raise store_failure(str(e))


@router.get("/{product_id}", response_model=ProductDetail)
def get_product(product_id: str, client=Depends(get_client), lang: str = Depends(get_language)):
    try:
        product = products_service.get_product(client, product_id)
    except StoreError:
        raise store_failure("Failed to load product details")
    if product is None:
        raise HTTPException(status_code=404, detail=t("product_not_found", lang))
    return product


categories_router = APIRouter()


@categories_router.get("/")
def list_categories():
    return [
        {"name": name, "slug": d.slug, "icon": d.icon, "color": d.color, "label": {"en": name, "ar": d.label_ar}}
        for name, d in CATEGORY_DISPLAY.items()
    ]
