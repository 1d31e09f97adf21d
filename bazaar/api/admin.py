from typing import List, Optional

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile

from bazaar.api.deps import require_admin, store_failure
from bazaar.db.supabase import StoreError, get_client
from bazaar.models.schemas import Dashboard, OrderOut, ProductDetail, ProductIn, ProductOut, StatusUpdate
from bazaar.services import orders_service, products_service
from bazaar.services.dashboard_service import DashboardLoadError, load_dashboard

router = APIRouter(dependencies=[Depends(require_admin)])


# ---------- Dashboard ----------

@router.get("/dashboard", response_model=Dashboard)
def dashboard(client=Depends(get_client)):
    try:
        return load_dashboard(client)
    except DashboardLoadError as e:
        raise store_failure(str(e))


# ---------- Products ----------

@router.get("/products", response_model=List[ProductOut])
def list_products(search: Optional[str] = None, client=Depends(get_client)):
    try:
        return products_service.search_products(client, search)
    except StoreError:
        raise store_failure("Failed to load products")


@router.get("/products/{product_id}", response_model=ProductDetail)
def get_product(product_id: str, client=Depends(get_client)):
    try:
        product = products_service.get_product(client, product_id)
    except StoreError:
        raise store_failure("Failed to load product")
    if product is None:
        raise HTTPException(status_code=404, detail="Product not found")
    return product


@router.post("/products", response_model=ProductDetail, status_code=201)
def create_product(payload: ProductIn, client=Depends(get_client)):
    try:
        return products_service.create_product(client, payload)
    except StoreError as e:
        raise store_failure(str(e) or "Failed to save product")


@router.put("/products/{product_id}", response_model=ProductDetail)
def update_product(product_id: str, payload: ProductIn, client=Depends(get_client)):
    try:
        product = products_service.update_product(client, product_id, payload)
    except StoreError as e:
        raise store_failure(str(e) or "Failed to save product")
    if product is None:
        raise HTTPException(status_code=404, detail="Product not found")
    return product


@router.delete("/products/{product_id}")
def delete_product(product_id: str, client=Depends(get_client)):
    try:
        deleted = products_service.delete_product(client, product_id)
    except StoreError:
        raise store_failure("Failed to delete product")
    if not deleted:
        raise HTTPException(status_code=404, detail="Product not found")
    return {"deleted": True}


@router.post("/products/{product_id}/images", response_model=List[str])
async def upload_images(product_id: str, files: List[UploadFile] = File(...), client=Depends(get_client)):
    urls = []
    for f in files:
        urls.append(products_service.to_data_url(await f.read(), f.content_type))
    try:
        return products_service.append_images(client, product_id, urls)
    except StoreError as e:
        raise store_failure(str(e))


# ---------- Orders ----------

@router.get("/orders", response_model=List[OrderOut])
def list_orders(status: Optional[str] = None, client=Depends(get_client)):
    try:
        return orders_service.list_orders(client, status)
    except StoreError:
        raise store_failure("Failed to load orders")


@router.get("/orders/{order_id}", response_model=OrderOut)
def get_order(order_id: str, client=Depends(get_client)):
    try:
        order = orders_service.get_order(client, order_id)
    except StoreError:
        raise store_failure("Failed to load order details")
    if order is None:
        raise HTTPException(status_code=404, detail="Order not found")
    return order


@router.patch("/orders/{order_id}/status", response_model=OrderOut)
def update_status(order_id: str, payload: StatusUpdate, client=Depends(get_client)):
    try:
        order = orders_service.update_status(client, order_id, payload.status)
    except StoreError:
        raise store_failure("Failed to update order status")
    if order is None:
        raise HTTPException(status_code=404, detail="Order not found")
    return order
