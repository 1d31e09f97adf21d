import base64
import logging
from typing import Dict, List, Optional

from bazaar.db.supabase import execute
from bazaar.models.schemas import ProductDetail, ProductIn, ProductOut

logger = logging.getLogger("bazaar.products")
logger.setLevel(logging.INFO)


def primary_images(client, product_ids: List[str]) -> Dict[str, str]:
    """First image (lowest display_order) per product."""
    if not product_ids:
        return {}
    rows = execute(
        client.table("product_images")
        .select("product_id, image_url")
        .in_("product_id", product_ids)
        .order("display_order")
    )
    images: Dict[str, str] = {}
    for row in rows:
        images.setdefault(str(row["product_id"]), row["image_url"])
    return images


def _with_images(client, rows: List[dict]) -> List[ProductOut]:
    images = primary_images(client, [r["id"] for r in rows])
    return [ProductOut(**r, image=images.get(str(r["id"]))) for r in rows]


def list_products(client, category: Optional[str] = None) -> List[ProductOut]:
    query = client.table("products").select("*")
    if category:
        query = query.eq("category", category)
    return _with_images(client, execute(query))


def products_by_ids(client, ids: List[str]) -> List[ProductOut]:
    if not ids:
        return []
    return _with_images(client, execute(client.table("products").select("*").in_("id", ids)))


def search_products(client, search: Optional[str] = None) -> List[ProductOut]:
    """Admin listing, newest first, filtered on name or category."""
    rows = execute(client.table("products").select("*").order("created_at", desc=True))
    if search:
        term = search.lower()
        rows = [r for r in rows if term in r["name"].lower() or term in r["category"].lower()]
    return [ProductOut(**r) for r in rows]


def get_product(client, product_id: str) -> Optional[ProductDetail]:
    rows = execute(client.table("products").select("*").eq("id", product_id).limit(1))
    if not rows:
        return None
    images = execute(
        client.table("product_images").select("*").eq("product_id", product_id).order("display_order")
    )
    sizes = execute(client.table("product_sizes").select("size").eq("product_id", product_id))
    colors = execute(client.table("product_colors").select("color").eq("product_id", product_id))
    urls = [img["image_url"] for img in images]
    return ProductDetail(
        **rows[0],
        image=urls[0] if urls else None,
        images=urls,
        sizes=[s["size"] for s in sizes],
        colors=[c["color"] for c in colors],
    )


def _insert_variants(client, product_id: str, payload: ProductIn):
    if payload.sizes:
        execute(client.table("product_sizes").insert([{"product_id": product_id, "size": s} for s in payload.sizes]))
    colors = []
    for color in payload.colors:
        color = color.strip()
        if color and color not in colors:
            colors.append(color)
    if colors:
        execute(client.table("product_colors").insert([{"product_id": product_id, "color": c} for c in colors]))


def append_images(client, product_id: str, urls: List[str]) -> List[str]:
    """Add images after the ones already stored for the product."""
    if not urls:
        return []
    existing = execute(client.table("product_images").select("id").eq("product_id", product_id))
    start = len(existing)
    rows = [
        {"product_id": product_id, "image_url": url, "display_order": start + i}
        for i, url in enumerate(urls)
    ]
    execute(client.table("product_images").insert(rows))
    return urls


def create_product(client, payload: ProductIn) -> ProductDetail:
    ins = execute(client.table("products").insert(payload.row()))
    product_id = str(ins[0]["id"])
    _insert_variants(client, product_id, payload)
    append_images(client, product_id, payload.images)
    logger.info(f"Created product {product_id} ({payload.name})")
    return get_product(client, product_id)


def update_product(client, product_id: str, payload: ProductIn) -> Optional[ProductDetail]:
    """Update the row, replace sizes and colors, append any new images."""
    updated = execute(client.table("products").update(payload.row()).eq("id", product_id))
    if not updated:
        return None
    execute(client.table("product_sizes").delete().eq("product_id", product_id))
    execute(client.table("product_colors").delete().eq("product_id", product_id))
    _insert_variants(client, product_id, payload)
    append_images(client, product_id, payload.images)
    return get_product(client, product_id)


def delete_product(client, product_id: str) -> bool:
    deleted = execute(client.table("products").delete().eq("id", product_id))
    return bool(deleted)


def to_data_url(content: bytes, content_type: Optional[str]) -> str:
    encoded = base64.b64encode(content).decode("ascii")
    return f"data:{content_type or 'application/octet-stream'};base64,{encoded}"
