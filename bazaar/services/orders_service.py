import logging
from typing import List, Optional

from bazaar.db.supabase import StoreError, execute
from bazaar.i18n import t
from bazaar.models.schemas import CartLine, CheckoutIn, OrderItemOut, OrderOut, OrderStatus
from bazaar.services.cart_service import cart_total

logger = logging.getLogger("bazaar.orders")
logger.setLevel(logging.INFO)

TRACK_COLUMNS = (
    "id, status, total_price, created_at, guest_name, guest_phone, guest_address, guest_state, guest_notes, "
    "order_items (id, product_id, quantity, price, size, color, products (id, name, category))"
)

ALGERIAN_STATES = [
    "Adrar", "Chlef", "Laghouat", "Oum El Bouaghi", "Batna", "Béjaïa", "Bichar", "Blida",
    "Bouïra", "Tamanrasset", "Tébessa", "Tlemcen", "Tiaret", "Tizi Ouzou", "Alger", "Djelfa",
    "Jijel", "Sétif", "Saïda", "Skikda", "Sidi Belabbès", "Annaba", "Guelma", "Constantine",
    "Médéa", "Mostaganem", "M'Sila", "Mascara", "Ouargla", "Oran", "El Bayadh", "Illizi",
    "Bordj Bou Arréridj", "Boumerdès", "El Tarf", "Tindouf", "Tissemsilt", "El Oued",
    "Khenchela", "Souk Ahras", "Tipaza", "Mila", "Aïn Defla", "Naama", "Aïn Témouchent",
    "Ghardaïa", "Relizane",
]


def _item(row: dict) -> OrderItemOut:
    return OrderItemOut(
        id=str(row["id"]) if row.get("id") is not None else None,
        product_id=str(row["product_id"]) if row.get("product_id") is not None else None,
        quantity=row["quantity"],
        price=row["price"],
        size=row.get("size"),
        color=row.get("color"),
        product=row.get("products"),
    )


def _order(row: dict, items: List[dict]) -> OrderOut:
    fields = {k: v for k, v in row.items() if k != "order_items"}
    fields["id"] = str(fields["id"])
    return OrderOut(**fields, items=[_item(i) for i in items])


def place_guest_order(client, form: CheckoutIn, lines: List[CartLine]) -> OrderOut:
    """Write a guest order and its items from the cart lines.

    The order row goes in first; if the items insert fails the order row is
    left behind, as the store offers no transaction here.
    """
    total = cart_total(lines)
    order = execute(client.table("orders").insert({
        "user_id": None,
        "guest_name": f"{form.first_name.strip()} {form.last_name.strip()}",
        "guest_phone": form.phone.strip(),
        "guest_address": form.address.strip(),
        "guest_state": form.state.strip(),
        "guest_notes": form.notes,
        "status": OrderStatus.PENDING.value,
        "total_price": str(total),
    }))
    if not order:
        logger.error("Order insert returned no row")
        raise StoreError(t("order_failed"))
    order_id = order[0]["id"]
    logger.info(f"Order {order_id} created for {len(lines)} cart lines, total {total}")

    items = [
        {
            "order_id": order_id,
            "product_id": line.product_id,
            "quantity": line.quantity,
            "price": str(line.price),
            "size": line.size,
            "color": line.color,
        }
        for line in lines
    ]
    try:
        inserted = execute(client.table("order_items").insert(items))
    except StoreError:
        logger.error(f"Order items for order {order_id} could not be written")
        raise
    return _order(order[0], inserted)


def get_order(client, order_id: str) -> Optional[OrderOut]:
    rows = execute(client.table("orders").select("*").eq("id", order_id).limit(1))
    if not rows:
        return None
    items = execute(client.table("order_items").select("*").eq("order_id", order_id))
    return _order(rows[0], items)


def track_orders(client, phone: Optional[str] = None) -> List[OrderOut]:
    query = client.table("orders").select(TRACK_COLUMNS)
    if phone:
        query = query.eq("guest_phone", phone.strip())
    rows = execute(query.order("created_at", desc=True))
    return [_order(r, r.get("order_items") or []) for r in rows]


def list_orders(client, status: Optional[str] = None) -> List[OrderOut]:
    query = client.table("orders").select("*")
    if status and status != "all":
        query = query.eq("status", status)
    rows = execute(query.order("created_at", desc=True))
    return [_order(r, []) for r in rows]


def update_status(client, order_id: str, status: OrderStatus) -> Optional[OrderOut]:
    updated = execute(client.table("orders").update({"status": status.value}).eq("id", order_id))
    if not updated:
        return None
    logger.info(f"Order {order_id} moved to {status.value}")
    return get_order(client, order_id)
