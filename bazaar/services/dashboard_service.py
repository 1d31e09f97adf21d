import logging
from decimal import Decimal
from typing import Dict, List, Optional

from bazaar.db.supabase import StoreError, execute
from bazaar.i18n import category_display
from bazaar.models.schemas import (
    CategoryStats,
    Dashboard,
    DashboardStats,
    OrderStatus,
    TopProduct,
)

logger = logging.getLogger("bazaar.dashboard")
logger.setLevel(logging.INFO)

TOP_PRODUCTS_LIMIT = 10

ORDER_ITEM_COLUMNS = "id, quantity, price, product_id, products (id, name, category, price, stock_quantity)"


class DashboardLoadError(Exception):
    pass


def _money(value) -> Decimal:
    return Decimal(str(value or 0))


def aggregate(products: List[dict], orders: List[dict], order_items: List[dict]) -> Dashboard:
    """Roll the three raw tables up into dashboard figures.

    Order-item categories come from the product embedded at query time, so a
    product moved to another category takes its past sales with it.
    """
    status_counts = {s.value: 0 for s in OrderStatus}
    total_revenue = Decimal(0)
    for order in orders:
        status = order.get("status")
        if status in status_counts:
            status_counts[status] += 1
        total_revenue += _money(order.get("total_price"))

    total_inventory_value = Decimal(0)
    categories: Dict[str, CategoryStats] = {}
    for product in products:
        stock = int(product.get("stock_quantity") or 0)
        value = stock * _money(product.get("price"))
        total_inventory_value += value

        cat = product.get("category")
        if cat is None:
            continue
        if cat not in categories:
            display = category_display(cat)
            categories[cat] = CategoryStats(category=cat, icon=display.icon, color=display.color)
        stats = categories[cat]
        stats.product_count += 1
        stats.total_stock += stock
        stats.total_value += value

    top: Dict[str, TopProduct] = {}
    for item in order_items:
        quantity = int(item.get("quantity") or 0)
        revenue = quantity * _money(item.get("price"))
        embedded: Optional[dict] = item.get("products")

        cat = embedded.get("category") if embedded else None
        if cat is not None and cat in categories:
            stats = categories[cat]
            stats.orders_count += 1
            stats.ordered_quantity += quantity
            stats.revenue += revenue

        product_id = str(item.get("product_id"))
        entry = top.get(product_id)
        if entry is None:
            entry = top[product_id] = TopProduct(id=product_id)
        if embedded:
            entry.name = embedded.get("name") or "Unknown"
            entry.category = embedded.get("category") or "Unknown"
            entry.price = _money(embedded.get("price"))
            entry.stock_quantity = int(embedded.get("stock_quantity") or 0)
        entry.total_ordered += quantity
        entry.revenue += revenue

    # sorted() is stable, so ties keep first-seen order
    ranked = sorted(top.values(), key=lambda p: p.total_ordered, reverse=True)

    return Dashboard(
        stats=DashboardStats(
            total_products=len(products),
            total_orders=len(orders),
            status_counts=status_counts,
            total_revenue=total_revenue,
            total_inventory_value=total_inventory_value,
        ),
        categories=list(categories.values()),
        top_products=ranked[:TOP_PRODUCTS_LIMIT],
    )


def load_dashboard(client) -> Dashboard:
    try:
        products = execute(client.table("products").select("id, name, category, price, stock_quantity"))
        orders = execute(client.table("orders").select("id, status, total_price"))
        order_items = execute(client.table("order_items").select(ORDER_ITEM_COLUMNS))
    except StoreError as e:
        logger.error(f"Dashboard stats error: {e}")
        raise DashboardLoadError("Failed to load dashboard statistics")
    return aggregate(products, orders, order_items)
