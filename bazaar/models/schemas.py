from decimal import Decimal
from enum import Enum
from typing import Dict, List, NamedTuple, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Category(str, Enum):
    WOMENS_CLOTHING = "Women's Clothing"
    KITCHENWARE = "Kitchenware"
    ACCESSORIES = "Accessories"


class OrderStatus(str, Enum):
    PENDING = "Pending"
    CONFIRMED = "Confirmed"
    PREPARING = "Preparing"
    SHIPPED = "Shipped"
    DELIVERED = "Delivered"


SIZES = ["XS", "S", "M", "L", "XL"]


# ---------- Catalogue ----------

class ProductIn(BaseModel):
    name: str = Field(..., min_length=1)
    category: Category
    price: Decimal = Field(..., ge=0)
    stock_quantity: int = Field(..., ge=0)
    description: Optional[str] = None
    sizes: List[str] = Field(default_factory=list)
    colors: List[str] = Field(default_factory=list)
    images: List[str] = Field(default_factory=list, description="Image URLs or data: URLs to append")

    @field_validator("sizes")
    @classmethod
    def known_sizes(cls, v):
        unknown = [s for s in v if s not in SIZES]
        if unknown:
            raise ValueError(f"Unknown sizes: {unknown}")
        return v

    def row(self) -> dict:
        """Columns written to the products table."""
        return {
            "name": self.name,
            "category": self.category.value,
            "price": str(self.price),
            "stock_quantity": self.stock_quantity,
            "description": self.description,
        }


class ProductOut(BaseModel):
    id: str
    name: str
    category: str
    price: Decimal
    stock_quantity: int
    description: Optional[str] = None
    image: Optional[str] = None


class ProductDetail(ProductOut):
    images: List[str] = Field(default_factory=list)
    sizes: List[str] = Field(default_factory=list)
    colors: List[str] = Field(default_factory=list)


# ---------- Session-local cart ----------

class CartLineKey(NamedTuple):
    product_id: str
    size: Optional[str]
    color: Optional[str]


class CartLine(BaseModel):
    # stored camelCase in the session so existing browser carts stay readable
    model_config = ConfigDict(populate_by_name=True)

    product_id: str = Field(..., alias="productId")
    name: str
    price: Decimal
    quantity: int
    size: Optional[str] = None
    color: Optional[str] = None
    image: Optional[str] = None


class CartItemIn(BaseModel):
    product_id: str
    quantity: int = Field(1, gt=0)
    size: Optional[str] = None
    color: Optional[str] = None


class CartLineRef(BaseModel):
    product_id: str
    size: Optional[str] = None
    color: Optional[str] = None

    def key(self) -> CartLineKey:
        return CartLineKey(self.product_id, self.size, self.color)


class CartUpdate(CartLineRef):
    delta: int


class CartOut(BaseModel):
    items: List[CartLine]
    count: int
    total: Decimal


class WishlistToggle(BaseModel):
    product_id: str


class WishlistOut(BaseModel):
    ids: List[str]
    in_wishlist: Optional[bool] = None
    products: Optional[List[ProductOut]] = None


class LanguageIn(BaseModel):
    language: str = Field(..., pattern="^(en|ar)$")


# ---------- Orders ----------

class CheckoutIn(BaseModel):
    first_name: str = ""
    last_name: str = ""
    phone: str = ""
    address: str = ""
    state: str = ""
    notes: str = ""

    def missing_fields(self) -> List[str]:
        required = ("first_name", "last_name", "phone", "address", "state")
        return [f for f in required if not getattr(self, f).strip()]


class OrderItemOut(BaseModel):
    id: Optional[str] = None
    product_id: Optional[str] = None
    quantity: int
    price: Decimal
    size: Optional[str] = None
    color: Optional[str] = None
    product: Optional[dict] = None


class OrderOut(BaseModel):
    id: str
    status: str
    total_price: Decimal
    created_at: Optional[str] = None
    guest_name: Optional[str] = None
    guest_phone: Optional[str] = None
    guest_address: Optional[str] = None
    guest_state: Optional[str] = None
    guest_notes: Optional[str] = None
    status_label: Optional[str] = None
    items: List[OrderItemOut] = Field(default_factory=list)


class StatusUpdate(BaseModel):
    status: OrderStatus


class AdminLogin(BaseModel):
    password: str


# ---------- Dashboard ----------

class DashboardStats(BaseModel):
    total_products: int = 0
    total_orders: int = 0
    status_counts: Dict[str, int] = Field(default_factory=dict)
    total_revenue: Decimal = Decimal(0)
    total_inventory_value: Decimal = Decimal(0)


class CategoryStats(BaseModel):
    category: str
    product_count: int = 0
    total_stock: int = 0
    total_value: Decimal = Decimal(0)
    orders_count: int = 0
    ordered_quantity: int = 0
    revenue: Decimal = Decimal(0)
    icon: Optional[str] = None
    color: Optional[str] = None


class TopProduct(BaseModel):
    id: str
    name: str = "Unknown"
    category: str = "Unknown"
    price: Decimal = Decimal(0)
    stock_quantity: int = 0
    total_ordered: int = 0
    revenue: Decimal = Decimal(0)


class Dashboard(BaseModel):
    stats: DashboardStats
    categories: List[CategoryStats]
    top_products: List[TopProduct]
