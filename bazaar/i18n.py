from typing import Dict, NamedTuple, Optional

from bazaar.models.schemas import Category, OrderStatus

LANGUAGES = ("en", "ar")
DEFAULT_LANGUAGE = "en"

MESSAGES: Dict[str, Dict[str, str]] = {
    "select_size": {"en": "Please select a size", "ar": "يرجى اختيار المقاس"},
    "fill_required": {"en": "Please fill all required fields", "ar": "يرجى ملء جميع الحقول المطلوبة"},
    "cart_empty": {"en": "Your cart is empty", "ar": "السلة فارغة"},
    "order_failed": {"en": "Failed to create order", "ar": "فشل إنشاء الطلب"},
    "load_orders_error": {"en": "Error loading orders", "ar": "حدث خطأ في تحميل الطلبات"},
    "product_not_found": {"en": "Product not found", "ar": "المنتج غير موجود"},
    "order_not_found": {"en": "Order not found", "ar": "الطلب غير موجود"},
    "invalid_password": {"en": "Invalid password", "ar": "كلمة المرور غير صحيحة"},
}


def t(key: str, lang: Optional[str] = DEFAULT_LANGUAGE) -> str:
    entry = MESSAGES.get(key)
    if entry is None:
        return key
    return entry.get(lang or DEFAULT_LANGUAGE) or entry[DEFAULT_LANGUAGE]


STATUS_LABELS: Dict[OrderStatus, Dict[str, str]] = {
    OrderStatus.PENDING: {"en": "Pending", "ar": "قيد الانتظار"},
    OrderStatus.CONFIRMED: {"en": "Confirmed", "ar": "مؤكد"},
    OrderStatus.PREPARING: {"en": "Preparing", "ar": "قيد التحضير"},
    OrderStatus.SHIPPED: {"en": "Shipped", "ar": "تم الشحن"},
    OrderStatus.DELIVERED: {"en": "Delivered", "ar": "تم التسليم"},
}


class CategoryDisplay(NamedTuple):
    slug: str
    icon: str
    color: str
    label_ar: str


CATEGORY_DISPLAY: Dict[str, CategoryDisplay] = {
    Category.WOMENS_CLOTHING.value: CategoryDisplay(
        "womens-clothing", "shirt", "bg-pink-100 text-pink-800 border-pink-300", "ملابس نسائية"
    ),
    Category.KITCHENWARE.value: CategoryDisplay(
        "kitchenware", "utensils", "bg-orange-100 text-orange-800 border-orange-300", "أدوات المطبخ"
    ),
    Category.ACCESSORIES.value: CategoryDisplay(
        "accessories", "watch", "bg-purple-100 text-purple-800 border-purple-300", "إكسسوارات"
    ),
}

FALLBACK_DISPLAY = CategoryDisplay("", "package", "bg-gray-100 text-gray-800 border-gray-300", "")


def category_display(category: str) -> CategoryDisplay:
    return CATEGORY_DISPLAY.get(category, FALLBACK_DISPLAY)


def category_from_slug(slug: Optional[str]) -> Optional[str]:
    """Category name for a URL slug; None for "all" or unknown slugs."""
    for name, display in CATEGORY_DISPLAY.items():
        if display.slug == slug:
            return name
    return None


def status_label(status: str, lang: Optional[str] = DEFAULT_LANGUAGE) -> str:
    try:
        labels = STATUS_LABELS[OrderStatus(status)]
    except ValueError:
        return status
    return labels.get(lang or DEFAULT_LANGUAGE, labels[DEFAULT_LANGUAGE])
