"""Fixed lookup tables used to classify statement operations.

Source labels are the category names printed by the bank next to each
operation. Application categories are the names stored in the database.
"""

from types import MappingProxyType
from typing import Optional

OTHER = "Другое"
NO_DESCRIPTION = "Без описания"

GROCERIES = "Продукты"
TRANSPORT = "Транспорт"
CAFES = "Кафе и рестораны"
TRANSFERS = "Переводы"
SUBSCRIPTIONS = "Подписки"

# Bank label -> application category
CATEGORY_VOCABULARY = MappingProxyType(
    {
        "Супермаркеты": GROCERIES,
        "Транспорт": TRANSPORT,
        "Рестораны и кафе": CAFES,
        "Прочие расходы": OTHER,
        "Прочие операции": OTHER,
        "Перевод": TRANSFERS,
        "Перевод СБП": TRANSFERS,
        "Перевод на карту": TRANSFERS,
        "Перевод с карты": TRANSFERS,
        "Оплата по QR": TRANSFERS,
    }
)

# Ordered merchant rules checked against an uppercased description.
# Each rule is (category, alternatives); an alternative matches when all of
# its keywords occur in the description. The first matching rule wins.
MERCHANT_KEYWORDS: tuple[tuple[str, tuple[tuple[str, ...], ...]], ...] = (
    (
        GROCERIES,
        (
            ("MAGNIT",),
            ("PEREKRESTOK",),
            ("PYATEROCHKA",),
            ("MONETKA",),
            ("BRISTOL",),
            ("KRASNOE",),
            ("BELOE",),
            ("POLYUSTORG",),
        ),
    ),
    (
        TRANSPORT,
        (
            ("TRANSPORT",),
            ("TRAMVAI",),
            ("МЕТРО",),
            ("ТАКСИ",),
            ("YANDEX", "GO"),
        ),
    ),
    (
        CAFES,
        (
            ("PAPA",),
            ("DZHONS",),
            ("TURLOV",),
            ("SHAURMA",),
            ("CAFE",),
            ("RESTAURANT",),
        ),
    ),
    (SUBSCRIPTIONS, (("YANDEX", "PLUS"),)),
    # Remaining Yandex services have no dedicated category
    (OTHER, (("YANDEX",),)),
    (TRANSFERS, (("ПЕРЕВОД",), ("СБП",))),
    (TRANSPORT, (("Ж/Д",), ("ПЕРЕВОЗОК",))),
)

DEFAULT_ICON = "📦"

CATEGORY_ICONS = MappingProxyType(
    {
        GROCERIES: "🛒",
        TRANSPORT: "🚗",
        CAFES: "🍽️",
        TRANSFERS: "💸",
    }
)


def map_category(label: Optional[str]) -> str:
    """Map a bank category label to an application category."""
    if label is None:
        return OTHER
    return CATEGORY_VOCABULARY.get(label, OTHER)


def guess_category(description: Optional[str]) -> str:
    """Infer a category from merchant keywords in a description.

    Args:
        description: Free-text merchant or purpose string

    Returns:
        Application category name, ``OTHER`` when no rule matches
    """
    if not description:
        return OTHER

    text = description.upper()
    for category, alternatives in MERCHANT_KEYWORDS:
        for keywords in alternatives:
            if all(keyword in text for keyword in keywords):
                return category
    return OTHER


def default_icon(category_name: Optional[str]) -> str:
    """Return the icon shown for a newly created category."""
    if category_name is None:
        return DEFAULT_ICON
    return CATEGORY_ICONS.get(category_name, DEFAULT_ICON)
