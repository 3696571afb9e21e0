"""Columns and filters of the revenue ledger."""

from __future__ import annotations

from typing import Any, Mapping

from ..core.enums import DisplayKind, PaymentMethod
from ..core.exceptions import ParseFailure
from ..filters.pipeline import DateRangeFilter, FilterSpec, RangeFilter
from ..tables.cells import BadgeStyle, Cell, format_amount, parse_amount
from ..tables.columns import (
    ColumnSpec,
    badge_column,
    computed_column,
    currency_column,
    date_column,
    nested_summary_column,
    text_column,
)

PAYMENT_METHOD_BADGES: dict[str, BadgeStyle] = {
    PaymentMethod.BANK.value: BadgeStyle("bg-blue-100 text-blue-800", "BANK"),
    PaymentMethod.CASH.value: BadgeStyle("bg-green-100 text-green-800", "CASH"),
    PaymentMethod.CREDIT_CARD.value: BadgeStyle("bg-purple-100 text-purple-800", "CREDIT CARD"),
    PaymentMethod.ONLINE.value: BadgeStyle("bg-indigo-100 text-indigo-800", "ONLINE"),
}

CATEGORY_BADGES: dict[str, BadgeStyle] = {
    "Software Development": BadgeStyle("bg-blue-100 text-blue-800", "SOFTWARE DEV"),
    "Consulting": BadgeStyle("bg-purple-100 text-purple-800", "CONSULTING"),
    "Product Sales": BadgeStyle("bg-green-100 text-green-800", "PRODUCT"),
    "Subscription": BadgeStyle("bg-indigo-100 text-indigo-800", "SUBSCRIPTION"),
    "Support": BadgeStyle("bg-cyan-100 text-cyan-800", "SUPPORT"),
    "Training": BadgeStyle("bg-orange-100 text-orange-800", "TRAINING"),
    "License": BadgeStyle("bg-pink-100 text-pink-800", "LICENSE"),
    "Other": BadgeStyle("bg-gray-100 text-gray-800", "OTHER"),
}

CATEGORIES: tuple[str, ...] = tuple(CATEGORY_BADGES)
SOURCES: tuple[str, ...] = (
    "Project Payment",
    "Invoice Payment",
    "Subscription Payment",
    "Service Payment",
    "Product Sale",
    "Other",
)


def commission(value: Any, record: Mapping[str, Any]) -> Cell:
    """amount x commissionRate / 100, shown like a transaction amount."""
    try:
        amount = parse_amount(record.get("amount"))
        rate = parse_amount(record.get("commissionRate"))
    except ParseFailure:
        amount, rate = 0.0, 0.0
    return Cell(DisplayKind.COMPUTED, format_amount(amount * rate / 100, precise=True))


def build_columns() -> list[ColumnSpec]:
    return [
        text_column("source", "Source", sortable=True, width="18%"),
        currency_column("amount", "Amount", precise=True, sortable=True, width="13%"),
        badge_column("category", "Category", CATEGORY_BADGES, width="14%"),
        badge_column("paymentMethod", "Payment Method", PAYMENT_METHOD_BADGES, width="13%"),
        date_column("receivedOn", "Received On", sortable=True, width="12%"),
        nested_summary_column(
            "client",
            "Client",
            detail_fields=("email",),
            placeholder="No client",
            initial_fallback="C",
            width="20%",
        ),
        computed_column("commission", "Commission", commission, width="10%"),
    ]


def build_filter_spec() -> FilterSpec:
    return FilterSpec(
        search_fields=("source", "category", "client_name"),
        exact_fields={
            "category": "category",
            "paymentMethod": "paymentMethod",
            "source": "source",
            "createdBy": "createdBy",
        },
        date_ranges=(DateRangeFilter("receivedOn"),),
        amount_ranges=(RangeFilter("amount", "minAmount", "maxAmount"),),
    )
