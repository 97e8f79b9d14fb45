"""
Lot and batch grouping.

A lot number is ``YYYY-SEQ`` for a single-model order or ``YYYY-SEQ-X`` for
each model of a mixed batch. Sibling orders share the ``YYYY-SEQ`` batch key.
Batch views are projections over listed orders and are never persisted.
"""

import string
from collections.abc import Iterable

from prodline.core.entities.batch import BatchView
from prodline.core.entities.order import ProductionOrder
from prodline.core.exceptions import InvalidInputError
from prodline.core.services.lifecycle import EDITABLE_STATUSES

# Identifiers with this prefix denote virtual batches and must never be saved
BATCH_ID_PREFIX = "BATCH-"

LOT_SUFFIXES = string.ascii_uppercase


def batch_key(lot_number: str) -> str:
    """First two '-' tokens of a suffixed lot number, else the whole lot number."""
    parts = lot_number.split("-")
    if len(parts) >= 3:
        return "-".join(parts[:2])
    return lot_number


def group_by_lot(orders: Iterable[ProductionOrder]) -> dict[str, list[ProductionOrder]]:
    """Group orders by batch key, keeping first-seen key order."""
    groups: dict[str, list[ProductionOrder]] = {}
    for order in orders:
        groups.setdefault(batch_key(order.lot_number), []).append(order)
    return groups


def is_batch_editable(orders: Iterable[ProductionOrder]) -> bool:
    """A batch is editable as a whole only while every member is draft or planned."""
    members = list(orders)
    return bool(members) and all(o.status in EDITABLE_STATUSES for o in members)


def build_batch_view(key: str, orders: list[ProductionOrder]) -> BatchView:
    events = sorted((e for o in orders for e in o.events), key=lambda e: e.date)
    return BatchView(
        batch_key=key,
        order_ids=[o.id for o in orders],
        lot_numbers=[o.lot_number for o in orders],
        product_ids=[o.product_id for o in orders],
        quantity_total=sum(o.quantity_total for o in orders),
        items=[item.model_copy() for o in orders for item in o.items],
        events=[e.model_copy() for e in events],
        editable=is_batch_editable(orders),
    )


def build_batch_views(orders: Iterable[ProductionOrder]) -> list[BatchView]:
    return [build_batch_view(key, members) for key, members in group_by_lot(orders).items()]


def is_batch_identifier(identifier: str) -> bool:
    return identifier.upper().startswith(BATCH_ID_PREFIX)


def next_batch_base(existing_lots: Iterable[str], year: int, width: int = 3) -> str:
    """Next ``YYYY-SEQ`` base after the highest sequence used in that year."""
    highest = 0
    for lot in existing_lots:
        parts = lot.split("-")
        if len(parts) < 2 or parts[0] != str(year):
            continue
        if parts[1].isdigit():
            highest = max(highest, int(parts[1]))
    return f"{year}-{highest + 1:0{width}d}"


def lot_numbers_for(base: str, count: int) -> list[str]:
    """Lot numbers for a batch of count models; suffixed only when count > 1."""
    if count < 1:
        raise InvalidInputError("models", "a batch needs at least one model", count)
    if count == 1:
        return [base]
    if count > len(LOT_SUFFIXES):
        raise InvalidInputError(
            "models", f"a batch holds at most {len(LOT_SUFFIXES)} models", count
        )
    return [f"{base}-{LOT_SUFFIXES[i]}" for i in range(count)]
