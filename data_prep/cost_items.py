"""
Categorized cost line items.

Costs can be entered as several named items per category instead of one
number. Each category total feeds exactly one FunnelInputs field:

    sales      → sales_costs
    attraction → attraction_offer_costs
    upsell     → upsell_costs
    downsell   → downsell_costs
    continuity → continuity_costs
    overhead   → overhead_allocation

Ad spend has no line items; it is always entered directly.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, replace
from typing import Dict, List, Optional

import pandas as pd

from core.schema import FunnelInputs

logger = logging.getLogger(__name__)

CATEGORY_TO_INPUT_FIELD: Dict[str, str] = {
    "sales": "sales_costs",
    "attraction": "attraction_offer_costs",
    "upsell": "upsell_costs",
    "downsell": "downsell_costs",
    "continuity": "continuity_costs",
    "overhead": "overhead_allocation",
}

COST_CATEGORIES = tuple(CATEGORY_TO_INPUT_FIELD)


@dataclass(frozen=True)
class CostItem:
    id: str
    name: str
    amount: float
    category: str
    description: Optional[str] = None


def _check_category(category: str) -> None:
    if category not in CATEGORY_TO_INPUT_FIELD:
        raise ValueError(
            f"Unknown cost category '{category}'. Available: {list(COST_CATEGORIES)}"
        )


class CostLedger:
    """Ordered cost items per category; items keep insertion order."""

    def __init__(self) -> None:
        self._items: Dict[str, List[CostItem]] = {c: [] for c in COST_CATEGORIES}

    def items(self, category: str) -> List[CostItem]:
        _check_category(category)
        return list(self._items[category])

    def add_item(
        self,
        category: str,
        name: str,
        amount: float,
        description: Optional[str] = None,
    ) -> CostItem:
        _check_category(category)
        if not name or not name.strip():
            raise ValueError("Cost item needs a name.")
        if not amount:
            raise ValueError(f"Cost item {name!r} needs a non-zero amount.")

        item = CostItem(
            id=uuid.uuid4().hex,
            name=name.strip(),
            amount=float(amount),
            category=category,
            description=description,
        )
        self._items[category].append(item)
        logger.info("Added %s cost item %r (%.2f)", category, item.name, item.amount)
        return item

    def _locate(self, category: str, item_id: str) -> int:
        _check_category(category)
        for idx, item in enumerate(self._items[category]):
            if item.id == item_id:
                return idx
        raise KeyError(f"No {category} cost item with id '{item_id}'.")

    def update_item(self, category: str, item_id: str, **changes) -> CostItem:
        """Replace name/amount/description of one item, keeping its position."""
        allowed = {"name", "amount", "description"}
        bad = sorted(set(changes) - allowed)
        if bad:
            raise ValueError(f"Cannot update cost item fields: {bad}")
        if "name" in changes:
            if not changes["name"] or not changes["name"].strip():
                raise ValueError("Cost item needs a name.")
            changes["name"] = changes["name"].strip()
        if "amount" in changes:
            if not changes["amount"]:
                raise ValueError("Cost item needs a non-zero amount.")
            changes["amount"] = float(changes["amount"])

        idx = self._locate(category, item_id)
        updated = replace(self._items[category][idx], **changes)
        self._items[category][idx] = updated
        logger.info("Updated %s cost item %r", category, updated.name)
        return updated

    def remove_item(self, category: str, item_id: str) -> CostItem:
        idx = self._locate(category, item_id)
        removed = self._items[category].pop(idx)
        logger.info("Removed %s cost item %r", category, removed.name)
        return removed

    def category_total(self, category: str) -> float:
        _check_category(category)
        return float(sum(item.amount for item in self._items[category]))

    def totals(self) -> Dict[str, float]:
        """Category totals keyed by the FunnelInputs field they feed."""
        return {
            field: self.category_total(category)
            for category, field in CATEGORY_TO_INPUT_FIELD.items()
        }

    def apply_to(self, inputs: FunnelInputs) -> FunnelInputs:
        """New inputs with every category total written in (ad spend untouched)."""
        return replace(inputs, **self.totals())

    def to_dataframe(self) -> pd.DataFrame:
        rows = [
            {
                "id": item.id,
                "category": item.category,
                "name": item.name,
                "amount": item.amount,
                "description": item.description or "",
            }
            for category in COST_CATEGORIES
            for item in self._items[category]
        ]
        return pd.DataFrame(rows, columns=["id", "category", "name", "amount", "description"])
