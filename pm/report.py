"""
Flat CSV export of one unit-economics run.

Layout (fixed):
    title block
    Customer Acquisition Costs   raw cost inputs + total CAC
    Offer Performance            weighted revenue / cost / profit per stream
    Key Metrics                  period totals, ratios, health label
"""

from __future__ import annotations

import csv
import datetime as dt
import io
import logging
from typing import List, Optional, Sequence

from core.schema import FunnelInputs, UnitEconomicsResult
from core.utils import format_plain_number
from engine.unit_economics import offer_lines

logger = logging.getLogger(__name__)

REPORT_TITLE = "Money Model Calculator Results"


def _section(rows: List[Sequence[str]], heading: str, lines) -> None:
    rows.append([heading])
    for label, value in lines:
        rows.append([label, format_plain_number(value)])


def build_csv_report(inputs: FunnelInputs, result: UnitEconomicsResult) -> str:
    rows: List[Sequence[str]] = [[REPORT_TITLE], ["=" * len(REPORT_TITLE)]]

    _section(rows, "Customer Acquisition Costs", [
        ("Ad Spend", inputs.ad_spend),
        ("Sales Costs", inputs.sales_costs),
        ("Overhead Allocation", inputs.overhead_allocation),
        ("Total CAC", result.total_cac),
    ])
    rows.append([])

    rows.append(["Offer Performance"])
    for i, line in enumerate(offer_lines(inputs)):
        if i:
            rows.append([])
        label = line.stream.capitalize()
        rows.append([f"{label} Revenue", format_plain_number(line.revenue)])
        rows.append([f"{label} Costs", format_plain_number(line.cost)])
        rows.append([f"{label} Profit", format_plain_number(getattr(result, f"{line.stream}_profit"))])
    rows.append([])

    _section(rows, "Key Metrics", [
        ("Total Revenue (30 Days)", result.revenue_period),
        ("Total Costs (30 Days)", result.costs_period),
        ("Net Profit (30 Days)", result.profit_period),
        ("Customers Paid For", result.customers_funded_ratio),
        ("Cash Multiplier", result.cash_multiplier),
    ])
    rows.append(["Profit Margin", f"{format_plain_number(result.profit_margin_pct)}%"])
    rows.append(["Model Health", "Healthy" if result.is_healthy else "Needs Improvement"])

    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerows(rows)
    return buf.getvalue().rstrip("\n")


def report_filename(day: Optional[dt.date] = None) -> str:
    day = day or dt.date.today()
    return f"money-model-{day.isoformat()}.csv"


def write_csv_report(path: str, inputs: FunnelInputs, result: UnitEconomicsResult) -> str:
    text = build_csv_report(inputs, result)
    with open(path, "w", encoding="utf-8", newline="") as fh:
        fh.write(text)
    logger.info("Wrote unit-economics report to %s", path)
    return path
