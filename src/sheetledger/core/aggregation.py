"""Per-category net totals over ledger rows read back from a sheet.

Rows arrive as three separately read columns (category, amount, type). The
Sheets API trims trailing blank cells per column, so the three sequences can
be ragged: the category column drives iteration and a missing cell in the
other two is treated as blank.

Malformed rows are dropped rather than failing the whole read, since sheets
are edited by hand and exported data is often messy.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Sequence


class TransactionType(str, Enum):
    """Direction label stored in a ledger row's Type column."""

    CREDIT = "Credit"
    DEBIT = "Debit"

    @classmethod
    def parse(cls, label: Any) -> TransactionType | None:
        """Match a label exactly (case-sensitive).

        Returns:
            The matching member, or None for any other label (including a
            blank cell). Unknown labels contribute to neither sum.
        """
        if not isinstance(label, str):
            return None
        try:
            return cls(label)
        except ValueError:
            return None


@dataclass(frozen=True)
class CategoryTotal:
    """Absolute net of credits and debits for one category."""

    category: str
    amount: Decimal


def _cell(values: Sequence[Any], index: int) -> Any:
    # Sheets returns each row of a single-column range as a one-element list.
    if index >= len(values):
        return None
    value = values[index]
    if isinstance(value, (list, tuple)):
        return value[0] if value else None
    return value


def _parse_category(value: Any) -> str | None:
    if value is None:
        return None
    text = value if isinstance(value, str) else str(value)
    return text or None


def parse_amount(value: Any) -> Decimal | None:
    """Parse a sheet cell as a finite number.

    Blank text parses as zero. Booleans, NaN, infinities, values too large
    for a float and anything that is not numeric text give None.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        number = value
    elif isinstance(value, (int, float)):
        number = Decimal(str(value))
    else:
        text = str(value).strip()
        if not text:
            return Decimal(0)
        if "_" in text:
            return None
        try:
            number = Decimal(text)
        except InvalidOperation:
            return None
    if not number.is_finite() or not math.isfinite(float(number)):
        return None
    return number


def aggregate_categories(
    categories: Sequence[Any],
    amounts: Sequence[Any],
    types: Sequence[Any],
) -> list[CategoryTotal]:
    """Sum credits and debits per category and return their absolute net.

    Args:
        categories: Category cells, one per ledger row.
        amounts: Amount cells, position-aligned with ``categories``.
        types: Type cells ("Credit" / "Debit"), position-aligned.

    Returns:
        One CategoryTotal per category that had at least one valid row, in
        order of first appearance. A category whose rows all carry an
        unknown type is still returned, with an amount of zero. A category
        whose net is too large for a float is left out.
    """
    sums: dict[str, tuple[Decimal, Decimal]] = {}

    for index in range(len(categories)):
        category = _parse_category(_cell(categories, index))
        amount = parse_amount(_cell(amounts, index))
        if category is None or amount is None or amount == 0:
            continue

        credit, debit = sums.get(category, (Decimal(0), Decimal(0)))
        kind = TransactionType.parse(_cell(types, index))
        if kind is TransactionType.CREDIT:
            credit += amount
        elif kind is TransactionType.DEBIT:
            debit += amount
        sums[category] = (credit, debit)

    totals = []
    for category, (credit, debit) in sums.items():
        net = abs(credit - debit)
        # Sums of near-float-max amounts cannot be returned as JSON numbers.
        if math.isfinite(float(net)):
            totals.append(CategoryTotal(category=category, amount=net))
    return totals
