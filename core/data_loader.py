"""Transaction loading utilities for the VendorSpend pipeline."""

from __future__ import annotations

import math
from functools import lru_cache
from pathlib import Path
from typing import Any, Final, Optional

import pandas as pd

from config.logging_config import get_logger
from config.settings import get_settings
from core.models import TRANSACTION_FIELDS, Transaction, TransactionSet

__all__ = ["TransactionSchemaError", "clear_transactions_cache", "load_transactions", "transactions_from_frame"]

logger = get_logger(__name__)

_CACHE_SIZE: Final[int] = 8
_TEXT_FIELDS: Final[tuple[str, ...]] = ("vendor_name", "category", "department", "date")


class TransactionSchemaError(ValueError):
    """Raised when transaction data is missing required columns."""


def _coerce_text(value: Any) -> str:
    if value is None or (not isinstance(value, str) and pd.isna(value)):
        return ""
    return str(value).strip()


def _coerce_amount(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        numeric = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(numeric):
        return None
    return numeric


def transactions_from_frame(df: pd.DataFrame) -> TransactionSet:
    """Validate a raw transactions frame and convert it to a ``TransactionSet``.

    Text columns are normalised to stripped strings (missing values become
    empty strings); amounts that cannot be read as numbers are kept as
    ``None`` and count as zero during aggregation.
    """

    missing = [name for name in TRANSACTION_FIELDS if name not in df.columns]
    if missing:
        raise TransactionSchemaError(f"Transactions are missing required columns: {', '.join(missing)}")

    records = []
    for row in df[list(TRANSACTION_FIELDS)].to_dict(orient="records"):
        fields = {name: _coerce_text(row[name]) for name in _TEXT_FIELDS}
        records.append(Transaction(amount=_coerce_amount(row["amount"]), **fields))
    return TransactionSet(tuple(records))


@lru_cache(maxsize=_CACHE_SIZE)
def _read_transactions(path: Path) -> TransactionSet:
    if not path.exists():
        raise FileNotFoundError(f"CSV file not found: {path}")

    df = pd.read_csv(path, dtype={"date": str}, skip_blank_lines=True)
    df = df.dropna(how="all")
    transactions = transactions_from_frame(df)
    logger.info("Loaded %d transactions from %s", len(transactions), path)
    return transactions


def load_transactions(csv_path: Optional[str | Path] = None) -> TransactionSet:
    """Return the transaction snapshot stored in the given CSV file.

    Without ``csv_path`` the configured ``data_path`` is read. Results are
    cached per path to avoid redundant disk reads when the dashboard
    recomputes for the same source file.
    """

    path = Path(csv_path) if csv_path is not None else get_settings().data_path
    return _read_transactions(path)


def clear_transactions_cache() -> None:
    _read_transactions.cache_clear()
