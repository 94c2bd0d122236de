import csv
import logging
from decimal import Decimal, InvalidOperation
from typing import Dict, Iterator, Mapping, Optional

from errors import MalformedRecord
from models import AMOUNT_SCALE, MAX_CLIENT_ID, MAX_TRANSACTION_ID, ProcessingStats, Transaction, TransactionType

logger = logging.getLogger(__name__)


def read_transactions(filepath: str, stats: Optional[ProcessingStats] = None) -> Iterator[Transaction]:
    """
    Lazily read CSV rows into Transactions, in file order.

    Malformed or unreadable rows are logged, counted in ``stats`` and
    skipped. Undecodable bytes are replaced so the row fails to parse
    instead of aborting the read. Failing to open the file raises
    OSError to the caller.
    """
    with open(filepath, "r", newline="", encoding="utf-8-sig", errors="replace") as f:
        reader = csv.DictReader(f)
        while True:
            try:
                row = next(reader)
            except StopIteration:
                return
            except csv.Error as e:
                _skip(stats, f"Skipping unreadable row at line {reader.line_num}: {e}")
                continue

            try:
                transaction = parse_row(row)
            except MalformedRecord as e:
                _skip(stats, f"Skipping malformed row at line {reader.line_num}: {e}")
                continue
            yield transaction


def _skip(stats: Optional[ProcessingStats], message: str) -> None:
    logger.warning(message)
    if stats is not None:
        stats.record_malformed()


def parse_row(row: Mapping[Optional[str], Optional[str]]) -> Transaction:
    """Parse CSV row into Transaction, raising MalformedRecord on bad input."""
    if None in row:
        raise MalformedRecord("too many fields", row)

    normalized = _normalize(row)

    try:
        transaction_type = TransactionType(normalized["type"].lower())
    except KeyError:
        raise MalformedRecord("missing type column", row)
    except ValueError:
        raise MalformedRecord(f"unknown transaction type {normalized['type']!r}", row)

    client_id = _parse_id(normalized, "client", MAX_CLIENT_ID, row)
    transaction_id = _parse_id(normalized, "tx", MAX_TRANSACTION_ID, row)

    amount_str = normalized.get("amount", "")
    if transaction_type.carries_amount:
        if not amount_str:
            raise MalformedRecord(f"{transaction_type.value} requires an amount", row)
        amount = _parse_amount(amount_str, row)
    else:
        if amount_str:
            raise MalformedRecord(f"{transaction_type.value} must not carry an amount", row)
        amount = None

    return Transaction(
        transaction_type=transaction_type,
        client_id=client_id,
        transaction_id=transaction_id,
        amount=amount,
    )


def _normalize(row: Mapping[Optional[str], Optional[str]]) -> Dict[str, str]:
    # DictReader fills short rows with None
    return {k.strip(): (v or "").strip() for k, v in row.items() if k is not None}


def _parse_id(normalized: Dict[str, str], field: str, upper: int, row: Mapping) -> int:
    value = normalized.get(field, "")
    if not (value.isascii() and value.isdigit()):
        raise MalformedRecord(f"{field} must be a non-negative integer, got {value!r}", row)
    parsed = int(value)
    if parsed > upper:
        raise MalformedRecord(f"{field} {parsed} exceeds maximum {upper}", row)
    return parsed


def _parse_amount(value: str, row: Mapping) -> Decimal:
    try:
        amount = Decimal(value)
    except InvalidOperation:
        raise MalformedRecord(f"invalid amount {value!r}", row)

    if not amount.is_finite():
        raise MalformedRecord(f"invalid amount {value!r}", row)

    try:
        quantized = amount.quantize(AMOUNT_SCALE)
    except InvalidOperation:
        raise MalformedRecord(f"amount {value!r} out of range", row)

    if quantized != amount:
        raise MalformedRecord(f"amount {value!r} has more than 4 decimal places", row)
    return quantized
