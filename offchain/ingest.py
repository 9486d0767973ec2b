"""
Allocation CSV Ingestion

Turns an allocations CSV into validated Allocation records.

Expected header: claimant,tokenContract,tokenId,amount

Rules:
- cells are trimmed and blank lines skipped
- addresses must be well-formed and are checksummed
- tokenId and amount must be non-negative integers
- a claimant may appear only once (case-insensitive)
- index is the zero-based position of the data row, so a rejected row
  leaves a gap rather than shifting later indices

Bad rows do not abort ingestion; they are collected as "Row N: reason"
with N the 1-based line number counting the header.
"""
from __future__ import annotations

import csv
import io
import logging
from dataclasses import dataclass, field
from pathlib import Path

from pydantic import ValidationError

from core.schemas.allocation import Allocation, coerce_uint256, normalize_address


logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ("claimant", "tokenContract", "tokenId", "amount")


@dataclass
class IngestResult:
    allocations: list[Allocation] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


def _validate_row(row: dict[str, str], index: int, row_num: int) -> Allocation:
    values = {k.strip(): (v or "").strip() for k, v in row.items() if k is not None}
    missing = [c for c in REQUIRED_COLUMNS if not values.get(c)]
    if missing:
        raise ValueError(
            "Missing required fields. Must have: " + ", ".join(REQUIRED_COLUMNS)
        )

    try:
        claimant = normalize_address(values["claimant"])
    except ValueError:
        raise ValueError(f"Invalid claimant at row {row_num}: {values['claimant']}")
    try:
        token_contract = normalize_address(values["tokenContract"])
    except ValueError:
        raise ValueError(f"Invalid tokenContract at row {row_num}: {values['tokenContract']}")
    try:
        token_id = coerce_uint256(values["tokenId"])
    except ValueError:
        raise ValueError(f"Invalid tokenId at row {row_num}: {values['tokenId']}")
    try:
        amount = coerce_uint256(values["amount"])
    except ValueError:
        raise ValueError(f"Invalid amount at row {row_num}: {values['amount']}")

    try:
        return Allocation(
            index=index,
            claimant=claimant,
            asset_contract=token_contract,
            asset_id=token_id,
            amount=amount,
        )
    except ValidationError as e:
        raise ValueError(str(e)) from e


def parse_allocations_csv(text: str) -> IngestResult:
    """Parse CSV text into allocations plus per-row errors."""
    result = IngestResult()
    reader = csv.DictReader(io.StringIO(text), skipinitialspace=True)
    if reader.fieldnames is None:
        result.errors.append("CSV is empty")
        return result

    seen: set[str] = set()
    index = 0
    for row in reader:
        if not any((v or "").strip() for v in row.values() if isinstance(v, str)):
            continue
        row_num = index + 2
        try:
            allocation = _validate_row(row, index, row_num)
            key = allocation.claimant.lower()
            if key in seen:
                raise ValueError(f"Duplicate claimant address: {allocation.claimant}")
            seen.add(key)
            result.allocations.append(allocation)
        except ValueError as e:
            result.errors.append(f"Row {row_num}: {e}")
        index += 1

    logger.info(
        f"Ingested {len(result.allocations)} allocation(s), {len(result.errors)} rejected row(s)"
    )
    return result


def load_allocations_csv(path: str | Path) -> IngestResult:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Input file not found at {path.resolve()}")
    logger.info(f"Loading allocations from: {path.resolve()}")
    return parse_allocations_csv(path.read_text(encoding="utf-8"))


__all__ = [
    "REQUIRED_COLUMNS",
    "IngestResult",
    "parse_allocations_csv",
    "load_allocations_csv",
]
