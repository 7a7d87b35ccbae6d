"""Formatting and validation helpers shared by the API layer.

Tender metadata is stored on chain as a single pipe-delimited string::

    <title>|<description>|Deadline: <date>|Status: <status>

The helpers here encode and decode that string, convert between ether and wei,
and format values for display.
"""

from __future__ import annotations

import math
import time
from datetime import datetime, timezone
from decimal import Decimal
from typing import Union

from pydantic import BaseModel
from web3 import Web3

GOVERNMENT_ROLE = "0x71840dc4906352362b0cdaf79870196c8e42acafade72d5d5a6d59291253dce1"
DEFAULT_ADMIN_ROLE = "0x" + "00" * 32

MAX_DOCUMENT_SIZE = 10 * 1024 * 1024

ALLOWED_DOCUMENT_TYPES = (
    "application/pdf",
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "text/plain",
)

NETWORK_NAMES = {
    1: "Ethereum Mainnet",
    11155111: "Sepolia Testnet",
    314159: "Filecoin Calibration",
}

_DEADLINE_PREFIX = "Deadline: "
_STATUS_PREFIX = "Status: "
_FILE_SIZE_UNITS = ("Bytes", "KB", "MB", "GB")


class TenderDescription(BaseModel):
    """Decoded form of the on-chain tender description string."""

    title: str = ""
    description: str = ""
    deadline: str = ""
    status: str = ""


def eth_to_wei(eth: Union[str, int, float, Decimal]) -> int:
    """Convert an ether amount to wei."""
    return int(Web3.to_wei(Decimal(str(eth)), "ether"))


def wei_to_eth(wei: Union[int, str]) -> str:
    """Convert a wei amount to a decimal ether string."""
    value = Web3.from_wei(int(wei), "ether")
    return format(Decimal(value).normalize(), "f")


def format_address(address: str) -> str:
    """Shorten an address for display, e.g. ``0x1234...abcd``."""
    if not address:
        return ""
    return f"{address[:6]}...{address[-4:]}"


def format_file_size(size: int) -> str:
    if size <= 0:
        return "0 Bytes"
    exponent = min(int(math.floor(math.log(size, 1024))), len(_FILE_SIZE_UNITS) - 1)
    value = round(size / 1024**exponent, 2)
    return f"{value:g} {_FILE_SIZE_UNITS[exponent]}"


def is_valid_file_type(content_type: str | None) -> bool:
    return content_type in ALLOWED_DOCUMENT_TYPES


def is_valid_file_size(size: int) -> bool:
    return size <= MAX_DOCUMENT_SIZE


def get_government_role_hash() -> str:
    return GOVERNMENT_ROLE


def format_tender_description(title: str, description: str, deadline: str, status: str) -> str:
    """
    Encode tender metadata into the string stored by ``createTender``.

    Title and description must not contain ``|``; the API rejects them before
    they get here, since a stray separator shifts every later field on decode.
    """
    return f"{title}|{description}|{_DEADLINE_PREFIX}{deadline}|{_STATUS_PREFIX}{status}"


def parse_tender_description(raw: str) -> TenderDescription:
    """
    Decode an on-chain tender description.

    Missing segments decode to empty strings, so free-form descriptions that
    predate the pipe encoding come back as a title only.
    """
    parts = (raw or "").split("|")

    def part(index: int) -> str:
        return parts[index] if index < len(parts) else ""

    return TenderDescription(
        title=part(0),
        description=part(1),
        deadline=part(2).replace(_DEADLINE_PREFIX, ""),
        status=part(3).replace(_STATUS_PREFIX, ""),
    )


def get_current_timestamp() -> int:
    return int(time.time())


def timestamp_to_iso(timestamp: int) -> str:
    """Render a unix timestamp (seconds) as an ISO-8601 UTC string."""
    return datetime.fromtimestamp(int(timestamp), tz=timezone.utc).isoformat()


def _parse_date(value: str) -> datetime:
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def is_future_date(value: str) -> bool:
    return _parse_date(value) > datetime.now(timezone.utc)


def format_date(value: str) -> str:
    parsed = _parse_date(value)
    return f"{parsed:%B} {parsed.day}, {parsed.year}"


def format_datetime(value: str) -> str:
    parsed = _parse_date(value)
    return f"{parsed:%B} {parsed.day}, {parsed.year} at {parsed:%I:%M %p}"


def is_valid_address(address: str) -> bool:
    return bool(address) and Web3.is_address(address)


def get_network_name(chain_id: int) -> str:
    return NETWORK_NAMES.get(chain_id, f"Chain ID {chain_id}")
