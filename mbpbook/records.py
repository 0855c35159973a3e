"""Market-by-order input records and market-by-price output records."""

from __future__ import annotations

from dataclasses import dataclass, field

DEPTH = 10
"""Number of price levels reported on each side of the book."""

MBP_RTYPE = 10
"""Record type stamped on every market-by-price record."""


def _price_levels() -> list[float]:
    return [0.0] * DEPTH


def _int_levels() -> list[int]:
    return [0] * DEPTH


@dataclass
class MBORecord:
    """One market-by-order event as read from the input file."""

    ts_recv: str = ""
    ts_event: str = ""
    rtype: int = 0
    publisher_id: int = 0
    instrument_id: int = 0
    action: str = ""
    side: str = ""
    price: float = 0.0
    size: int = 0
    channel_id: int = 0
    order_id: int = 0
    flags: int = 0
    ts_in_delta: int = 0
    sequence: int = 0
    symbol: str = ""


@dataclass
class MBPRecord:
    """A snapshot of the top price levels taken after one event."""

    ts_recv: str = ""
    ts_event: str = ""
    rtype: int = MBP_RTYPE
    publisher_id: int = 0
    instrument_id: int = 0
    action: str = ""
    side: str = ""
    depth: int = 0
    price: float = 0.0
    size: int = 0
    flags: int = 0
    ts_in_delta: int = 0
    sequence: int = 0
    bid_prices: list[float] = field(default_factory=_price_levels)
    bid_sizes: list[int] = field(default_factory=_int_levels)
    bid_counts: list[int] = field(default_factory=_int_levels)
    ask_prices: list[float] = field(default_factory=_price_levels)
    ask_sizes: list[int] = field(default_factory=_int_levels)
    ask_counts: list[int] = field(default_factory=_int_levels)
    symbol: str = ""
    order_id: int = 0