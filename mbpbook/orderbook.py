"""Aggregated price-level order book."""

from __future__ import annotations

import heapq
import sys
from dataclasses import dataclass
from typing import TextIO

from .records import DEPTH, MBP_RTYPE, MBORecord, MBPRecord


@dataclass
class _Level:
    size: int = 0
    count: int = 0


class OrderBook:
    """Price levels for bids and asks, each holding total size and order count."""

    def __init__(self) -> None:
        self._bids: dict[float, _Level] = {}
        self._asks: dict[float, _Level] = {}
        self._orders: dict[int, tuple[float, int]] = {}

    def _levels(self, side: str) -> dict[float, _Level] | None:
        if side == "B":
            return self._bids
        if side == "A":
            return self._asks
        return None

    def add_order(self, side: str, price: float, size: int, order_id: int) -> None:
        """Add an order's size to its price level; unknown sides only track the order."""
        levels = self._levels(side)
        if levels is not None:
            level = levels.setdefault(price, _Level())
            level.size += size
            level.count += 1
        if order_id != 0:
            self._orders[order_id] = (price, size)

    def cancel_order(self, order_id: int, side: str, price: float, size: int) -> None:
        """Remove an order's size from its level, dropping the level once empty."""
        levels = self._levels(side)
        if levels is not None:
            level = levels.get(price)
            if level is not None:
                level.size -= size
                level.count -= 1
                if level.size <= 0 or level.count <= 0:
                    del levels[price]
        self._orders.pop(order_id, None)

    def handle_trade(self, side: str, price: float, size: int) -> None:
        """Take traded size off the resting side at the given price."""
        levels = self._levels(side)
        if levels is None:
            return
        level = levels.get(price)
        if level is None:
            return
        level.size -= size
        level.count = max(0, level.count - 1)
        if level.size <= 0:
            del levels[price]

    def generate_mbp(self, mbo_record: MBORecord) -> MBPRecord:
        """Snapshot the top levels of the book, stamped with the event's fields."""
        mbp = MBPRecord(
            ts_recv=mbo_record.ts_recv,
            ts_event=mbo_record.ts_event,
            rtype=MBP_RTYPE,
            publisher_id=mbo_record.publisher_id,
            instrument_id=mbo_record.instrument_id,
            action=mbo_record.action,
            side=mbo_record.side,
            depth=0,
            price=mbo_record.price,
            size=mbo_record.size,
            flags=mbo_record.flags,
            ts_in_delta=mbo_record.ts_in_delta,
            sequence=mbo_record.sequence,
            symbol=mbo_record.symbol,
            order_id=mbo_record.order_id,
        )
        best_bids = heapq.nlargest(DEPTH, self._bids.items(), key=lambda item: item[0])
        for i, (price, level) in enumerate(best_bids):
            mbp.bid_prices[i] = price
            mbp.bid_sizes[i] = level.size
            mbp.bid_counts[i] = level.count
        best_asks = heapq.nsmallest(DEPTH, self._asks.items(), key=lambda item: item[0])
        for i, (price, level) in enumerate(best_asks):
            mbp.ask_prices[i] = price
            mbp.ask_sizes[i] = level.size
            mbp.ask_counts[i] = level.count
        return mbp

    def clear(self) -> None:
        """Empty both sides and forget all tracked orders."""
        self._bids.clear()
        self._asks.clear()
        self._orders.clear()

    def print_book(self, file: TextIO | None = None) -> None:
        """Write the whole book, asks above bids, highest price first."""
        out = sys.stdout if file is None else file
        print("=== ORDER BOOK ===", file=out)
        print("ASKS:", file=out)
        for price in sorted(self._asks, reverse=True):
            level = self._asks[price]
            print(f"  {price:.2f} x {level.size} ({level.count} orders)", file=out)
        print("BIDS:", file=out)
        for price in sorted(self._bids, reverse=True):
            level = self._bids[price]
            print(f"  {price:.2f} x {level.size} ({level.count} orders)", file=out)
        print("==================", file=out)