"""Rebuild a market-by-price feed from a market-by-order file."""

from __future__ import annotations

import logging
import sys
import time
from collections.abc import Sequence
from dataclasses import dataclass, replace

from .csvio import read_mbo, write_mbp
from .orderbook import OrderBook
from .records import MBORecord, MBPRecord

OUTPUT_FILE = "output_mbp.csv"
PROGRESS_EVERY = 10000

_log = logging.getLogger(__name__)


@dataclass
class _PendingTrade:
    record: MBORecord
    has_fill: bool = False


def _apply_trade(book: OrderBook, trade: MBORecord, reported_side: str) -> MBPRecord:
    """Take a pending trade off the resting side and snapshot the book.

    The resting side is the one opposite to the side the event reported.
    """
    resting_side = "A" if reported_side == "B" else "B"
    book.handle_trade(resting_side, trade.price, trade.size)
    return book.generate_mbp(replace(trade, action="T", side=resting_side))


def reconstruct(records: Sequence[MBORecord]) -> list[MBPRecord]:
    """Replay MBO events through an order book and return the MBP snapshots.

    A leading clear is skipped. Trades are held until a cancel at the same
    price and side completes the trade-fill-cancel sequence; trades that saw
    a fill but no cancel are applied once all events have been replayed.
    """
    book = OrderBook()
    output: list[MBPRecord] = []
    pending: dict[int, _PendingTrade] = {}

    start = 1 if records and records[0].action == "R" else 0
    if start:
        _log.info("Skipping initial clear action")

    total = len(records)
    for index in range(start, total):
        record = records[index]
        action = record.action

        if action == "A":
            book.add_order(record.side, record.price, record.size, record.order_id)
            output.append(book.generate_mbp(record))
        elif action == "C":
            match = next(
                (
                    order_id
                    for order_id in sorted(pending)
                    if pending[order_id].record.price == record.price
                    and pending[order_id].record.side == record.side
                ),
                None,
            )
            if match is not None:
                trade = pending.pop(match).record
                output.append(_apply_trade(book, trade, record.side))
            else:
                book.cancel_order(record.order_id, record.side, record.price, record.size)
                output.append(book.generate_mbp(record))
        elif action == "T":
            if record.side == "N":
                continue
            pending[record.order_id] = _PendingTrade(record)
        elif action == "F":
            if record.order_id in pending:
                pending[record.order_id].has_fill = True
        elif action == "R":
            book.clear()
            output.append(book.generate_mbp(record))

        if index % PROGRESS_EVERY == 0:
            _log.info("Processed %d/%d records", index, total)

    for order_id in sorted(pending):
        entry = pending[order_id]
        if entry.has_fill:
            output.append(_apply_trade(book, entry.record, entry.record.side))

    return output


def main(argv: Sequence[str] | None = None) -> int:
    """Read an MBO file named on the command line and write the MBP output file."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) != 1:
        print("Usage: mbpbook <mbo_input_file.csv>", file=sys.stderr)
        return 1

    input_file = args[0]
    started = time.perf_counter()
    try:
        print(f"Reading MBO data from: {input_file}")
        mbo_records = read_mbo(input_file)
        print(f"Read {len(mbo_records)} MBO records")

        mbp_records = reconstruct(mbo_records)

        print(f"Writing {len(mbp_records)} MBP records to: {OUTPUT_FILE}")
        write_mbp(mbp_records, OUTPUT_FILE)
    except (OSError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    elapsed_ms = int((time.perf_counter() - started) * 1000)
    print(f"Processing completed in {elapsed_ms} ms")
    print(f"Output written to: {OUTPUT_FILE}")
    return 0


if __name__ == "__main__":
    sys.exit(main())