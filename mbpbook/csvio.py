"""Reading market-by-order CSV files and writing market-by-price CSV files."""

from __future__ import annotations

import os
import re
from collections.abc import Iterable

from .records import DEPTH, MBORecord, MBPRecord

_INT_PREFIX = re.compile(r"\s*[+-]?\d+")
_FLOAT_PREFIX = re.compile(r"\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")

_LEVEL_COLUMNS = ("bid_px", "bid_sz", "bid_ct", "ask_px", "ask_sz", "ask_ct")


def _parse_int(cell: str) -> int:
    match = _INT_PREFIX.match(cell)
    if match is None:
        raise ValueError(f"invalid integer field: {cell!r}")
    return int(match.group())


def _parse_float(cell: str) -> float:
    match = _FLOAT_PREFIX.match(cell)
    if match is None:
        raise ValueError(f"invalid number field: {cell!r}")
    return float(match.group())


def _first_char(cell: str) -> str:
    return cell[0] if cell else " "


def parse_mbo_line(line: str) -> MBORecord:
    """Parse one comma-separated MBO line; missing trailing fields keep their defaults."""
    cells = line.split(",")
    if cells and cells[-1] == "":
        cells.pop()
    record = MBORecord()
    setters = (
        lambda c: setattr(record, "ts_recv", c),
        lambda c: setattr(record, "ts_event", c),
        lambda c: setattr(record, "rtype", _parse_int(c)),
        lambda c: setattr(record, "publisher_id", _parse_int(c)),
        lambda c: setattr(record, "instrument_id", _parse_int(c)),
        lambda c: setattr(record, "action", _first_char(c)),
        lambda c: setattr(record, "side", _first_char(c)),
        lambda c: setattr(record, "price", _parse_float(c) if c else 0.0),
        lambda c: setattr(record, "size", _parse_int(c) if c else 0),
        lambda c: setattr(record, "channel_id", _parse_int(c)),
        lambda c: setattr(record, "order_id", _parse_int(c)),
        lambda c: setattr(record, "flags", _parse_int(c)),
        lambda c: setattr(record, "ts_in_delta", _parse_int(c)),
        lambda c: setattr(record, "sequence", _parse_int(c)),
        lambda c: setattr(record, "symbol", c),
    )
    for setter, cell in zip(setters, cells):
        setter(cell)
    return record


def read_mbo(path: str | os.PathLike[str]) -> list[MBORecord]:
    """Read every non-empty line after the header of an MBO file."""
    with open(path, encoding="utf-8") as fh:
        next(fh, None)
        return [
            parse_mbo_line(line)
            for line in (raw.rstrip("\n") for raw in fh)
            if line
        ]


def mbp_header() -> str:
    """The header line of an MBP output file, without a line ending."""
    columns = [
        "",
        "ts_recv",
        "ts_event",
        "rtype",
        "publisher_id",
        "instrument_id",
        "action",
        "side",
        "depth",
        "price",
        "size",
        "flags",
        "ts_in_delta",
        "sequence",
    ]
    columns.extend(
        f"{prefix}_{level:02d}" for level in range(DEPTH) for prefix in _LEVEL_COLUMNS
    )
    columns.extend(["symbol", "order_id"])
    return ",".join(columns)


def _price_cell(price: float, decimals: int) -> str:
    return f"{price:.{decimals}f}" if price != 0.0 else ""


def format_mbp_line(record: MBPRecord, index: int) -> str:
    """Format one MBP record as an output line, led by its row index."""
    cells = [
        str(index),
        record.ts_recv,
        record.ts_event,
        str(record.rtype),
        str(record.publisher_id),
        str(record.instrument_id),
        record.action,
        record.side,
        str(record.depth),
        _price_cell(record.price, 8),
        str(record.size),
        str(record.flags),
        str(record.ts_in_delta),
        str(record.sequence),
    ]
    for bid_px, bid_sz, bid_ct, ask_px, ask_sz, ask_ct in zip(
        record.bid_prices,
        record.bid_sizes,
        record.bid_counts,
        record.ask_prices,
        record.ask_sizes,
        record.ask_counts,
    ):
        cells.extend(
            [
                _price_cell(bid_px, 2),
                str(bid_sz),
                str(bid_ct),
                _price_cell(ask_px, 2),
                str(ask_sz),
                str(ask_ct),
            ]
        )
    cells.extend([record.symbol, str(record.order_id)])
    return ",".join(cells)


def write_mbp(records: Iterable[MBPRecord], path: str | os.PathLike[str]) -> None:
    """Write a header and one line per record to an MBP file."""
    with open(path, "w", encoding="utf-8") as fh:
        fh.write(mbp_header() + "\n")
        for index, record in enumerate(records):
            fh.write(format_mbp_line(record, index) + "\n")