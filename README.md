# mbpbook

`mbpbook` replays market-by-order (MBO) records through an aggregated
price-level order book and produces a market-by-price (MBP) snapshot of the
top ten bid and ask levels after each event that changes the book.

It has no dependencies outside the standard library.

## Installation

```
pip install .
```

## Command line

```
mbpbook mbo.csv
```

The command takes exactly one argument, the MBO input file; any other number
of arguments prints `Usage: mbpbook <mbo_input_file.csv>` and exits with
status 1. The result is always written to `output_mbp.csv` in the current
directory. The command prints how many records it read and wrote and how long
the run took. A file that cannot be read or a field that cannot be parsed
prints `Error: ...` and exits with status 1.

### Input

A CSV file whose first line is a header (it is skipped) and whose other
non-empty lines hold, in order:

`ts_recv, ts_event, rtype, publisher_id, instrument_id, action, side, price,
size, channel_id, order_id, flags, ts_in_delta, sequence, symbol`

Missing trailing fields keep their defaults. An empty `price` or `size` is
read as zero; an empty `action` or `side` is read as a space.

### Output

A header line followed by one line per snapshot. Each line begins with its
row index, then the event's fields with `rtype` set to 10 and `depth` set to
0, then for levels `00` to `09` the columns `bid_px`, `bid_sz`, `bid_ct`,
`ask_px`, `ask_sz`, `ask_ct`, and finally `symbol` and `order_id`. The event
price is written with eight decimals and level prices with two; a price of
zero is written as an empty cell.

### How events are handled

- A leading `R` (clear) record is skipped.
- `A` adds the order's size to its price level and increases the level's
  order count.
- `T` with side `N` is ignored. Any other `T` is held as a pending trade,
  keyed by its order id; a later `F` with the same order id marks it filled.
- `C` at the price and side of a pending trade (the lowest order id is tried
  first) completes that trade: the trade's size is taken off the opposite side
  of the book and the snapshot is recorded with action `T` and that opposite
  side. Any other `C` removes the order's size from its level; a level whose
  size or count falls to zero is removed.
- `R` later in the stream clears the book.
- Once every event is replayed, pending trades that were filled but never
  cancelled are applied in order-id order, again on the side opposite to the
  trade's own side.

## Library use

```python
from mbpbook.cli import reconstruct
from mbpbook.csvio import read_mbo, write_mbp
from mbpbook.orderbook import OrderBook

records = read_mbo("mbo.csv")
snapshots = reconstruct(records)
write_mbp(snapshots, "snapshots.csv")

book = OrderBook()
book.add_order("B", 10.50, 100, 1001)
book.add_order("A", 10.75, 150, 1002)
book.handle_trade("A", 10.75, 50)
book.print_book()
```

- `mbpbook.records` holds the `MBORecord` and `MBPRecord` dataclasses.
- `mbpbook.orderbook.OrderBook` offers `add_order`, `cancel_order`,
  `handle_trade`, `clear`, `generate_mbp` (turns the current book and an
  `MBORecord` into an `MBPRecord`) and `print_book` (writes the book to
  standard output or to a given text file).
- `mbpbook.csvio` offers `read_mbo`, `parse_mbo_line`, `mbp_header`,
  `format_mbp_line` and `write_mbp`.
- `mbpbook.cli` offers `reconstruct` and the command's `main`.

Progress during `reconstruct` is reported through the `mbpbook.cli` logger
at INFO level.

## Limits

The command has no options: the output path is fixed to `output_mbp.csv`, and
to write elsewhere call `write_mbp` from Python. The book keeps only
aggregated size and order count per price level, so a cancel is applied to
the price and size given in the cancel record itself, not looked up from the
original order.

## Tests

```
pip install .[test]
pytest
```