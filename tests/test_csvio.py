import csv

import pytest

from mbpbook.csvio import (
    format_mbp_line,
    mbp_header,
    parse_mbo_line,
    read_mbo,
    write_mbp,
)
from mbpbook.records import MBPRecord

LINE = (
    "2025-07-17T08:05:03.360677248Z,2025-07-17T08:05:03.360677248Z,160,2,1108,"
    "A,B,5.510000000,100,0,817593,130,165200,851012,ARL"
)


def _sample_mbp():
    record = MBPRecord(
        ts_recv="2025-07-17T08:05:03.360677248Z",
        ts_event="2025-07-17T08:05:03.360677248Z",
        rtype=10,
        publisher_id=2,
        instrument_id=1108,
        action="A",
        side="B",
        depth=0,
        price=5.51,
        size=100,
        flags=130,
        ts_in_delta=165200,
        sequence=851012,
        symbol="ARL",
        order_id=817593,
    )
    record.bid_prices[0] = 5.51
    record.bid_sizes[0] = 100
    record.bid_counts[0] = 1
    return record


def test_csv_parsing():
    record = parse_mbo_line(LINE)
    assert record.action == "A"
    assert record.side == "B"
    assert record.price == 5.51
    assert record.size == 100
    assert record.order_id == 817593
    assert record.symbol == "ARL"
    assert record.rtype == 160
    assert record.sequence == 851012


def test_parse_empty_action_side_price_size():
    record = parse_mbo_line("t,t,160,2,1108,R,,,,0,0,8,0,0,ARL")
    assert record.action == "R"
    assert record.side == " "
    assert record.price == 0.0
    assert record.size == 0
    assert record.symbol == "ARL"


def test_parse_short_line_keeps_defaults():
    record = parse_mbo_line("t1,t2,160,")
    assert record.rtype == 160
    assert record.publisher_id == 0
    assert record.symbol == ""


def test_parse_bad_integer_raises():
    with pytest.raises(ValueError):
        parse_mbo_line("t,t,abc,2,1108,A,B,1.0,100,0,1,0,0,0,ARL")


def test_mbp_formatting():
    formatted = format_mbp_line(_sample_mbp(), 1)
    assert "2025-07-17T08:05:03.360677248Z" in formatted
    assert "5.51" in formatted
    assert "100" in formatted
    assert "ARL" in formatted


def test_formatted_fields_line_up_with_header():
    header = mbp_header().split(",")
    fields = format_mbp_line(_sample_mbp(), 1).split(",")
    assert len(fields) == len(header)
    row = dict(zip(header, fields))
    assert row[""] == "1"
    assert row["bid_px_00"] == "5.51"
    assert row["bid_sz_00"] == "100"
    assert row["ask_px_00"] == ""
    assert row["symbol"] == "ARL"
    assert row["order_id"] == "817593"


def test_zero_price_is_blank():
    record = MBPRecord(symbol="TEST")
    fields = dict(zip(mbp_header().split(","), format_mbp_line(record, 0).split(",")))
    assert fields["price"] == ""
    assert fields["bid_px_09"] == ""


def test_header_shape():
    header = mbp_header()
    assert header.startswith(",ts_recv,ts_event,rtype,publisher_id,instrument_id,")
    assert header.endswith("ask_ct_09,symbol,order_id")
    assert "bid_px_00,bid_sz_00,bid_ct_00,ask_px_00,ask_sz_00,ask_ct_00," in header


def test_write_mbp_round_trip(tmp_path):
    path = tmp_path / "output_mbp.csv"
    records = [_sample_mbp(), MBPRecord(symbol="ARL", action="R")]
    write_mbp(records, path)
    with open(path, newline="", encoding="utf-8") as fh:
        rows = list(csv.reader(fh))
    assert rows[0] == mbp_header().split(",")
    assert len(rows) == 1 + len(records)
    assert rows[1] == format_mbp_line(records[0], 0).split(",")
    assert rows[2][0] == "1"
    assert rows[2][-2] == "ARL"


def test_read_mbo_skips_header_and_blank_lines(tmp_path):
    path = tmp_path / "mbo.csv"
    path.write_text("header\n" + LINE + "\n\n" + LINE + "\n", encoding="utf-8")
    records = read_mbo(path)
    assert len(records) == 2
    assert records[0] == parse_mbo_line(LINE)


def test_read_mbo_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_mbo(tmp_path / "absent.csv")