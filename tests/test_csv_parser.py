"""
Tests for CSV ingestion.

Run with: python -m pytest tests/test_csv_parser.py -v
"""

import math
import warnings
from datetime import datetime

import pytest

from comfort_horizon.csv_parser import load_records, parse_csv_text, parse_row

HEADER = "id,time,category,field,value,score\n"


class TestParseCsvText:
    def test_basic_row(self):
        text = HEADER + "1,2024-03-04T08:00:00Z,Air quality,CO_2,512.5,81\n"
        (record,) = parse_csv_text(text)
        assert record.id == 1
        assert record.time == datetime(2024, 3, 4, 8, 0, 0)
        assert record.category == "Air quality"
        assert record.field == "CO_2"
        assert record.value == 512.5
        assert record.score == 81.0

    def test_header_only(self):
        assert parse_csv_text(HEADER) == []

    def test_blank_lines_ignored(self):
        text = HEADER + "\n1,2024-03-04T08:00:00,a,b,1,2\n\n"
        assert len(parse_csv_text(text)) == 1

    def test_bom_stripped(self):
        text = "﻿" + HEADER + "1,2024-03-04T08:00:00,a,b,1,2\n"
        assert parse_csv_text(text)[0].id == 1

    def test_strings_kept_verbatim(self):
        text = HEADER + "1,2024-03-04T08:00:00, Air quality ,PM_{2.5},1,2\n"
        record = parse_csv_text(text)[0]
        assert record.category == " Air quality "
        assert record.field == "PM_{2.5}"

    def test_extra_columns_ignored(self):
        text = HEADER + "1,2024-03-04T08:00:00,a,b,1,2,extra,more\n"
        assert parse_csv_text(text)[0].score == 2.0


class TestLenientNumbers:
    @pytest.mark.parametrize("cell, expected", [
        ("21.5", 21.5),
        ("21.5°C", 21.5),
        ("  -3e2", -300.0),
        (".5", 0.5),
        ("7.", 7.0),
    ])
    def test_numeric_prefix(self, cell, expected):
        text = HEADER + f"1,2024-03-04T08:00:00,a,b,{cell},0\n"
        assert parse_csv_text(text)[0].value == expected

    @pytest.mark.parametrize("cell", ["", "NaN", "n/a", "abc"])
    def test_unparseable_is_nan(self, cell):
        text = HEADER + f"1,2024-03-04T08:00:00,a,b,{cell},0\n"
        assert math.isnan(parse_csv_text(text)[0].value)

    def test_id_prefix(self):
        text = HEADER + "42abc,2024-03-04T08:00:00,a,b,1,0\n"
        assert parse_csv_text(text)[0].id == 42


class TestTimestamps:
    def test_offset_converted_to_utc(self):
        text = HEADER + "1,2024-03-04T00:30:00+01:00,a,b,1,0\n"
        assert parse_csv_text(text)[0].time == datetime(2024, 3, 3, 23, 30)

    def test_naive_kept(self):
        text = HEADER + "1,2024-03-04 08:15:00,a,b,1,0\n"
        assert parse_csv_text(text)[0].time == datetime(2024, 3, 4, 8, 15)

    def test_unparseable_is_none_with_warning(self):
        text = HEADER + "1,yesterday,a,b,1,0\n"
        with pytest.warns(UserWarning, match="unparseable timestamp"):
            records = parse_csv_text(text)
        assert records[0].time is None


class TestDroppedRows:
    def test_short_rows_dropped_with_warning(self):
        text = (HEADER
                + "1,2024-03-04T08:00:00,a,b,1,0\n"
                + "2,2024-03-04T08:15:00,a,b\n"
                + "3,2024-03-04T08:30:00,a,b,1,0\n")
        with pytest.warns(UserWarning, match="fewer than 6 columns"):
            records = parse_csv_text(text, source="feed.csv")
        assert [r.id for r in records] == [1, 3]

    def test_bad_id_dropped_with_warning(self):
        text = HEADER + "x1,2024-03-04T08:00:00,a,b,1,0\n"
        with pytest.warns(UserWarning, match="without an integer id"):
            assert parse_csv_text(text) == []

    def test_clean_input_no_warnings(self):
        text = HEADER + "1,2024-03-04T08:00:00,a,b,1,0\n"
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            parse_csv_text(text)

    def test_parse_row_short(self):
        assert parse_row(["1", "2024-01-01", "a"]) is None


class TestLoadRecords:
    def test_load(self, tmp_path):
        path = tmp_path / "feed.csv"
        path.write_text(HEADER + "1,2024-03-04T08:00:00Z,a,b,1,0\n",
                        encoding="utf-8")
        records = load_records(str(path))
        assert len(records) == 1

    def test_load_with_bom(self, tmp_path):
        path = tmp_path / "feed.csv"
        path.write_bytes(("﻿" + HEADER + "7,2024-03-04,a,b,1,0\n")
                         .encode("utf-8"))
        assert load_records(str(path))[0].id == 7

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_records(str(tmp_path / "missing.csv"))

    def test_no_data_rows(self, tmp_path):
        path = tmp_path / "empty.csv"
        path.write_text(HEADER, encoding="utf-8")
        with pytest.raises(ValueError, match="empty.csv"):
            load_records(str(path))
