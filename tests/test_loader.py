"""Tests for file loading, record parsing and table validation."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import io

import pandas as pd
import pytest

from config.defaults import HOUSING_COLUMNS, PARTICIPANT_COLUMNS
from data.loader import load_file, parse_housing, parse_participants, parse_quantity
from data.sample_data import generate_housing_df, generate_participants_df
from data.validator import import_warnings, validate_housing_table, validate_participant_table
from engine.validator import validate_supply


class Upload(io.BytesIO):
    """Stands in for an uploaded file, which carries a name."""

    def __init__(self, data: bytes, name: str):
        super().__init__(data)
        self.name = name


def participants_df(rows):
    return pd.DataFrame(rows, columns=PARTICIPANT_COLUMNS)


class TestParseQuantity:
    @pytest.mark.parametrize("text,expected", [
        ("1", 1), (" 12 ", 12), ("2.0", 2),
        ("0", None), ("-3", None), ("abc", None), ("", None), ("2.5", None),
    ])
    def test_values(self, text, expected):
        assert parse_quantity(text) == expected


class TestParseParticipants:
    def test_same_name_rows_merge_in_order(self):
        df = participants_df([
            ["Bob", "2BR", "1"],
            ["Alice", "1BR", "2"],
            ["Bob", "1BR", "1"],
        ])
        result = parse_participants(df)

        assert [p.name for p in result.participants] == ["Bob", "Alice"]
        bob = result.participants[0]
        assert [(n.housing_type, n.quantity) for n in bob.needs] == [("2BR", 1), ("1BR", 1)]
        assert bob.rank is None
        assert result.dropped_rows == 0

    def test_invalid_rows_dropped(self):
        df = participants_df([
            ["", "2BR", "1"],
            ["Carol", "", "1"],
            ["Dan", "2BR", "0"],
            ["Eve", "2BR", "many"],
            [" Frank ", " 3BR ", " 1 "],
        ])
        result = parse_participants(df)

        assert [p.name for p in result.participants] == ["Frank"]
        assert result.participants[0].needs[0].housing_type == "3BR"
        assert result.dropped_rows == 4

    def test_ids_unique(self):
        df = participants_df([["A", "2BR", "1"], ["B", "2BR", "1"]])
        ids = {p.participant_id for p in parse_participants(df).participants}
        assert len(ids) == 2


class TestParseHousing:
    def test_all_columns_carried_through(self):
        df = pd.DataFrame(
            [["2BR", "East", "7", "3", "301", "61.2", "78.4"]],
            columns=HOUSING_COLUMNS,
        )
        unit = parse_housing(df).units[0]
        assert (unit.housing_type, unit.district, unit.building, unit.floor) == ("2BR", "East", "7", "3")
        assert (unit.room_number, unit.area, unit.construction_area) == ("301", "61.2", "78.4")

    def test_missing_columns_blank_and_typeless_rows_dropped(self):
        df = pd.DataFrame([["1BR", "West"], ["", "West"]], columns=["Type", "District"])
        result = parse_housing(df)
        assert len(result.units) == 1
        assert result.units[0].district == "West"
        assert result.units[0].construction_area == ""
        assert result.dropped_rows == 1


class TestLoadFile:
    def test_csv_with_bom_and_short_rows(self):
        text = "姓名,户型,数量\nAlice,2BR,1\nBob,1BR\n"
        df = load_file(Upload(text.encode("utf-8-sig"), "people.csv"), 3)

        assert len(df) == 2
        assert df.iloc[0, 0] == "Alice"
        result = parse_participants(df)
        assert [p.name for p in result.participants] == ["Alice"]
        assert result.dropped_rows == 1

    def test_numbers_stay_text(self):
        df = load_file(Upload(b"type,district,building,floor,room\n2BR,East,7,03,0301\n", "h.csv"), 7)
        unit = parse_housing(df).units[0]
        assert unit.floor == "03"
        assert unit.room_number == "0301"

    def test_xlsx(self):
        buffer = io.BytesIO()
        pd.DataFrame([["Alice", "2BR", 2]], columns=PARTICIPANT_COLUMNS).to_excel(
            buffer, index=False, engine="openpyxl",
        )
        df = load_file(Upload(buffer.getvalue(), "people.xlsx"), 3)
        participant = parse_participants(df).participants[0]
        assert participant.needs[0].quantity == 2

    @pytest.mark.parametrize("name", ["people.txt", "people.xls"])
    def test_unsupported_extension(self, name):
        with pytest.raises(ValueError, match="Unsupported file format"):
            load_file(Upload(b"", name), 3)

    def test_rows_wider_than_header_keep_trailing_cells(self):
        text = "户型\n2BR,East,B1,3,301,60,75\n1BR,West,B2,5,502,40,50\n"
        df = load_file(Upload(text.encode("utf-8"), "housing.csv"), 7)

        units = parse_housing(df).units
        assert [(u.housing_type, u.district, u.building) for u in units] == [
            ("2BR", "East", "B1"), ("1BR", "West", "B2"),
        ]
        assert units[0].construction_area == "75"

    def test_short_participant_header_keeps_quantity(self):
        text = "name,type\nAlice,2BR,2\n"
        df = load_file(Upload(text.encode("utf-8"), "people.csv"), 3)

        assert validate_participant_table(df).is_valid
        assert parse_participants(df).participants[0].needs[0].quantity == 2

    def test_xlsx_rows_wider_than_header(self):
        buffer = io.BytesIO()
        pd.DataFrame([["Type", None, None, None], ["2BR", "East", "B1", "3"]]).to_excel(
            buffer, index=False, header=False, engine="openpyxl",
        )
        unit = parse_housing(load_file(Upload(buffer.getvalue(), "h.xlsx"), 7)).units[0]
        assert (unit.district, unit.floor, unit.room_number) == ("East", "3", "")

    def test_corrupt_workbook_is_a_value_error(self):
        with pytest.raises(ValueError, match="as an Excel workbook"):
            load_file(Upload(b"name,type,qty\nAlice,2BR,1\n", "people.xlsx"), 3)


class TestTableValidation:
    def test_participant_table_needs_three_columns(self):
        result = validate_participant_table(pd.DataFrame([["A", "2BR"]], columns=["n", "t"]))
        assert not result.is_valid
        assert "at least 3 columns" in result.errors[0]

    def test_empty_table_rejected(self):
        result = validate_housing_table(pd.DataFrame(columns=HOUSING_COLUMNS))
        assert not result.is_valid
        assert "no data rows" in result.errors[0]

    def test_short_housing_table_warns(self):
        result = validate_housing_table(pd.DataFrame([["2BR", "East"]], columns=["t", "d"]))
        assert result.is_valid
        assert "Building" in result.warnings[0]

    def test_import_warnings(self):
        assert import_warnings(0, 0) == []
        warnings = import_warnings(2, 1)
        assert len(warnings) == 2
        assert "2 row(s)" in warnings[0]


class TestSampleData:
    def test_sample_passes_validation(self):
        participants = parse_participants(generate_participants_df()).participants
        units = parse_housing(generate_housing_df()).units

        assert len(participants) == 9
        validate_supply(participants, units)
        assert validate_housing_table(generate_housing_df()).warnings == []


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
