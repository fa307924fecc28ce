"""Tests for synonym-based column resolution."""

from __future__ import annotations

import pytest

from seaquote.agents.idp.schema_matcher import ITEM_COLUMNS, get_string, scan_metadata
from seaquote.core.exceptions import MissingColumnError


class TestGetString:
    def test_first_candidate_with_value_wins(self):
        row = {"Desc": "Gasket", "Description": "Engine gasket"}
        assert get_string(row, ["Description", "Desc"]) == "Engine gasket"

    def test_skips_blank_candidates(self):
        row = {"Description": "", "Desc": "  Gasket  "}
        assert get_string(row, ["Description", "Desc"]) == "Gasket"

    def test_match_is_case_sensitive(self):
        assert get_string({"DESCRIPTION": "Gasket"}, ["Description"]) == ""

    def test_optional_missing_returns_empty(self):
        assert get_string({}, ["Unit", "UoM"]) == ""

    def test_required_missing_raises(self):
        with pytest.raises(MissingColumnError, match="Unit or UoM"):
            get_string({"Unit": ""}, ["Unit", "UoM"], required=True)

    def test_required_missing_reports_row(self):
        with pytest.raises(MissingColumnError) as exc_info:
            get_string({}, ["Qty"], required=True, row_number=7)
        assert exc_info.value.row_number == 7
        assert str(exc_info.value).startswith("Row 7:")

    @pytest.mark.parametrize("header", ["Description", "Item Description", "Desc", "Item", "Item Name"])
    def test_description_synonyms(self, header):
        assert get_string({header: "Valve"}, ITEM_COLUMNS["description"]) == "Valve"


class TestScanMetadata:
    def test_first_non_empty_row_wins(self):
        rows = [{"Vessel": ""}, {"Vessel": "MV Star"}, {"Vessel": "MV Moon"}]
        assert scan_metadata(rows, ["Vessel"]) == "MV Star"

    def test_stops_after_max_rows(self):
        rows = [{"Port": ""}] * 5 + [{"Port": "Rotterdam"}]
        assert scan_metadata(rows, ["Port"]) == ""
        assert scan_metadata(rows, ["Port"], max_rows=6) == "Rotterdam"

    def test_short_sheet(self):
        assert scan_metadata([{"Port": "Busan"}], ["Port"]) == "Busan"
