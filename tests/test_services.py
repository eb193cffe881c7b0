"""Tests for the service code table and its stored encoding."""

import pytest

from correios_shipping.services import (
    SERVICE_NAMES,
    _build_tables,
    decode_services,
    encode_services,
    is_service_enabled,
    service_code_from_name,
    service_name_from_code,
)


class TestServiceLookup:
    """Test code <-> name lookups."""

    def test_round_trip_for_every_entry(self):
        """Test name -> code -> name is stable for the whole table."""
        for code, name in SERVICE_NAMES.items():
            assert service_code_from_name(name) == code
            assert service_name_from_code(service_code_from_name(name)) == name

    def test_known_codes(self):
        assert service_name_from_code("04510") == "PAC à vista"
        assert service_name_from_code("04014") == "SEDEX à vista"

    def test_unknown_code_raises(self):
        with pytest.raises(ValueError):
            service_name_from_code("99999")

    def test_unknown_name_raises(self):
        with pytest.raises(ValueError):
            service_code_from_name("Carrier pigeon")

    def test_table_is_read_only(self):
        with pytest.raises(TypeError):
            SERVICE_NAMES["00000"] = "Nope"

    def test_duplicate_names_rejected(self):
        """Test two codes sharing a name fail table construction."""
        with pytest.raises(ValueError):
            _build_tables({"1": "Same", "2": "Same"})


class TestEncoding:
    """Test the bracket-delimited storage format."""

    def test_encode(self):
        assert encode_services(["04510", "04014"]) == "[04510]:[04014]:"

    def test_encode_empty(self):
        assert encode_services([]) == ""

    def test_decode(self):
        assert decode_services("[04510]:[04014]:") == ["04510", "04014"]

    def test_decode_without_trailing_separator(self):
        assert decode_services("[04510]:[04014]") == ["04510", "04014"]

    def test_decode_empty(self):
        assert decode_services("") == []
        assert decode_services(None) == []

    def test_membership(self):
        assert is_service_enabled("[04510]:[04014]:", "04014")
        assert not is_service_enabled("[04510]:[04014]:", "40010")

    def test_membership_does_not_match_inside_longer_code(self):
        """Test a longer code does not count as a shorter one."""
        assert not is_service_enabled("[045101]:", "04510")
        assert not is_service_enabled("[104510]:", "04510")

    def test_membership_empty(self):
        assert not is_service_enabled("", "04510")
        assert not is_service_enabled("[04510]:", "")
