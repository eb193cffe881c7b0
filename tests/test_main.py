"""Tests for the CLI and shipment tracking."""

import argparse
from decimal import Decimal

import pytest

from correios_shipping import main as cli
from correios_shipping.models import ShippingOption
from correios_shipping.store import MetricStore
from correios_shipping.tracking import CorreiosShipmentTracker


class TestTracker:

    def test_url(self):
        assert CorreiosShipmentTracker().get_url("OJ123456789BR") == \
            "https://melhorrastreio.com.br/rastreio/OJ123456789BR"

    @pytest.mark.parametrize("number", ["OJ123456789BR", "pn987654321br", " SS123456789BR "])
    def test_matches_s10_numbers(self, number):
        assert CorreiosShipmentTracker().is_match(number)

    @pytest.mark.parametrize("number", ["", "123456789", "OJ12345678BR", "1Z999AA10123456784"])
    def test_rejects_other_numbers(self, number):
        assert not CorreiosShipmentTracker().is_match(number)

    def test_no_events(self):
        assert CorreiosShipmentTracker().get_shipment_events("OJ123456789BR") == []


class TestParseItem:

    def test_with_quantity(self):
        item = cli.parse_item("0.5,20,15,5,30.00,2")
        assert item.weight == Decimal("0.5")
        assert item.price == Decimal("30.00")
        assert item.quantity == 2

    def test_default_quantity(self):
        assert cli.parse_item("1,20,15,5,30").quantity == 1

    @pytest.mark.parametrize("text", ["1,2,3", "a,b,c,d,e", "1,2,3,4,5,x"])
    def test_invalid(self, text):
        with pytest.raises(argparse.ArgumentTypeError):
            cli.parse_item(text)


class TestMain:

    def test_track(self, capsys):
        with pytest.raises(SystemExit) as exc:
            cli.main(["--track", "OJ123456789BR", "--url", "https://rates.example.com/quote"])
        assert exc.value.code == 0
        assert "melhorrastreio.com.br/rastreio/OJ123456789BR" in capsys.readouterr().out

    def test_list_services(self, capsys):
        with pytest.raises(SystemExit):
            cli.main(["--list-services"])
        assert "04510  PAC à vista" in capsys.readouterr().out

    def test_incomplete_request_exits_with_errors(self, capsys):
        with pytest.raises(SystemExit) as exc:
            cli.main(["--url", "https://rates.example.com/quote", "--services", "04510"])
        assert exc.value.code == 1
        out = capsys.readouterr().out
        assert "No shipment items" in out
        assert "Shipping state is not set" in out

    def test_export_csv(self, tmp_path):
        path = tmp_path / "options.csv"
        cli._export_csv([ShippingOption(name="PAC à vista - 5 day(s)", rate=Decimal("20"))], path)
        assert path.read_text().splitlines() == ["option,name,rate", "1,PAC à vista - 5 day(s),20.00"]

    def test_missing_dimension_unit_exits(self, monkeypatch, capsys):
        monkeypatch.setattr(cli, "MetricStore", lambda: MetricStore(dimension_units={}))
        with pytest.raises(SystemExit) as exc:
            cli.main([
                "--url", "https://rates.example.com/quote",
                "--item", "1,20,15,5,30",
                "--dest-zip", "20040-020",
                "--state-id", "19",
                "--services", "04510",
            ])
        assert exc.value.code == 1
        assert "Error:" in capsys.readouterr().err
