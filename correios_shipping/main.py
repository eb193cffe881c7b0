#!/usr/bin/env python3
"""CLI entry point for quoting Correios shipping options."""

import argparse
import csv
import logging
import sys
from decimal import Decimal, InvalidOperation

from correios_shipping.engine import RateComputationEngine
from correios_shipping.errors import ConfigurationError
from correios_shipping.http_client import HttpRateClient
from correios_shipping.models import Address, CarrierSettings, LineItem, ShipmentRequest
from correios_shipping.services import SERVICE_NAMES, encode_services
from correios_shipping.store import MetricStore


def _print_options(response):
    """Print the quoted options and any errors to stdout."""
    print(f"\n{'=' * 70}")
    print("  CORREIOS SHIPPING OPTIONS")
    print(f"  {len(response.shipping_options)} option(s) | {len(response.errors)} error(s)")
    print(f"{'=' * 70}\n")

    for i, option in enumerate(response.shipping_options, 1):
        print(f"  Option {i}: {option.name}")
        print(f"    Rate:    R$ {option.rate:.2f}")
        print()

    for error in response.errors:
        print(f"  Error: {error}")


def _export_csv(options, path):
    """Export the shipping options to a CSV file."""
    with open(path, "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(["option", "name", "rate"])
        for i, option in enumerate(options, 1):
            writer.writerow([i, option.name, f"{option.rate:.2f}"])
    print(f"Options exported to {path}")


def _decimal_arg(text: str) -> Decimal:
    try:
        return Decimal(text)
    except InvalidOperation:
        raise argparse.ArgumentTypeError(f"invalid decimal {text!r}") from None


def parse_item(text: str) -> LineItem:
    """Parse ``WEIGHT,LENGTH,WIDTH,HEIGHT,PRICE[,QTY]`` into a LineItem."""
    parts = [p.strip() for p in text.split(",")]
    if len(parts) not in (5, 6):
        raise argparse.ArgumentTypeError(
            f"expected WEIGHT,LENGTH,WIDTH,HEIGHT,PRICE[,QTY], got {text!r}"
        )
    try:
        weight, length, width, height, price = (Decimal(p) for p in parts[:5])
        quantity = int(parts[5]) if len(parts) == 6 else 1
    except (InvalidOperation, ValueError):
        raise argparse.ArgumentTypeError(f"invalid item {text!r}") from None
    return LineItem(weight=weight, length=length, width=width, height=height,
                    price=price, quantity=quantity)


def _build_settings(args) -> CarrierSettings:
    services = None
    if args.services:
        services = encode_services(s.strip() for s in args.services.split(",") if s.strip())
    return CarrierSettings.from_env(
        url=args.url,
        postal_code_from=args.origin_zip,
        services_offered=services,
        add_days_for_delivery=args.add_days,
        percentage_shipping_fee=args.fee,
        request_timeout=args.timeout,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Quote Correios shipping options for a parcel.",
    )
    parser.add_argument(
        "--item",
        action="append",
        type=parse_item,
        default=[],
        metavar="W,L,WI,H,PRICE[,QTY]",
        help="Line item in kg/cm/BRL. Repeat for several items.",
    )
    parser.add_argument("--dest-zip", help="Destination postal code.")
    parser.add_argument("--country-id", type=int, default=1, help="Destination country id (default: 1).")
    parser.add_argument("--state-id", type=int, help="Destination state/province id.")
    parser.add_argument(
        "--csv",
        metavar="FILE",
        help="Export the quoted options to a CSV file.",
    )
    parser.add_argument(
        "--track",
        metavar="CODE",
        help="Print the tracking URL for a Correios tracking number and exit.",
    )
    parser.add_argument(
        "--list-services",
        action="store_true",
        help="List the known Correios service codes and exit.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log carrier calls.")

    # Settings overrides.
    settings_group = parser.add_argument_group("Carrier settings (override CORREIOS_* env vars)")
    settings_group.add_argument("--url", help="Rate endpoint URL.")
    settings_group.add_argument("--origin-zip", help="Default origin postal code.")
    settings_group.add_argument("--services", help="Comma separated service codes, e.g. 04510,04014.")
    settings_group.add_argument("--add-days", type=int, help="Days added to every lead time.")
    settings_group.add_argument("--fee", type=_decimal_arg, help="Fee multiplier applied to carrier prices.")
    settings_group.add_argument("--timeout", type=float, help="Per-service request timeout in seconds.")
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.list_services:
        for code, name in SERVICE_NAMES.items():
            print(f"  {code}  {name}")
        sys.exit(0)

    settings = _build_settings(args)
    store = MetricStore()

    try:
        client = HttpRateClient(url=settings.url, timeout=settings.request_timeout)
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)

    engine = RateComputationEngine.for_store(settings, client, store)

    if args.track:
        tracker = engine.shipment_tracker
        if not tracker.is_match(args.track):
            print(f"Warning: {args.track} does not look like a Correios tracking number.")
        print(tracker.get_url(args.track))
        sys.exit(0)

    request = ShipmentRequest(
        items=tuple(args.item),
        shipping_address=Address(
            country_id=args.country_id,
            state_province_id=args.state_id,
            zip_postal_code=args.dest_zip,
        ),
    )

    try:
        if args.item and engine.hide_shipment_methods(list(args.item)):
            print("Warning: these items exceed what Correios accepts; quotes may be refused.")

        print(f"Quoting {len(settings.enabled_services)} Correios service(s)...")
        response = engine.get_shipping_options(request)
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)

    _print_options(response)

    if args.csv and response.shipping_options:
        _export_csv(response.shipping_options, args.csv)

    if not response.success:
        sys.exit(1)


if __name__ == "__main__":
    main()
