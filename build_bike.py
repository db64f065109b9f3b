#!/usr/bin/env python3
"""
Bike Build Pricing

Resolves a bike specification into a priced bill of materials and prints
a report. Exit code is 0 when every component resolved, 1 otherwise.

Usage:
    python3 build_bike.py --spec my_bike.json
    python3 build_bike.py --frame ROAD --disc --brakes HYDRAULIC_DISC --shifters STI \\
        --handlebars DROPS --wheels CHEAP --front-gears 2 --rear-gears 11
    python3 build_bike.py --spec my_bike.json --output-json output/bill.json --verbose
"""

import argparse
import json
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

load_dotenv(Path(__file__).parent / ".env")

from bikeparts.common.log_config import setup_logging
from bikeparts.models import BikeSpecification, BillOfMaterials
from bikeparts.resolution import PartsOrchestrator


def build_spec(args: argparse.Namespace) -> BikeSpecification:
    """Build the specification from --spec or the individual flags."""
    if args.spec:
        with open(args.spec, 'r', encoding='utf-8') as f:
            data = json.load(f)
    else:
        data = {
            "frame_style": args.frame,
            "disc_brake_compatible": args.disc,
            "brake_type": args.brakes,
            "shifter_style": args.shifters,
            "handlebar_type": args.handlebars,
            "wheel_preference": args.wheels,
            "groupset_brand": args.groupset,
            "front_gears": args.front_gears,
            "rear_gears": args.rear_gears,
        }
    return BikeSpecification.from_dict(data)


def print_report(bill: BillOfMaterials):
    """Print the bill of materials."""

    print("\n" + "="*80)
    print("BILL OF MATERIALS")
    print("="*80)

    spec = bill.specification
    print(f"\nFrame: {spec.frame_style.value} (disc compatible: {spec.disc_brake_compatible})")
    print(f"Brakes: {spec.brake_type.value}  Shifters: {spec.shifter_style.value}")
    print(f"Gearing: {spec.front_gears}x{spec.rear_gears} {spec.groupset_brand.value}")

    print(f"\nPARTS ({len(bill.parts)} items):")
    for part in bill.parts:
        print(f"  {part.label:28} {part.price:>10.2f}  {part.name[:40]}")

    if bill.notes:
        print("\nNOTES:")
        for note in bill.notes:
            print(f"  - {note}")

    if bill.errors:
        print(f"\nERRORS ({len(bill.errors)}):")
        for error in bill.errors:
            print(f"  [{error.stage.value:7}] {error.component}: {error.detail}")
            if error.url:
                print(f"            {error.url}")

    print("\n" + "-"*80)
    print(f"TOTAL: {bill.total_price_display}")
    print("="*80)


def main():
    parser = argparse.ArgumentParser(
        description="Price a bike build from vendor product pages"
    )
    parser.add_argument("--spec", help="JSON file with the bike specification")
    parser.add_argument("--frame", default="ROAD", help="ROAD, TOUR, GRAVEL or SINGLE_SPEED")
    parser.add_argument("--disc", action="store_true", help="Frame is disc-brake compatible")
    parser.add_argument("--brakes", default="RIM", help="RIM, MECHANICAL_DISC or HYDRAULIC_DISC")
    parser.add_argument("--shifters", default="STI", help="TRIGGER or STI")
    parser.add_argument("--handlebars", default="DROPS", help="DROPS, FLAT, BULLHORNS or FLARE")
    parser.add_argument("--wheels", default="CHEAP", help="CHEAP or PREMIUM")
    parser.add_argument("--groupset", default="SHIMANO", help="Groupset brand")
    parser.add_argument("--front-gears", type=int, default=2)
    parser.add_argument("--rear-gears", type=int, default=11)
    parser.add_argument("--output-json", help="Write the bill of materials as JSON")
    parser.add_argument("--verbose", action="store_true", help="Debug logging")
    parser.add_argument("--quiet", action="store_true", help="Only log warnings and errors")

    args = parser.parse_args()
    setup_logging(verbose=args.verbose, quiet=args.quiet)

    try:
        spec = build_spec(args)
    except (OSError, ValueError) as e:
        print(f"\nInvalid bike specification: {e}")
        sys.exit(2)

    bill = PartsOrchestrator().build(spec)
    print_report(bill)

    if args.output_json:
        os.makedirs(os.path.dirname(args.output_json) or ".", exist_ok=True)
        with open(args.output_json, 'w', encoding='utf-8') as f:
            json.dump(bill.to_dict(), f, indent=2, ensure_ascii=False)
        print(f"\nBill saved to: {args.output_json}")

    sys.exit(0 if bill.is_complete else 1)


if __name__ == "__main__":
    main()
