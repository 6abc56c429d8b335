#!/usr/bin/env python
"""
Curve Bootstrap Demo Script

This script demonstrates the full workflow of the rate helpers:
1. Turn a table of market quotes into calibration helpers
2. Bootstrap a USD ibor curve from deposits, futures, FRAs and swaps
3. Report repricing errors and the curve nodes
4. Compute the quote Jacobian of the calibrated curve

Usage:
    python run_bootstrap_demo.py [--output-dir OUTPUT_DIR] [--verbose]
"""

import argparse
import logging
from datetime import date
from pathlib import Path
from typing import List

import pandas as pd

from ratehelpers import (
    BootstrapConfig,
    DepositHelper,
    FraHelper,
    FuturesHelper,
    IborIndex,
    IterativeBootstrapper,
    SwapHelper,
    SwapIndex,
    quote_jacobian,
)


SAMPLE_QUOTES = [
    {"instrument_type": "DEPOSIT", "tenor": "1M", "quote": 0.0532},
    {"instrument_type": "DEPOSIT", "tenor": "3M", "quote": 0.0535},
    {"instrument_type": "FUT", "start": "2024-06-19", "quote": 94.80},
    {"instrument_type": "FUT", "start": "2024-09-18", "quote": 95.05},
    {"instrument_type": "FRA", "tenor": "9x12", "quote": 0.0468},
    {"instrument_type": "SWAP", "tenor": "2Y", "quote": 0.0455},
    {"instrument_type": "SWAP", "tenor": "3Y", "quote": 0.0430},
    {"instrument_type": "SWAP", "tenor": "5Y", "quote": 0.0405},
    {"instrument_type": "SWAP", "tenor": "7Y", "quote": 0.0398},
    {"instrument_type": "SWAP", "tenor": "10Y", "quote": 0.0395},
]


def build_helpers(quotes_df: pd.DataFrame, evaluation_date: date) -> List:
    """Create rate helpers from a quote table."""
    libor = IborIndex.usd_libor("3M")
    helpers = []

    for _, row in quotes_df.iterrows():
        inst_type = row["instrument_type"].upper()
        quote = float(row["quote"])

        if inst_type == "DEPOSIT":
            helpers.append(DepositHelper(
                quote, evaluation_date=evaluation_date, index=IborIndex.usd_libor(row["tenor"])
            ))
        elif inst_type in ("FUT", "FUTURE"):
            helpers.append(FuturesHelper(
                quote, date.fromisoformat(row["start"]), index=libor
            ))
        elif inst_type == "FRA":
            start, end = (int(m) for m in row["tenor"].split("x"))
            helpers.append(FraHelper(
                quote, evaluation_date=evaluation_date, months_to_start=start, months_to_end=end, index=libor
            ))
        elif inst_type == "SWAP":
            helpers.append(SwapHelper(
                quote, evaluation_date=evaluation_date, swap_index=SwapIndex.usd_swap(row["tenor"], libor)
            ))
        else:
            raise ValueError(f"Unknown instrument type: {inst_type}")

    return helpers


def main():
    parser = argparse.ArgumentParser(description="Curve bootstrap demo")
    parser.add_argument(
        "--output-dir",
        type=str,
        default="output",
        help="Directory for CSV reports"
    )
    parser.add_argument(
        "--evaluation-date",
        type=str,
        default="2024-01-15",
        help="Evaluation date (YYYY-MM-DD)"
    )
    parser.add_argument(
        "--interpolation",
        choices=["log_linear", "linear"],
        default="log_linear",
        help="Curve interpolation"
    )
    parser.add_argument("--verbose", action="store_true", help="Log solver progress")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s %(message)s"
    )

    evaluation_date = date.fromisoformat(args.evaluation_date)
    output_dir = Path(args.output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    print("=" * 60)
    print("CURVE BOOTSTRAP DEMO")
    print(f"Evaluation Date: {evaluation_date}")
    print("=" * 60)

    quotes_df = pd.DataFrame(SAMPLE_QUOTES)
    helpers = build_helpers(quotes_df, evaluation_date)
    print(f"\nHelpers: {len(helpers)} instruments")

    config = BootstrapConfig(interpolation_method=args.interpolation)
    result = IterativeBootstrapper(evaluation_date, config).bootstrap(helpers)
    if not result.success:
        raise SystemExit(f"Bootstrap failed: {result.message}")

    report = result.to_frame()
    print("\n" + "=" * 60)
    print(f"Repricing ({result.iterations} passes)")
    print("=" * 60)
    print(report.to_string())

    curve = result.curve
    print("\n" + "=" * 60)
    print("Curve Nodes")
    print("=" * 60)
    for node_date, df in curve.nodes()[1:]:
        print(f"  {node_date}  DF: {df:.8f}  Zero: {curve.zero_rate(node_date) * 100:.4f}%")

    jacobian = quote_jacobian(result.helpers, curve)
    report.to_csv(output_dir / "bootstrap_report.csv")
    jacobian.to_csv(output_dir / "quote_jacobian.csv")
    print(f"\nReports written to {output_dir}")

    print("\n" + "=" * 60)
    print("DEMO COMPLETE")
    print("=" * 60)


if __name__ == "__main__":
    main()
