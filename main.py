#!/usr/bin/env python3
"""
main.py: Table 53 density finder.

Usage:
    python main.py --density 0.850 --temperature 28.5   # single lookup
    python main.py --page 25                            # text view of a table page
    python main.py --export                             # full table -> data/table53.csv
    python main.py --charts                             # correction surface charts
"""

import argparse
import logging
import sys
import time

from density_finder.correlation import DomainError, default_engine
from density_finder.extracted_text import text_renderings
from density_finder.table_materializer import export_pages_csv, materialized_pages


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Reduce observed density to density at 15°C (ASTM Table 53).")
    p.add_argument("--density", type=float, default=None, help="observed density, kg/L")
    p.add_argument("--temperature", type=float, default=None, help="observed temperature, °C")
    p.add_argument("--page", type=int, default=None, help="print the text view of page N (1-based)")
    p.add_argument("--export", action="store_true", help="write the full table as CSV")
    p.add_argument("--charts", action="store_true", help="render the correction surface")
    p.add_argument("--no-html", action="store_true")
    p.add_argument("-v", "--verbose", action="store_true")
    return p.parse_args(argv)


def lookup(density: float, temperature: float) -> int:
    try:
        result = default_engine.correlate(density, temperature)
        corr = default_engine.correction(density, temperature)
    except DomainError as e:
        print(f"\n  ERROR: {e}")
        return 1

    print(f"\n  Observed:       {density:.4f} kg/L @ {temperature:.1f}°C")
    print(f"  Correction:     {corr:+.4f}")
    print(f"  Density @ 15°C: {result:.4f} kg/L\n")
    return 0


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if (args.density is None) != (args.temperature is None):
        print("\n  ERROR: --density and --temperature must be given together.")
        return 1

    if args.density is not None:
        return lookup(args.density, args.temperature)

    print(f"\n{'='*60}")
    print(f"  ASTM D 1250 / IP 200 — Table 53 Density Finder")
    print(f"  Grid: {default_engine.grid!r}")
    print(f"{'='*60}\n")

    # step 1: table
    t0 = time.time()
    print("[1/3] Materializing table pages...")
    pages = materialized_pages()
    n_fallback = sum(len(p.fallbacks) for p in pages)
    print(f"       Pages: {len(pages)}  |  Cells outside range: {n_fallback}")

    # step 2: text / CSV
    if args.page is not None:
        texts = text_renderings()
        if not 1 <= args.page <= len(texts):
            print(f"\n  ERROR: page must be between 1 and {len(texts)}.")
            return 1
        print(f"\n[2/3] Page {args.page}\n")
        print(texts[args.page - 1].content)
    elif args.export:
        print("\n[2/3] Exporting table...")
        path = export_pages_csv(pages)
        print(f"       -> {path}")
    else:
        print("\n[2/3] Skipping text/CSV (use --page N or --export)")

    # step 3: charts
    if args.charts:
        # matplotlib/plotly are only imported when charts are requested
        from density_finder.visualization import (
            build_correction_surface, plot_correction_matplotlib, plot_correction_plotly,
        )
        print("\n[3/3] Generating charts...")
        D_grid, T_grid, C_mesh = build_correction_surface()
        print(f"       -> {plot_correction_matplotlib(D_grid, T_grid, C_mesh)}")
        if not args.no_html:
            print(f"       -> {plot_correction_plotly(D_grid, T_grid, C_mesh)}")
    else:
        print("\n[3/3] Skipping charts (use --charts)")

    elapsed = time.time() - t0
    print(f"\n  Done in {elapsed:.1f}s.\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
