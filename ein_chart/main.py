"""CLI entrypoint for building EIN processing-time chart data."""

import argparse
import logging
import os
import sys

from ein_chart import fetcher
from ein_chart.chart_config import build_payload
from ein_chart.config import GID, SHEET_ID, USER_AGENT
from ein_chart.csv_parser import ParseError, parse
from ein_chart.normalizer import normalize
from ein_chart.sample import SAMPLE_CSV
from ein_chart.scale import compute_scale
from ein_chart.storage import write_csv, write_json


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="ein-chart",
        description="Fetch the EIN processing-time sheet and build three-band chart data.",
    )

    # Source
    src = p.add_argument_group("data source")
    src.add_argument(
        "--sheet-id",
        default=SHEET_ID,
        help="Google Sheets document id. Defaults to $EIN_CHART_SHEET_ID.",
    )
    src.add_argument(
        "--gid",
        type=int,
        default=GID,
        help="Sheet tab id (default: $EIN_CHART_GID or 0).",
    )
    src.add_argument(
        "--csv-file",
        default=None,
        help="Read CSV text from this file instead of the network.",
    )
    src.add_argument(
        "--offline",
        action="store_true",
        help="Skip the network and use the built-in sample data.",
    )
    src.add_argument(
        "--user-agent",
        default=None,
        help="User-Agent for HTTP requests. Defaults to $EIN_CHART_USER_AGENT.",
    )

    # Output format
    fmt = p.add_argument_group("output format")
    fmt.add_argument(
        "--format",
        choices=["json", "csv"],
        default="json",
        help="json: full chart payload; csv: normalised series (default: json).",
    )
    fmt.add_argument(
        "--output-dir",
        default="output",
        help="Directory for output files (default: ./output).",
    )
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging.")
    return p


def _load_text(args: argparse.Namespace) -> tuple[str, str]:
    if args.csv_file:
        with open(args.csv_file, encoding="utf-8-sig") as f:
            return f.read(), args.csv_file
    if args.offline:
        return SAMPLE_CSV, fetcher.SAMPLE_SOURCE
    return fetcher.fetch_csv(args.sheet_id, args.gid, user_agent=args.user_agent)


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    args.user_agent = args.user_agent or USER_AGENT

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    print("Loading data …")
    try:
        text, source = _load_text(args)
    except OSError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    print(f"  Source: {source}")

    out_dir = args.output_dir
    os.makedirs(out_dir, exist_ok=True)

    try:
        if args.format == "json":
            payload = build_payload(text)
            path = write_json(payload, os.path.join(out_dir, "chart.json"))
            scale = payload["scale"]
            count = len(payload["rawData"])
            print(f"  {count} records, y axis max {scale['max']} step {scale['step']}")
        else:
            series, labels = normalize(parse(text))
            scale = compute_scale(series)
            path = write_csv(series, labels, os.path.join(out_dir, "series.csv"))
            print(f"  {len(series)} records, y axis max {scale.max} step {scale.step}")
    except ParseError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print(f"  Written → {path}")
    print("\nDone.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
