from __future__ import annotations

import argparse
import getpass
import logging
from datetime import date
from pathlib import Path
from typing import List, Optional

from riskrate_cli.client import RiskConsoleClient
from riskrate_cli.config import read_config, write_config
from riskrate_cli.exceptions import ConfigError
from riskrate_cli.exporters.base import BaseExporter
from riskrate_cli.exporters.heatmap import HeatmapExporter
from riskrate_cli.exporters.register import RegisterExporter
from riskrate_cli.exporters.treatments import TreatmentsExporter
from riskrate_cli.exporters.trend import TrendExporter
from riskrate_cli.formatters.yaml_formatter import YamlFormatter
from riskrate_cli.loader import (
    fetch_raw_snapshot,
    fetch_snapshot,
    parse_snapshot,
    read_snapshot,
    snapshot_to_raw,
)
from riskrate_cli.models.config import AppConfig, normalize_api_url
from riskrate_cli.models.risks import Period, TenantSnapshot
from riskrate_cli.scoring.periods import resolve_period

logger = logging.getLogger(__name__)

_SUBDIRS = ("register", "heatmaps", "trends", "treatments")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="riskrate-cli",
        description="Residual risk scoring and reporting for the risk management console.",
    )
    group = parser.add_mutually_exclusive_group()
    group.add_argument(
        "--init",
        metavar="API_URL",
        help="Initialize configuration with the risk console API URL.",
    )
    group.add_argument(
        "--fetch-snapshot",
        metavar="FILE",
        help="Download the tenant's risk data into a YAML snapshot file.",
    )
    group.add_argument("--report-all", action="store_true", help="Export all reports.")
    group.add_argument(
        "--report-register", action="store_true",
        help="Export the risk register with inherent and residual ratings.",
    )
    group.add_argument(
        "--report-heatmap", action="store_true", help="Export inherent and residual heatmaps.",
    )
    group.add_argument(
        "--report-trend", action="store_true", help="Export the quarterly residual risk trend.",
    )
    group.add_argument(
        "--report-treatments", action="store_true", help="Export the treatment distribution.",
    )
    parser.add_argument(
        "--snapshot", metavar="FILE",
        help="Read risk data from a snapshot file instead of the API.",
    )
    parser.add_argument("--year", help="Reporting year (default: current assessment period).")
    parser.add_argument("--quarter", help="Reporting quarter, Q1-Q4 (default: current assessment period).")
    parser.add_argument(
        "--force", action="store_true",
        help="Overwrite existing files without confirmation.",
    )
    parser.add_argument(
        "--keep-raw-json", action="store_true",
        help="Also write JSON files alongside Markdown and YAML.",
    )
    parser.add_argument("--verbose", action="store_true", help="Print diagnostic messages.")
    return parser


def _run_init(api_url: str) -> None:
    api_url = normalize_api_url(api_url)

    bearer_token = getpass.getpass("Enter your bearer token: ")
    if not bearer_token.strip():
        raise ConfigError("Bearer token cannot be empty.")

    tenant_id = input("Enter your tenant ID: ")
    config = AppConfig(api_url=api_url, bearer_token=bearer_token, tenant_id=tenant_id)

    cwd = Path.cwd()
    write_config(cwd, config)

    for subdir in _SUBDIRS:
        (cwd / subdir).mkdir(exist_ok=True)

    print("Configuration saved to .riskrate-cli.ini")
    print("Created directories: " + ", ".join(f"{d}/" for d in _SUBDIRS))


def _run_fetch_snapshot(target: str) -> None:
    client = RiskConsoleClient(read_config(Path.cwd()))
    raw = snapshot_to_raw(fetch_raw_snapshot(client))
    parse_snapshot(raw)
    YamlFormatter().write(raw, Path(target))
    print(f"Snapshot saved to {target} ({len(raw['risks'])} risks, {len(raw['treatments'])} treatments)")


def _load_snapshot(snapshot_path: Optional[str]) -> TenantSnapshot:
    if snapshot_path:
        return read_snapshot(Path(snapshot_path))
    client = RiskConsoleClient(read_config(Path.cwd()))
    return fetch_snapshot(client)


def _resolve_period(args: argparse.Namespace, snapshot: TenantSnapshot) -> Period:
    current = resolve_period(snapshot.cycles, date.today())
    year = args.year if args.year is not None else current.year
    quarter = args.quarter if args.quarter is not None else current.quarter
    period = Period.parse(year, quarter)
    logger.debug("Reporting period: %s", period)
    return period


def _run_reports(args: argparse.Namespace) -> None:
    cwd = Path.cwd()
    snapshot = _load_snapshot(args.snapshot)
    period = _resolve_period(args, snapshot)

    export_kwargs = {
        "force": args.force,
        "keep_raw_json": args.keep_raw_json,
    }

    exporters: List[BaseExporter] = []
    if args.report_all or args.report_register:
        exporters.append(RegisterExporter(snapshot, cwd / "register", period, **export_kwargs))
    if args.report_all or args.report_heatmap:
        exporters.append(HeatmapExporter(snapshot, cwd / "heatmaps", period, **export_kwargs))
    if args.report_all or args.report_trend:
        exporters.append(TrendExporter(snapshot, cwd / "trends", period, **export_kwargs))
    if args.report_all or args.report_treatments:
        exporters.append(TreatmentsExporter(snapshot, cwd / "treatments", period, **export_kwargs))

    for exporter in exporters:
        exporter.export()


def main() -> None:
    parser = _build_parser()
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    if args.init:
        _run_init(args.init)
    elif args.fetch_snapshot:
        _run_fetch_snapshot(args.fetch_snapshot)
    elif (
        args.report_all or args.report_register or args.report_heatmap
        or args.report_trend or args.report_treatments
    ):
        _run_reports(args)
    else:
        parser.print_help()
