#!/usr/bin/env python3
"""Sleep Monitor - CLI Entry Point."""
import sys
import json
import logging
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent))

import click
from rich.console import Console
from rich.table import Table

from __version__ import __version__

console = Console()
logger = logging.getLogger("sleepmonitor.cli")

# Three nights, most recent first: two poor nights then a good one
MOCK_SLEEP_RECORDS = [
    {
        "score": 65,
        "total_sleep_duration": 19200,
        "sleep_latency": 2700,
        "average_hrv": 35,
        "end_time": "2025-10-29T08:00:00+00:00",
        "type": "long_sleep",
    },
    {
        "score": 68,
        "total_sleep_duration": 20400,
        "sleep_latency": 2280,
        "average_hrv": 32,
        "end_time": "2025-10-28T08:00:00+00:00",
        "type": "long_sleep",
    },
    {
        "score": 82,
        "total_sleep_duration": 25200,
        "sleep_latency": 900,
        "average_hrv": 55,
        "end_time": "2025-10-27T08:00:00+00:00",
        "type": "long_sleep",
    },
]

SAMPLE_PAYLOAD = {
    "title": "Oura Sleep Alert",
    "message": "Sleep score 68. Total 325 min. Ease up this morning.",
    "meta": {
        "sleep_score": 68,
        "total_sleep_min": 325,
        "sleep_latency_min": 35,
        "hrv_avg_ms": None,
        "date": "2025-10-29T07:00:00.123Z",
    },
}


def _init_config(config_path=None, env_file=None, verbose=False):
    from utils.logger import setup_logging
    from config import ConfigError, load_config

    try:
        config = load_config(config_path, env_file=env_file)
    except ConfigError as e:
        setup_logging(verbose=verbose)
        logger.error(f"Error: {e}")
        raise SystemExit(1)

    setup_logging(config.get("logging"), verbose=verbose)
    return config


def _init_components(config):
    """Lazy initialization of fetch/evaluate/notify components."""
    from monitor.api import OuraClient
    from monitor.monitor import SleepMonitor
    from alerts.engine import AlertEngine
    from alerts.channels import build_channels
    from models.sleep import Thresholds

    oura_cfg = config["oura"]
    api = OuraClient(
        oura_cfg.get("token"),
        base_url=oura_cfg.get("base_url"),
        timeout=config["http"]["timeout"],
    )
    alert_engine = AlertEngine(Thresholds.from_config(config), build_channels(config))
    monitor = SleepMonitor(api, alert_engine, config)
    return {"config": config, "api": api, "alert_engine": alert_engine, "monitor": monitor}


@click.group()
@click.option("--config", "config_path", default=None, help="Path to config YAML")
@click.option("--env-file", default=None, help="Path to a .env file (default: ./.env)")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.version_option(__version__, prog_name="sleepmonitor")
@click.pass_context
def cli(ctx, config_path, env_file, verbose):
    """Sleep Monitor - Poor-night and streak alerts from Oura sleep data."""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path
    ctx.obj["env_file"] = env_file
    ctx.obj["verbose"] = verbose


def _get_config(ctx):
    if "_config" not in ctx.obj:
        ctx.obj["_config"] = _init_config(
            ctx.obj.get("config_path"), ctx.obj.get("env_file"), ctx.obj.get("verbose"),
        )
    return ctx.obj["_config"]


def _get_components(ctx):
    if "_components" not in ctx.obj:
        ctx.obj["_components"] = _init_components(_get_config(ctx))
    return ctx.obj["_components"]


# ──────────────────────────────────────────────────────
# CHECK
# ──────────────────────────────────────────────────────
@cli.command()
@click.pass_context
def check(ctx):
    """Fetch recent sleep, evaluate the latest night and notify if it was poor."""
    from config import ConfigError
    from utils.http_client import APIError

    try:
        c = _get_components(ctx)
        result, payload = c["monitor"].run_once()
    except (APIError, ConfigError) as e:
        logger.error(f"Error: {e}")
        raise SystemExit(1)

    if result is None:
        console.print("[dim]No completed sleep records in window.[/dim]")
    elif payload is None:
        console.print(f"[green]Good night[/green] - score {result.sleep_score}, "
                      f"total {result.total_sleep_min} min")
    else:
        console.print(f"[bold yellow]{payload['title']}[/bold yellow]: {payload['message']}")


# ──────────────────────────────────────────────────────
# DRY RUN
# ──────────────────────────────────────────────────────
@cli.command()
@click.pass_context
def dry(ctx):
    """Evaluate built-in mock nights. No API calls, no webhooks."""
    from alerts.engine import analyze_sleep
    from alerts.payload import build_payload
    from models.sleep import SleepRecord, Thresholds
    from utils.formatters import format_optional

    config = _get_config(ctx)
    thresholds = Thresholds.from_config(config)
    records = [SleepRecord.from_api(r) for r in MOCK_SLEEP_RECORDS]

    console.print("[bold]Dry Run - Smoke Test[/bold]\n")
    table = Table(title="Mock nights (most recent first)", show_header=True)
    table.add_column("Ended", style="dim")
    table.add_column("Score")
    table.add_column("Total (min)")
    table.add_column("Latency (min)")
    for r in records:
        table.add_row(r.end_time, str(r.score), str(r.total_sleep_min),
                      format_optional(r.sleep_latency_min))
    console.print(table)
    _print_thresholds(thresholds)

    result = analyze_sleep(records, thresholds)
    if result is None:
        console.print("Result: No alert data")
        return

    console.print("\n[bold]Analysis result:[/bold]")
    console.print_json(json.dumps(result.to_dict()))

    payload = build_payload(result, thresholds)
    if payload is None:
        console.print("[green]Good night - no alert would be sent.[/green]")
    else:
        if "streak" in payload["meta"]:
            console.print(f"[bold yellow]STREAK ALERT: {result.streak} consecutive poor nights[/bold yellow]")
        else:
            console.print("[bold red]Poor night detected![/bold red]")
        console.print("Would send payload:")
        console.print_json(json.dumps(payload))

    console.print("\n[green]✓[/green] Dry run completed (no API calls made, no webhooks sent)")


# ──────────────────────────────────────────────────────
# TEST WEBHOOK
# ──────────────────────────────────────────────────────
@cli.command("test-webhook")
@click.pass_context
def test_webhook(ctx):
    """Send a sample payload to the configured webhook."""
    from notifications.webhook import WebhookClient

    config = _get_config(ctx)
    url = config["webhook"].get("url")
    if not url:
        console.print("Would notify:")
        console.print_json(json.dumps(SAMPLE_PAYLOAD))
        return

    client = WebhookClient(url, timeout=config["http"]["timeout"])
    if client.post(SAMPLE_PAYLOAD):
        console.print("[green]✓[/green] Test webhook delivered")
    else:
        console.print("[red]✗[/red] Test webhook failed (see log)")


# ──────────────────────────────────────────────────────
# NIGHTS
# ──────────────────────────────────────────────────────
@cli.command()
@click.pass_context
def nights(ctx):
    """List completed sleep sessions in the window with their poor/good verdict."""
    from config import ConfigError
    from utils.http_client import APIError
    from alerts.engine import is_poor_night
    from utils.formatters import format_minutes, format_night, format_optional

    try:
        c = _get_components(ctx)
        records = c["monitor"].fetch_records()
    except (APIError, ConfigError) as e:
        logger.error(f"Error: {e}")
        raise SystemExit(1)

    if not records:
        console.print("[dim]No completed sleep records in window.[/dim]")
        return

    thresholds = c["alert_engine"].thresholds
    table = Table(title=f"Sleep (last {c['monitor'].window_days}d)", show_header=True)
    table.add_column("Night")
    table.add_column("Type", style="dim")
    table.add_column("Score")
    table.add_column("Total")
    table.add_column("Latency")
    table.add_column("HRV")
    table.add_column("Verdict")
    for r in records:
        verdict = "[red]poor[/red]" if is_poor_night(r, thresholds) else "[green]good[/green]"
        table.add_row(format_night(r.end_time), r.type, str(r.score),
                      format_minutes(r.total_sleep_min), format_optional(r.sleep_latency_min, " min"),
                      format_optional(r.average_hrv, " ms"), verdict)
    console.print(table)


# ──────────────────────────────────────────────────────
# THRESHOLDS
# ──────────────────────────────────────────────────────
@cli.command()
@click.pass_context
def thresholds(ctx):
    """Show the active alert thresholds."""
    from models.sleep import Thresholds

    config = _get_config(ctx)
    _print_thresholds(Thresholds.from_config(config))
    console.print(f"[dim]Timezone: {config.get('timezone', 'N/A')}[/dim]")


def _print_thresholds(t):
    table = Table(title="Thresholds", show_header=True)
    table.add_column("Setting")
    table.add_column("Value")
    table.add_row("Sleep score floor (SLEEP_SCORE_THRESHOLD)", str(t.score_threshold))
    table.add_row("Min total sleep, min (MIN_TOTAL_SLEEP_MIN)", str(t.min_total_sleep_min))
    table.add_row("Max latency, min (MAX_SLEEP_LATENCY_MIN)", str(t.max_latency_min))
    table.add_row("Streak alert after (POOR_NIGHTS_STREAK)", str(t.streak_threshold))
    console.print(table)


if __name__ == "__main__":
    cli()
