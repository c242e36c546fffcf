"""CLI interface for linkwatch - one-shot checks and live watching.

Usage:
    linkwatch check https://erp.example.com/api/health
    linkwatch watch /api/health --base-url https://erp.example.com
    linkwatch config show --config monitor.yaml
    linkwatch version
"""

import asyncio
import sys
from pathlib import Path
from typing import Optional

import typer
from loguru import logger

from linkwatch import __version__
from linkwatch.core.config import ConfigError, MonitorConfig
from linkwatch.core.i18n import set_language, t
from linkwatch.core.logger import configure_logging
from linkwatch.core.types import ConnectivityState
from linkwatch.core.validators import ValidationError
from linkwatch.services import status_presenter
from linkwatch.services.host_environment import SystemHost
from linkwatch.services.monitor import ConnectivityMonitor

# Create Typer app
app = typer.Typer(
    name="linkwatch",
    help="linkwatch - Check and watch connectivity to a backend health endpoint",
    add_completion=False,
)
config_app = typer.Typer(help="Inspect monitor configuration")
app.add_typer(config_app, name="config")

_STATUS_ICONS = {
    "success": "✅",
    "warning": "⚠️ ",
    "danger": "❌",
    "secondary": "❔",
}


@app.callback()
def main_options(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log probe details to stderr"),
    lang: str = typer.Option("en", "--lang", help="Language for status text (en, fa)"),
    log_file: Optional[Path] = typer.Option(None, "--log-file", help="Also write DEBUG logs to this file"),
):
    """Global options."""
    configure_logging(level="DEBUG" if verbose else "WARNING", log_file=str(log_file) if log_file else None)
    set_language(lang)


def _build_config(
    url: Optional[str],
    config_file: Optional[Path],
    base_url: Optional[str] = None,
    timeout_ms: Optional[int] = None,
    interval_ms: Optional[int] = None,
) -> MonitorConfig:
    """Merge a config file with command-line overrides. Exits on invalid input."""
    try:
        data = MonitorConfig.load(config_file).to_dict() if config_file else {}
        overrides = {
            "ping_url": url,
            "base_url": base_url,
            "timeout_ms": timeout_ms,
            "check_interval_ms": interval_ms,
        }
        data.update({key: value for key, value in overrides.items() if value is not None})
        config = MonitorConfig.from_mapping(data)
        config.resolve_ping_url()
        return config
    except (ConfigError, ValidationError) as e:
        typer.echo(f"❌ Error: {e}", err=True)
        raise typer.Exit(2)


def _print_state(state: ConnectivityState) -> None:
    color = status_presenter.status_color(state.quality_tier)
    icon = _STATUS_ICONS.get(color, "")
    typer.echo(f"{icon} {t('cli.status', default='Status')}: {status_presenter.status_text(state)}")
    typer.echo(f"   {t('cli.quality', default='Quality')}: {status_presenter.quality_text(state.quality_tier)}")
    if state.latency_ms is not None:
        typer.echo(f"   {t('cli.latency', default='Latency')}: {state.latency_ms}ms")
    if state.last_checked_at is not None:
        checked = state.last_checked_at.strftime("%Y-%m-%d %H:%M:%S")
        typer.echo(f"   {t('cli.last_checked', default='Last checked')}: {checked}")


async def _run_check(config: MonitorConfig) -> ConnectivityState:
    """Run one manual probe and return the resulting state."""
    monitor = ConnectivityMonitor(config=config, host=await SystemHost.detect())
    try:
        return await monitor.recheck()
    finally:
        await monitor.aclose()


async def _run_watch(config: MonitorConfig, duration_s: Optional[float]) -> ConnectivityState:
    """Run a full monitor, printing every state change, until cancelled or duration elapses."""
    host = await SystemHost.detect()
    monitor = ConnectivityMonitor(config=config, host=host)
    monitor.subscribe(_print_state)
    host.start()
    monitor.start()
    try:
        if duration_s is not None:
            await asyncio.sleep(duration_s)
        else:
            await asyncio.Event().wait()
    finally:
        host.stop()
        await monitor.aclose()
    return monitor.status


@app.command()
def check(
    url: Optional[str] = typer.Argument(None, help="Health-check URL or path (defaults to config ping_url)"),
    base_url: Optional[str] = typer.Option(None, "--base-url", "-b", help="Origin for a relative URL"),
    timeout_ms: Optional[int] = typer.Option(None, "--timeout-ms", "-t", help="Probe timeout in ms"),
    config_file: Optional[Path] = typer.Option(None, "--config", "-c", help="JSON or YAML config file"),
):
    """Probe the health endpoint once.

    Exits 1 when offline, and 3 when the host is online but the endpoint did
    not answer with a 2xx in time (status then reads Online with unknown quality).
    """
    config = _build_config(url, config_file, base_url=base_url, timeout_ms=timeout_ms)

    state = asyncio.run(_run_check(config))
    _print_state(state)

    if not state.is_online:
        raise typer.Exit(1)
    if state.latency_ms is None:
        typer.echo(f"⚠️  {t('cli.unreachable', default='Health endpoint did not respond')}", err=True)
        raise typer.Exit(3)


@app.command()
def watch(
    url: Optional[str] = typer.Argument(None, help="Health-check URL or path (defaults to config ping_url)"),
    base_url: Optional[str] = typer.Option(None, "--base-url", "-b", help="Origin for a relative URL"),
    interval_ms: Optional[int] = typer.Option(None, "--interval-ms", "-i", help="Periodic check interval in ms"),
    timeout_ms: Optional[int] = typer.Option(None, "--timeout-ms", "-t", help="Probe timeout in ms"),
    duration: Optional[float] = typer.Option(None, "--duration", "-d", help="Stop after this many seconds"),
    config_file: Optional[Path] = typer.Option(None, "--config", "-c", help="JSON or YAML config file"),
):
    """Monitor connectivity continuously and print every state change."""
    config = _build_config(url, config_file, base_url=base_url, timeout_ms=timeout_ms, interval_ms=interval_ms)

    typer.echo(t("cli.watching", default="Watching {url} (Ctrl+C to stop)", url=config.resolve_ping_url()))
    try:
        asyncio.run(_run_watch(config, duration))
    except KeyboardInterrupt:
        pass
    typer.echo(t("cli.stopped", default="Monitor stopped"))


@config_app.command("show")
def config_show(
    config_file: Optional[Path] = typer.Option(None, "--config", "-c", help="JSON or YAML config file"),
):
    """Show the effective monitor configuration."""
    try:
        config = MonitorConfig.load(config_file) if config_file else MonitorConfig()
    except (ConfigError, ValidationError) as e:
        typer.echo(f"❌ Error: {e}", err=True)
        raise typer.Exit(2)

    typer.echo(f"Configuration file: {config_file or '(defaults)'}")
    for key, value in config.to_dict().items():
        typer.echo(f"  {key}: {value}")


@app.command()
def version():
    """Show linkwatch version."""
    typer.echo(f"linkwatch v{__version__}")


def main():
    """Entry point for CLI."""
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("\n⚠️  Interrupted by user")
        sys.exit(130)
    except Exception as e:
        logger.exception("CLI error")
        typer.echo(f"❌ Error: {e}", err=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
