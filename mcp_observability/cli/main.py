"""
MCP Observability - CLI Main Entry Point
ヘルスチェック・メトリクス表示のCLI
"""

import asyncio
import json
import logging
import sys
import time
from dataclasses import asdict

import click

from ..bootstrap import build_observability
from ..config import load_settings
from ..exceptions import ConfigurationError
from ..health.types import HealthStatus
from .formatters import (
    format_dashboard,
    format_health_summary,
    format_metrics_summary,
    format_system_info
)


def setup_logging(level: str = "WARNING") -> None:
    """ログ設定の初期化"""
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )


@click.group()
@click.option('--verbose', '-v', is_flag=True, help='Show debug logs')
@click.option('--quiet', '-q', is_flag=True, help='Show errors only')
@click.option('--config', 'config_path', type=click.Path(), help='Monitoring settings file (YAML/JSON)')
@click.pass_context
def main(ctx, verbose, quiet, config_path):
    """
    MCP Observability CLI

    Health checks and in-process metrics for the MCP server
    """
    if quiet:
        log_level = "ERROR"
    elif verbose:
        log_level = "DEBUG"
    else:
        log_level = "WARNING"

    setup_logging(log_level)

    ctx.ensure_object(dict)

    try:
        ctx.obj['settings'] = load_settings(config_path)
    except ConfigurationError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@main.command()
@click.option('--format', 'output_format', type=click.Choice(['text', 'json']),
              default='text', help='Output format')
@click.option('--skip-dependency', is_flag=True, help='Skip the external dependency check')
@click.pass_context
def health(ctx, output_format, skip_dependency):
    """Run all health checks and report the overall status"""
    settings = ctx.obj['settings']
    if skip_dependency:
        settings = settings.model_copy(update={'enable_dependency_check': False})

    try:
        observability = build_observability(settings)
        result = asyncio.run(observability.health.check_health())
        snapshot = observability.metrics.get_snapshot()
    except Exception as e:
        click.echo(f"Health check failed: {e}", err=True)
        sys.exit(2)

    if output_format == 'json':
        click.echo(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))
    else:
        click.echo("# Health Check Report\n")
        click.echo(format_health_summary(result))
        click.echo("\n## Metrics")
        click.echo(format_metrics_summary(snapshot))

    sys.exit(0 if result.status == HealthStatus.HEALTHY else 1)


@main.command()
@click.option('--format', 'output_format', type=click.Choice(['text', 'json']),
              default='text', help='Output format')
@click.option('--watch', '-w', is_flag=True, help='Refresh until interrupted')
@click.option('--interval', '-i', type=click.FloatRange(min=0, min_open=True),
              default=5.0, help='Refresh interval in seconds for --watch')
@click.pass_context
def metrics(ctx, output_format, watch, interval):
    """Show the current metrics snapshot"""
    observability = build_observability(ctx.obj['settings'])
    registry = observability.metrics

    def show():
        snapshot = registry.get_snapshot()
        if output_format == 'json':
            click.echo(json.dumps(snapshot.to_dict(), ensure_ascii=False, indent=2))
        else:
            click.echo(format_dashboard(snapshot, registry.get_system_info()))

    if not watch:
        show()
        return

    # CPU使用率は2回目以降のスナップショットから有効になる
    try:
        while True:
            if output_format == 'text':
                click.clear()
            show()
            time.sleep(interval)
    except KeyboardInterrupt:
        click.echo("\nStopped watching metrics")


@main.command('system-info')
@click.option('--format', 'output_format', type=click.Choice(['text', 'json']),
              default='text', help='Output format')
@click.pass_context
def system_info(ctx, output_format):
    """Show static OS information"""
    observability = build_observability(ctx.obj['settings'])
    info = observability.metrics.get_system_info()

    if output_format == 'json':
        click.echo(json.dumps(asdict(info), ensure_ascii=False, indent=2))
    else:
        click.echo(format_system_info(info))


if __name__ == '__main__':
    main()
