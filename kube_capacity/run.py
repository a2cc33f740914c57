from __future__ import annotations
import click
import os
from datetime import datetime
from typing import Optional
from .config import load_config, default_config, AppConfig, DEFAULT_CONFIG_FILE, OUTPUT_FORMATS
from .cluster.context import get_cluster_cfg, resolve_scope
from .compute.models import QuantityError
from .compute.hpa_index import build_hpa_index
from .compute.rows import build_rows
from .kube.client import (
    build_api_client, current_namespace, list_deployments, list_hpas,
    ClusterConfigError, ResourceListError,
)
from .kube.adapt import deployment_from_manifest, hpa_from_manifest
from .reporting.base import get_report_formats, get_generator
from .reporting import table_report, json_report, html_report, excel_report  # noqa: F401 registers generators
from .util import logging as log


def _load_app_config(path: Optional[str]) -> AppConfig:
    try:
        if path:
            return load_config(path)
        if os.path.exists(DEFAULT_CONFIG_FILE):
            return load_config(DEFAULT_CONFIG_FILE)
    except (FileNotFoundError, ValueError) as e:
        raise click.ClickException(str(e))
    return default_config()


def _default_out_path(out_dir: str, generator) -> str:
    os.makedirs(out_dir, exist_ok=True)
    ts = datetime.now().strftime('%Y%m%dT%H%M%S')
    return os.path.join(out_dir, f'{generator.filename_prefix}{ts}{generator.file_extension}')


def collect_rows(api_client, scope, timeout: float = 15.0):
    """List, adapt and correlate deployments and HPAs for one scope."""
    deployments = [deployment_from_manifest(m) for m in list_deployments(api_client, scope, timeout=timeout)]
    hpas = [hpa_from_manifest(m) for m in list_hpas(api_client, scope, timeout=timeout)]
    log.info('fetched objects', scope=scope.label(), deployments=len(deployments), hpas=len(hpas))
    index = build_hpa_index(hpas)
    return build_rows(deployments, index)


@click.group(add_help_option=False)
@click.version_option(package_name='kube-capacity-report')
@click.option('--config', default=None, help=f'Config file path (default: {DEFAULT_CONFIG_FILE} when present)')
@click.pass_context
def cli(ctx, config):
    """Deployment capacity and HPA report CLI"""
    ctx.ensure_object(dict)
    ctx.obj['config'] = config


@cli.command(add_help_option=False)
@click.option('--cluster', default=None, help='Configured cluster name (default: first configured cluster)')
@click.option('-n', '--namespace', default=None, help='Namespace scope for this request')
@click.option('-A', '--all-namespaces', is_flag=True, help='List across all namespaces. --namespace is ignored when set.')
@click.option('-l', '--selector', default=None, help='Label selector for deployments (e.g. app=srv)')
@click.option('-o', '--output', 'output_format', default=None,
              help=f'Output format ({"|".join(OUTPUT_FORMATS)}). json rows use snake_case keys '
                   '(namespace, cpu_req_milli, hpa_target, ...).')
@click.option('--out', required=False, help='Output file path or directory. html/excel default to the configured out_dir.')
@click.option('--list-formats', is_flag=True, help='List available output formats and exit')
@click.pass_context
def report(ctx, cluster, namespace, all_namespaces, selector, output_format, out, list_formats):
    """Print replicas, requests/limits and HPA bounds for every Deployment in scope."""
    if list_formats:
        click.echo('Available output formats:')
        for f in get_report_formats():
            click.echo(f'  {f}')
        return
    cfg = _load_app_config(ctx.obj['config'])
    log.configure_logging(cfg.logging.level, cfg.logging.format)
    output_format = output_format or cfg.report.output
    try:
        generator = get_generator(output_format)
        target = get_cluster_cfg(cfg, cluster)
    except ValueError as e:
        raise click.ClickException(str(e))
    try:
        context_ns = None if (namespace or all_namespaces or target.namespace) else current_namespace(target)
        scope = resolve_scope(target, namespace, all_namespaces, selector, context_namespace=context_ns)
        api_client = build_api_client(target)
        rows = collect_rows(api_client, scope, timeout=target.request_timeout)
    except (ClusterConfigError, ResourceListError, QuantityError) as e:
        log.error('report failed', cluster=target.name, error=str(e))
        raise click.ClickException(str(e))
    if out and os.path.isdir(out):
        out = _default_out_path(out, generator)
    elif not out and generator.writes_file:
        out = _default_out_path(cfg.report.out_dir, generator)
    generator.generate(rows, scope, out)
    if out:
        click.echo(f'Wrote {output_format} report to {out}')


@cli.command(add_help_option=False)
@click.pass_context
def clusters(ctx):
    """List configured clusters and how they authenticate."""
    cfg = _load_app_config(ctx.obj['config'])
    log.configure_logging(cfg.logging.level, cfg.logging.format)
    click.echo('Configured clusters:')
    for c in cfg.clusters:
        ns = c.namespace or '-'
        click.echo(f'  {c.name:18} {c.auth_mode:12} namespace={ns}')


@cli.command('help', add_help_option=False)
@click.argument('command', required=False)
@click.pass_context
def help_cmd(ctx, command):
    """Show context-driven help for a command, or list all commands."""
    group = ctx.parent.command if ctx.parent else ctx.command
    if not command:
        click.echo("Available commands:")
        for cmd_name in group.commands:
            click.echo(f"  {cmd_name}")
        click.echo("\nRun 'kube-capacity help <command>' for details.")
        return
    cmd = group.commands.get(command)
    if not cmd:
        click.echo(f"Unknown command: {command}")
        click.echo("Run 'kube-capacity help' to list available commands.")
        return
    with click.Context(cmd) as cmd_ctx:
        click.echo(cmd.get_help(cmd_ctx))

if __name__ == '__main__':
    cli()
