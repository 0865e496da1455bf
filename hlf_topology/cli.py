"""hlf-topology CLI - inspect the resolved ledger network topology."""

import json
import logging
import sys
from typing import Any, Callable, Optional

import click
import structlog
from pydantic import BaseModel
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from hlf_topology import __version__
from hlf_topology.config import SettingsLoader, TopologySettings
from hlf_topology.core.domain.models import TopologyError
from hlf_topology.core.domain.services.topology import TopologyService
from hlf_topology.service import create_topology_service

console = Console()
err_console = Console(stderr=True)

FORMAT_OPTION = click.option(
    "--format", "-f", "output_format", type=click.Choice(["table", "json"]), default="table"
)
NAMESPACE_OPTION = click.option(
    "--namespace", "-n", default=None, help="Namespace scope (default: all namespaces)"
)


def configure_logging(verbose: bool) -> None:
    """Send structlog output to stderr, warnings only unless verbose."""
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.DEBUG if verbose else logging.WARNING
        ),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )


class _CliState:
    """Lazily builds the topology service once options are parsed."""

    def __init__(self, settings: TopologySettings, manifest: Optional[str]):
        self.settings = settings
        self.manifest = manifest
        self._service: Optional[TopologyService] = None

    @property
    def service(self) -> TopologyService:
        if self._service is None:
            self._service = create_topology_service(self.settings, manifest=self.manifest)
        return self._service

    def scope(self, namespace: Optional[str]) -> str:
        return self.settings.namespace if namespace is None else namespace


def _run(action: Callable[[], Any]) -> Any:
    try:
        return action()
    except TopologyError as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        sys.exit(1)


def _dump(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if isinstance(value, (list, tuple)):
        return [_dump(item) for item in value]
    return value


def _print_json(value: Any) -> None:
    # Plain echo, rich would wrap long lines
    click.echo(json.dumps(_dump(value), indent=2))


@click.group()
@click.version_option(version=__version__, prog_name="hlf-topology")
@click.option("--config", "config_path", type=click.Path(exists=True, dir_okay=False), help="Settings file (YAML/JSON)")
@click.option("--context", default=None, help="Kubeconfig context")
@click.option("--from-file", "manifest", type=click.Path(exists=True, dir_okay=False), default=None, help="Read records from a manifest file instead of the cluster")
@click.option("--public-ip", default=None, help="Use this IP for node-port addresses")
@click.option("--request-timeout", type=click.FloatRange(min=0, min_open=True), default=None, help="API request timeout in seconds")
@click.option("--verbose", "-v", is_flag=True, help="Debug logging on stderr")
@click.pass_context
def main(
    ctx: click.Context,
    config_path: Optional[str],
    context: Optional[str],
    manifest: Optional[str],
    public_ip: Optional[str],
    request_timeout: Optional[float],
    verbose: bool,
) -> None:
    """Resolve addresses of certificate authorities, peers and orderers."""
    configure_logging(verbose)

    settings = TopologySettings()
    if config_path:
        try:
            settings = SettingsLoader().load_from_file(config_path)
        except (FileNotFoundError, ValueError) as e:
            raise click.BadParameter(str(e), param_hint="--config") from e
    settings = settings.merged(
        context=context,
        public_ip=public_ip,
        request_timeout=request_timeout,
    )
    ctx.obj = _CliState(settings, manifest)


@main.command()
@NAMESPACE_OPTION
@FORMAT_OPTION
@click.pass_obj
def cas(state: _CliState, namespace: Optional[str], output_format: str) -> None:
    """List certificate authorities."""
    items = _run(lambda: state.service.list_cas(state.scope(namespace)))
    if output_format == "json":
        _print_json(items)
        return

    table = Table(title="Certificate Authorities")
    table.add_column("Name", style="cyan")
    table.add_column("Public URL", style="green")
    table.add_column("Private URL")
    table.add_column("Enroll ID")
    for ca in items:
        table.add_row(ca.full_name, ca.public_url, ca.private_url, ca.enroll_id)
    console.print(table)


@main.command()
@NAMESPACE_OPTION
@FORMAT_OPTION
@click.pass_obj
def peers(state: _CliState, namespace: Optional[str], output_format: str) -> None:
    """List peers grouped by MSP ID."""
    organizations, _ = _run(lambda: state.service.list_peers(state.scope(namespace)))
    if output_format == "json":
        _print_json(organizations)
        return

    table = Table(title="Peers")
    table.add_column("MSP ID", style="magenta")
    table.add_column("Name", style="cyan")
    table.add_column("Public URL", style="green")
    table.add_column("Private URL")
    for org in organizations:
        for peer in org.peers:
            table.add_row(org.msp_id, peer.full_name, peer.public_url, peer.private_url)
    console.print(table)


@main.command()
@NAMESPACE_OPTION
@FORMAT_OPTION
@click.pass_obj
def orderers(state: _CliState, namespace: Optional[str], output_format: str) -> None:
    """List ordering services and their orderer nodes."""
    _, services = _run(lambda: state.service.list_orderers(state.scope(namespace)))
    if output_format == "json":
        _print_json(services)
        return

    if not services:
        console.print("[yellow]No orderers found[/yellow]")
        return

    table = Table(title="Ordering Services")
    table.add_column("Service", style="magenta")
    table.add_column("MSP ID")
    table.add_column("Node", style="cyan")
    table.add_column("Public URL", style="green")
    table.add_column("Admin URL")
    table.add_column("Private URL")
    for service in services:
        label = f"{service.name} (implicit)" if service.implicit else service.name
        for node in service.orderers:
            table.add_row(
                label,
                node.msp_id or service.msp_id,
                node.full_name,
                node.public_url,
                node.admin_url,
                node.private_url,
            )
        if not service.orderers:
            table.add_row(label, service.msp_id, "-", "-", "-", "-")
    console.print(table)


@main.command()
@click.argument(
    "kind",
    type=click.Choice(["ca", "peer", "orderer-node", "ordering-service"]),
)
@click.argument("full_name")
@NAMESPACE_OPTION
@click.pass_obj
def get(state: _CliState, kind: str, full_name: str, namespace: Optional[str]) -> None:
    """Show one component by its NAME.NAMESPACE full name as JSON."""

    def find() -> Any:
        service = state.service
        finders = {
            "ca": service.find_ca_by_full_name,
            "peer": service.find_peer_by_full_name,
            "orderer-node": service.find_orderer_node_by_full_name,
            "ordering-service": service.find_ordering_service_by_full_name,
        }
        return finders[kind](full_name, state.scope(namespace))

    _print_json(_run(find))


@main.command("ca-by-url")
@click.argument("host")
@click.argument("port", type=int)
@click.pass_obj
def ca_by_url(state: _CliState, host: str, port: int) -> None:
    """Find the certificate authority a client reaches at HOST PORT."""
    ca = _run(lambda: state.service.find_ca_by_url(host, port))
    console.print(f"[cyan]{ca.full_name}[/cyan] {ca.public_url}")


if __name__ == "__main__":
    main()
