"""lem-in command line interface.

Usage:
  lem-in farm.txt                           solve and print the move log
  lem-in farm.txt --policy room-exclusive   one ant per room across routes
  lem-in farm.txt --stats                   summary table on stderr
  lem-in farm.txt -v                        debug logging on stderr
"""

import logging
import sys

import click
from rich import box
from rich.console import Console
from rich.table import Table

from antfarm.control_plane.orchestration_service import OrchestrationService
from antfarm.control_plane.policy import DEFAULT_POLICY_NAME, policy_names, resolve_policy
from antfarm.io.formatter import render_solution
from antfarm.io.parser import load_farm
from antfarm.shared.errors import LeminError
from antfarm.shared.telemetry import ScheduleMetrics

err_console = Console(stderr=True)


def _print_stats(metrics: ScheduleMetrics, policy: str) -> None:
    table = Table(title=f"Schedule ({policy})", box=box.ROUNDED)
    table.add_column("Route")
    table.add_column("Hops", justify="right")
    table.add_column("Ants", justify="right")
    for idx, (hops, ants) in enumerate(
        zip(metrics.route_hop_lengths, metrics.units_per_route)
    ):
        table.add_row(str(idx), str(hops), str(ants))
    err_console.print(table)
    err_console.print(
        f"[bold]Ants:[/bold] {metrics.unit_count} | "
        f"[bold]Turns:[/bold] {metrics.turn_count} | "
        f"[bold]Moves:[/bold] {metrics.move_count} | "
        f"busiest turn: {metrics.max_moves_per_turn}"
    )


@click.command("lem-in")
@click.argument("farm_file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--policy",
    type=click.Choice(policy_names()),
    default=DEFAULT_POLICY_NAME,
    show_default=True,
    help="Scheduling policy.",
)
@click.option("--stats", is_flag=True, help="Print a schedule summary to stderr.")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging to stderr.")
def main(farm_file, policy, stats, verbose):
    """Move the ants of FARM_FILE from ##start to ##end in as few turns as the
    route heuristic allows."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    service = OrchestrationService(resolve_policy(policy))
    try:
        farm = load_farm(farm_file)
        solution = service.solve(farm)
    except LeminError as exc:
        click.echo(f"ERROR: {exc}")
        sys.exit(1)

    click.echo(render_solution(solution.farm, solution.schedule), nl=False)
    if stats:
        _print_stats(solution.metrics, solution.policy)


if __name__ == "__main__":
    main()
