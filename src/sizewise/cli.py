"""sizewise CLI - backlog prioritization and sequencing."""

import json
import logging
import sys

import click

from .adapters.json_board import BoardFormatError
from .adapters.version_feed import UpdateCheckError
from .config import load_config
from .core.items import BacklogItem, wsjf_density, wsjf_score
from .core.sequencing import SortCriterion, SortDirection, snapshot_locked_order
from .core.simulation import SimulationResult
from .workflows import BoardReport, check_for_update, get_board_store, load_report

CRITERIA = [c.value for c in SortCriterion]
DIRECTIONS = [d.value for d in SortDirection]


def _board_options(func):
    """Options shared by every command that reads a board."""
    func = click.option("--json", "as_json", is_flag=True, help="Output as JSON")(func)
    func = click.option("--direction", "-d", type=click.Choice(DIRECTIONS), default=None, help="Sort direction")(func)
    func = click.option("--criterion", "-c", type=click.Choice(CRITERIA), default=None, help="Sort criterion")(func)
    func = click.argument("board", required=False, type=click.Path(dir_okay=False))(func)
    return func


def _load(board: str | None, criterion: str | None, direction: str | None, wsjf_mode: bool | None = None) -> BoardReport:
    """Shared board loading with CLI error handling."""
    config = load_config()
    try:
        return load_report(config, get_board_store(board), criterion, direction, wsjf_mode)
    except BoardFormatError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


def _fmt(value) -> str:
    if value is None:
        return "-"
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return f"{value:,}" if isinstance(value, int) else f"{value:,.2f}"


def _item_json(item: BacklogItem, ranks: dict) -> dict:
    return {
        "id": item.id,
        "title": item.title,
        "kind": item.kind.value,
        "jobSize": item.job_size,
        "cod": item.cod,
        "tshirtSize": item.tshirt_size,
        "wsjf": wsjf_score(item),
        "wsjfRank": ranks.get(item.id),
    }


def _simulation_json(sim: SimulationResult | None) -> dict | None:
    if sim is None:
        return None
    return {
        "totalCost": sim.total_cost,
        "segments": [
            {
                "id": s.key,
                "start": s.start,
                "end": s.end,
                "waitingCod": s.waiting_weight,
                "cost": s.cost,
                "cumulativeCost": s.cumulative_cost,
            }
            for s in sim.segments
        ],
        "accrued": [{"id": key, "cost": cost} for key, cost in sim.accrued.items()],
    }


@click.group()
@click.version_option(package_name="sizewise")
@click.option("--debug", is_flag=True, help="Enable debug logging")
def main(debug: bool):
    """sizewise - Job Size, Cost of Delay and WSJF sequencing."""
    if debug:
        logging.basicConfig(
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            level=logging.DEBUG,
        )


@main.command()
@_board_options
@click.option("--wsjf-mode", is_flag=True, help="Sort references with the rest (WSJF view)")
def sequence(board: str | None, criterion: str | None, direction: str | None, as_json: bool, wsjf_mode: bool):
    """Show the backlog in display order."""
    report = _load(board, criterion, direction, True if wsjf_mode else None)

    if as_json:
        click.echo(
            json.dumps(
                {
                    "criterion": report.state.criterion.value,
                    "direction": report.state.direction.value,
                    "items": [_item_json(item, report.ranks) for item in report.sequence],
                    "lockedOrder": snapshot_locked_order(report.sequence),
                },
                indent=2,
            )
        )
        return

    if len(report.sequence) <= 1:
        click.echo("Backlog is empty.")
        return

    click.echo(f"Sorted by {report.state.criterion.value} ({report.state.direction.value})\n")
    for item in report.sequence:
        if item.is_sentinel:
            click.echo(f"      {item.title}")
            continue
        marker = {"reference-min": "[min]", "reference-max": "[max]"}.get(item.kind.value, "")
        rank = report.ranks.get(item.id)
        rank_str = f"#{rank}" if rank else "  "
        size = item.tshirt_size or "-"
        click.echo(
            f"{rank_str:>4}  {size:4} {item.title} "
            f"(job size {_fmt(item.job_size)}, CoD {_fmt(item.cod)}) {marker}".rstrip()
        )


@main.command()
@click.argument("board", required=False, type=click.Path(dir_okay=False))
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def ranks(board: str | None, as_json: bool):
    """Show WSJF ranks (1 = do first)."""
    report = _load(board, None, None)
    by_id = {item.id: item for item in report.sequence}
    ranked = sorted(report.ranks.items(), key=lambda pair: pair[1])

    if as_json:
        click.echo(json.dumps([{"id": item_id, "rank": rank} for item_id, rank in ranked], indent=2))
        return

    if not ranked:
        click.echo("No item has both Job Size and Cost of Delay.")
        return

    for item_id, rank in ranked:
        item = by_id[item_id]
        wsjf = wsjf_density(item.cod, item.job_size)
        click.echo(f"#{rank:<3} {wsjf:6.2f}  {item.title}")


@main.command()
@_board_options
def compare(board: str | None, criterion: str | None, direction: str | None, as_json: bool):
    """Compare the current order's delay cost with the WSJF-optimal order."""
    report = _load(board, criterion, direction)
    result = report.comparison

    if as_json:
        click.echo(
            json.dumps(
                {
                    "criterion": report.state.criterion.value,
                    "direction": report.state.direction.value,
                    "optimalOrder": [item.id for item in result.optimal_order],
                    "currentOrder": [item.id for item in result.current_order],
                    "optimalCost": result.optimal_cost,
                    "currentCost": result.current_cost,
                    "overheadPercent": result.overhead_percent,
                },
                indent=2,
            )
        )
        return

    if not result.optimal_order:
        click.echo("No valid WSJF data available.")
        return

    click.echo("Optimal (WSJF) order:")
    for item in result.optimal_order:
        click.echo(f"  - {item.title}")
    click.echo(f"Total cost of delay: {_fmt(result.optimal_cost)}\n")

    click.echo(f"Current order ({report.state.criterion.value}, {report.state.direction.value}):")
    for item in result.current_order:
        click.echo(f"  - {item.title}")
    suffix = f" (+{result.overhead_percent}%)" if result.overhead_percent else ""
    click.echo(f"Total cost of delay: {_fmt(result.current_cost)}{suffix}")


@main.command()
@_board_options
@click.option("--optimal", is_flag=True, help="Simulate the WSJF-optimal order instead of the current one")
def simulate(board: str | None, criterion: str | None, direction: str | None, as_json: bool, optimal: bool):
    """Step through the delay cost accrued while each item is processed."""
    report = _load(board, criterion, direction)
    result = report.comparison
    sim = result.optimal_simulation if optimal else result.current_simulation

    if as_json:
        click.echo(json.dumps(_simulation_json(sim), indent=2))
        return

    if sim is None or not sim.segments:
        click.echo("No valid WSJF data available.")
        return

    titles = {item.id: item.title for item in result.optimal_order}
    click.echo(f"{'time':>11}  {'waiting CoD':>11}  {'cost':>10}  {'total':>10}  item")
    for s in sim.segments:
        span = f"{_fmt(s.start)}-{_fmt(s.end)}"
        click.echo(
            f"{span:>11}  {_fmt(s.waiting_weight):>11}  {_fmt(s.cost):>10}  "
            f"{_fmt(s.cumulative_cost):>10}  {titles.get(s.key, s.key)}"
        )
    click.echo(f"\nTotal cost of delay: {_fmt(sim.total_cost)}")


@main.command("check-update")
def check_update():
    """Check whether a newer release is available."""
    config = load_config()
    try:
        status = check_for_update(config)
    except UpdateCheckError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if status.latest is None:
        click.echo(f"sizewise {status.local_version} (no release information)")
    elif status.update_available:
        click.echo(f"sizewise {status.local_version} is outdated, current is: {status.latest.version}")
        if status.latest.download_url:
            click.echo(f"Download: {status.latest.download_url}")
    else:
        click.echo(f"sizewise {status.local_version} is up-to-date")


if __name__ == "__main__":
    main()
