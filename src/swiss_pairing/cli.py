"""CLI for Swiss Pairing."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Annotated

import pydantic
import structlog
import typer
import yaml
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from swiss_pairing import __version__
from swiss_pairing.core.config import TournamentConfig, load_config
from swiss_pairing.core.errors import ConfigurationError, SwissPairingError
from swiss_pairing.pairing import PairingStatus, StandingRecord
from swiss_pairing.services.rounds import RoundResult, RoundService
from swiss_pairing.services.storage import TournamentStore
from swiss_pairing.simulation import simulate_tournament

# Configure structlog
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.dev.ConsoleRenderer(),
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)

app = typer.Typer(
    name="swiss-pairing",
    help="Swiss Pairing - pair tournament rounds without repeat opponents",
    add_completion=False,
)
console = Console()

STATUS_STYLES = {
    PairingStatus.STRICT: "green",
    PairingStatus.REPEAT_BYE: "yellow",
    PairingStatus.UNCONSTRAINED: "red",
    PairingStatus.FAILED: "bold red",
}

ConfigOption = Annotated[
    Path | None, typer.Option("--config", "-c", help="Path to config YAML file")
]


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"swiss-pairing v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option("--version", "-v", callback=version_callback, is_eager=True),
    ] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-V", help="Verbose output")] = False,
) -> None:
    """Swiss Pairing CLI."""
    log_level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )


def _load(config_path: Path | None) -> TournamentConfig:
    if config_path is None:
        return TournamentConfig()
    try:
        return load_config(config_path)
    except pydantic.ValidationError as e:
        raise ConfigurationError(
            f"{config_path} is not a valid configuration:\n{e}",
            "Run 'swiss-pairing validate' to check the file.",
        ) from e


def _read_participants(path: Path) -> list[str]:
    """Read identifiers from a YAML list, or one per line."""
    data = yaml.safe_load(path.read_text(encoding="utf-8"))
    if isinstance(data, list):
        return [str(p) for p in data]
    if data is None or isinstance(data, dict):
        msg = f"Expected a list of participant identifiers in {path}"
        raise ConfigurationError(msg)
    # A lone scalar such as a numeric ID parses as int
    return str(data).split()


def _fail(e: Exception) -> typer.Exit:
    if isinstance(e, FileNotFoundError):
        console.print(f"[red]Error:[/red] {e}")
    else:
        console.print(f"[red]{e}")
    return typer.Exit(1)


def _print_round(result: RoundResult) -> None:
    style = STATUS_STYLES[result.outcome.status]
    table = Table(
        title=f"Round {result.round_number} "
        f"([{style}]{result.outcome.status.value}[/{style}])"
    )
    table.add_column("Table", justify="right")
    table.add_column("Player 1")
    table.add_column("Player 2")
    table.add_column("Match ID", style="dim")
    for m in result.matches:
        table.add_row(
            str(m.table_number),
            m.player_one_id,
            m.player_two_id or "[italic]BYE[/italic]",
            m.id,
        )
    console.print(table)
    if not result.outcome.is_strict:
        console.print(
            f"[{style}]Warning:[/{style}] pairing relaxed to '{result.outcome.status.value}'; "
            "repeat opponents or byes may occur."
        )


def _print_standings(rows: list[tuple[str, StandingRecord]]) -> None:
    table = Table(title="Standings")
    for col in ("Rank", "Participant", "Points", "W/L/T", "Games", "Diff"):
        table.add_column(col)
    for i, (pid, r) in enumerate(rows, 1):
        table.add_row(
            str(i),
            pid,
            str(r.points),
            f"{r.wins}/{r.losses}/{r.ties}",
            f"{r.game_wins}-{r.game_losses}",
            f"{r.game_differential:+d}",
        )
    console.print(table)


@app.command("next-round")
def next_round(
    tournament_id: Annotated[str, typer.Argument(help="Tournament identifier")],
    participants: Annotated[
        list[str] | None, typer.Argument(help="Participant identifiers")
    ] = None,
    participants_file: Annotated[
        Path | None,
        typer.Option("--participants-file", "-f", help="YAML list of participant identifiers"),
    ] = None,
    config_path: ConfigOption = None,
) -> None:
    """Pair the next round of a tournament and store its matches."""
    try:
        config = _load(config_path)
        ids = list(participants or [])
        if participants_file is not None:
            ids.extend(_read_participants(participants_file))

        async def _run() -> RoundResult:
            store = TournamentStore(config)
            try:
                return await RoundService(config, store).advance_round(tournament_id, ids)
            finally:
                await store.close()

        result = asyncio.run(_run())
    except (FileNotFoundError, SwissPairingError) as e:
        raise _fail(e) from e

    _print_round(result)


@app.command()
def record(
    match_id: Annotated[str, typer.Argument(help="Match identifier")],
    winner: Annotated[str | None, typer.Option("--winner", "-w", help="Winner ID")] = None,
    tie: Annotated[bool, typer.Option("--tie", help="Record a tie")] = False,
    games: Annotated[
        str, typer.Option("--games", "-g", help="Game score as P1-P2, e.g. 2-1")
    ] = "0-0",
    config_path: ConfigOption = None,
) -> None:
    """Record the result of a played match."""
    try:
        config = _load(config_path)
        try:
            one_games, two_games = (int(x) for x in games.split("-", 1))
        except ValueError as e:
            msg = f"Invalid game score '{games}'"
            raise ConfigurationError(msg, "Use the form 2-1.") from e

        async def _run() -> None:
            store = TournamentStore(config)
            try:
                await RoundService(config, store).record_result(
                    match_id,
                    winner_id=winner,
                    tie=tie,
                    player_one_games=one_games,
                    player_two_games=two_games,
                )
            finally:
                await store.close()

        asyncio.run(_run())
    except (FileNotFoundError, SwissPairingError) as e:
        raise _fail(e) from e

    console.print(f"[green]Result recorded for {match_id}[/green]")


@app.command()
def standings(
    tournament_id: Annotated[str, typer.Argument(help="Tournament identifier")],
    config_path: ConfigOption = None,
) -> None:
    """Show current standings of a tournament."""
    try:
        config = _load(config_path)

        async def _run() -> list[tuple[str, StandingRecord]]:
            store = TournamentStore(config)
            try:
                return await RoundService(config, store).standings(tournament_id)
            finally:
                await store.close()

        rows = asyncio.run(_run())
    except (FileNotFoundError, SwissPairingError) as e:
        raise _fail(e) from e

    _print_standings(rows)


@app.command()
def simulate(
    players: Annotated[int, typer.Option("--players", "-p", help="Smallest field size")] = 5,
    max_players: Annotated[
        int | None, typer.Option("--max-players", help="Largest field size (default: --players)")
    ] = None,
    rounds: Annotated[int, typer.Option("--rounds", "-r", help="Rounds per tournament")] = 5,
    seed: Annotated[int | None, typer.Option("--seed", help="Random seed")] = None,
    strict: Annotated[
        bool, typer.Option("--strict", help="Disable repeat-bye and unconstrained fallbacks")
    ] = False,
    config_path: ConfigOption = None,
) -> None:
    """Simulate tournaments with random results and verify every round.

    Exits with an error only when a round breaks a pairing rule. A history
    that leaves no strict pairing is reported but is not a failure.
    """
    try:
        config = _load(config_path)
    except (FileNotFoundError, SwissPairingError) as e:
        raise _fail(e) from e

    if seed is not None:
        config.seed = seed
    if strict:
        config.pairing.allow_repeat_byes = False
        config.pairing.allow_unconstrained = False

    all_ok = True
    for n in range(players, (max_players or players) + 1):
        report = simulate_tournament(n, min(rounds, max(n - 1, 1)), config=config)
        summary = ", ".join(
            f"R{r.round_number}:{r.status.value}" for r in report.rounds
        )
        mark = "[green]OK[/green]" if report.ok else "[red]FAIL[/red]"
        console.print(f"{mark} {n} players  {summary}")
        if report.exhausted_round is not None:
            console.print(
                f"    [yellow]no strict pairing left in round {report.exhausted_round}[/yellow]"
            )
        for v in report.violations:
            console.print(f"    [red]{v}[/red]")
        all_ok = all_ok and report.ok

    if not all_ok:
        raise typer.Exit(1)


@app.command()
def validate(
    config_path: Annotated[Path, typer.Argument(help="Path to config YAML file")],
) -> None:
    """Validate a configuration file without running."""
    try:
        config = _load(config_path)
    except (FileNotFoundError, SwissPairingError) as e:
        raise _fail(e) from e

    console.print("[green]Configuration is valid![/green]")
    console.print(f"  Database: {config.get_database_url()}")
    console.print(f"  Max search steps: {config.pairing.max_steps}")
    console.print(f"  Repeat-bye fallback: {config.pairing.allow_repeat_byes}")
    console.print(f"  Unconstrained fallback: {config.pairing.allow_unconstrained}")
    console.print(
        f"  Points (win/tie/loss/bye): {config.scoring.win_points}/"
        f"{config.scoring.tie_points}/{config.scoring.loss_points}/{config.scoring.bye_points}"
    )


@app.command()
def info() -> None:
    """Show tool information and example commands."""
    console.print("[bold]Swiss Pairing[/bold]")
    console.print(f"Version: {__version__}\n")

    console.print("[bold]Example Commands:[/bold]")
    console.print("  # Pair the next round")
    console.print("  uv run swiss-pairing next-round cup-2026 alice bob carol dave\n")

    console.print("  # Read participants from a file")
    console.print("  uv run swiss-pairing next-round cup-2026 -f players.yaml -c config.yaml\n")

    console.print("  # Record a 2-1 win")
    console.print("  uv run swiss-pairing record <match-id> --winner alice --games 2-1\n")

    console.print("  # Show standings")
    console.print("  uv run swiss-pairing standings cup-2026\n")

    console.print("  # Verify the engine on 5 to 12 players")
    console.print("  uv run swiss-pairing simulate --players 5 --max-players 12 --strict")


if __name__ == "__main__":
    app()
