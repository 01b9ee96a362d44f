from pathlib import Path
from typing import Annotated

import typer

from baseball_analytics.cli._logging import configure_logging
from baseball_analytics.cli._output import (
    print_build_result,
    print_curve,
    print_error,
    print_eras,
    print_game_summary,
    print_import_result,
    print_leverage_summary,
    print_leverages,
    print_pitches,
    print_run_differential,
    print_streaks,
    print_win_expectancy,
)
from baseball_analytics.cli.factory import build_analytics_context, build_analytics_service
from baseball_analytics.config import AnalyticsConfig, ConfigError, create_config, load_config
from baseball_analytics.domain.era import parse_era
from baseball_analytics.domain.leverage import LeverageRole
from baseball_analytics.domain.result import Err, Ok
from baseball_analytics.domain.streak import StreakKind
from baseball_analytics.domain.win_expectancy import Era
from baseball_analytics.exceptions import UnknownEraError
from baseball_analytics.ingest.column_maps import GAME_KEY_COLUMNS, PLAY_KEY_COLUMNS, game_mapper, play_mapper
from baseball_analytics.ingest.csv_source import CsvSource
from baseball_analytics.ingest.loader import Loader
from baseball_analytics.services.game_state_codec import canonicalize
from baseball_analytics.services.rolling_window import run_differential_series
from baseball_analytics.services.streaks import find_streaks

app = typer.Typer(name="bae", help="Baseball analytics engine: game-state analytics over Retrosheet plays")


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable DEBUG logging")] = False,
    quiet: Annotated[bool, typer.Option("--quiet", "-q", help="Only log warnings and errors")] = False,
) -> None:
    """Baseball analytics engine: game-state analytics over Retrosheet plays."""
    configure_logging(verbose=verbose, quiet=quiet)
    if ctx.invoked_subcommand is None:
        raise typer.Exit()


_DbOpt = Annotated[str | None, typer.Option("--db", help="Path to the SQLite database (overrides config)")]
_ConfigOpt = Annotated[str, typer.Option("--config", help="Path to the YAML config file")]
_EraOpt = Annotated[
    str | None, typer.Option("--era", help="Named era (steroid, modern, ...), a season (2019) or a range (1990-2010)")
]


def _load_config(db: str | None, config_path: str) -> AnalyticsConfig:
    overrides = {"database": {"path": db}} if db is not None else None
    try:
        return load_config(create_config(yaml_path=config_path, overrides=overrides))
    except ConfigError as exc:
        print_error(str(exc))
        raise typer.Exit(code=1) from exc


def _parse_era(value: str | None) -> Era | None:
    if value is None:
        return None
    try:
        return parse_era(value)
    except UnknownEraError as exc:
        print_error(str(exc))
        raise typer.Exit(code=1) from exc


@app.command("pitches")
def pitches_cmd(
    game_id: Annotated[str, typer.Argument(help="Retrosheet game id, e.g. BOS201904010")],
    play_num: Annotated[int, typer.Argument(help="Play number within the game")],
    db: _DbOpt = None,
    config_path: _ConfigOpt = "bae.yaml",
) -> None:
    """Decode the pitch sequence of a single play."""
    config = _load_config(db, config_path)
    with build_analytics_context(config) as ctx:
        match ctx.pitches.for_play(game_id, play_num):
            case Ok(pitches):
                print_pitches(pitches)
            case Err(e):
                print_error(e.message)
                raise typer.Exit(code=1)


@app.command("win-expectancy")
def win_expectancy_cmd(
    inning: Annotated[int, typer.Option("--inning", help="Inning (capped at 9)")],
    outs: Annotated[int, typer.Option("--outs", min=0, max=2, help="Outs before the play")] = 0,
    bottom: Annotated[bool, typer.Option("--bottom/--top", help="Half inning")] = False,
    runners: Annotated[str, typer.Option("--runners", help="Runners code, e.g. 1_3 or 101")] = "___",
    score_diff: Annotated[int, typer.Option("--diff", help="Score difference for the batting team")] = 0,
    era: _EraOpt = None,
    db: _DbOpt = None,
    config_path: _ConfigOpt = "bae.yaml",
) -> None:
    """Look up historical win expectancy for a game state."""
    config = _load_config(db, config_path)
    lookup_era = _parse_era(era)
    try:
        state = canonicalize(inning, bottom, outs, runners, score_diff)
    except ValueError as exc:
        print_error(str(exc))
        raise typer.Exit(code=1) from exc
    with build_analytics_context(config) as ctx:
        match ctx.resolver.resolve(state, lookup_era):
            case Ok(record):
                print_win_expectancy(record)
            case Err(e):
                print_error(e.message)
                raise typer.Exit(code=1)


@app.command("eras")
def eras_cmd(db: _DbOpt = None, config_path: _ConfigOpt = "bae.yaml") -> None:
    """List the eras covered by the win expectancy table."""
    config = _load_config(db, config_path)
    with build_analytics_context(config) as ctx:
        print_eras(ctx.resolver.list_eras())


@app.command("leverage")
def leverage_cmd(
    game_ids: Annotated[list[str], typer.Argument(help="One or more Retrosheet game ids")],
    min_li: Annotated[float | None, typer.Option("--min-li", help="Only show plays at or above this LI")] = None,
    db: _DbOpt = None,
    config_path: _ConfigOpt = "bae.yaml",
) -> None:
    """Leverage index and win probability added for each plate appearance."""
    config = _load_config(db, config_path)
    with build_analytics_service(config) as service:
        for game_id, records in zip(game_ids, service.game_leverages(game_ids, min_li=min_li), strict=True):
            print_leverages(game_id, records)


@app.command("game-summary")
def game_summary_cmd(
    game_ids: Annotated[list[str], typer.Argument(help="One or more Retrosheet game ids")],
    db: _DbOpt = None,
    config_path: _ConfigOpt = "bae.yaml",
) -> None:
    """Start and end win probability and the biggest swings of each game."""
    config = _load_config(db, config_path)
    failed = False
    with build_analytics_service(config) as service:
        for result in service.game_summaries(game_ids):
            match result:
                case Ok(summary):
                    print_game_summary(summary)
                case Err(e):
                    print_error(e.message)
                    failed = True
    if failed:
        raise typer.Exit(code=1)


@app.command("leverage-summary")
def leverage_summary_cmd(
    player_id: Annotated[str, typer.Argument(help="Retrosheet player id")],
    season: Annotated[int, typer.Argument(help="Season year")],
    role: Annotated[LeverageRole, typer.Option("--role", help="Count plays as batter, pitcher or either")] = (
        LeverageRole.ANY
    ),
    db: _DbOpt = None,
    config_path: _ConfigOpt = "bae.yaml",
) -> None:
    """Summarize the leverage of a player's plate appearances in a season."""
    config = _load_config(db, config_path)
    with build_analytics_context(config) as ctx:
        plays = ctx.play_repo.get_by_player_season(player_id, season, role)
        print_leverage_summary(ctx.leverage.player_leverage_summary(player_id, season, plays, role))


@app.command("win-prob")
def win_prob_cmd(
    game_ids: Annotated[list[str], typer.Argument(help="One or more Retrosheet game ids")],
    db: _DbOpt = None,
    config_path: _ConfigOpt = "bae.yaml",
) -> None:
    """Play-by-play win probability curve from the score-and-inning model."""
    config = _load_config(db, config_path)
    with build_analytics_service(config) as service:
        for curve in service.win_probability_curves(game_ids):
            print_curve(curve)


@app.command("streaks")
def streaks_cmd(
    player_id: Annotated[str, typer.Argument(help="Retrosheet player id")],
    season: Annotated[int, typer.Argument(help="Season year")],
    kind: Annotated[StreakKind, typer.Option("--kind", help="Streak type")] = StreakKind.HITTING,
    min_length: Annotated[float | None, typer.Option("--min-length", help="Minimum streak length")] = None,
    db: _DbOpt = None,
    config_path: _ConfigOpt = "bae.yaml",
) -> None:
    """Find hitting or scoreless-innings streaks for a player."""
    config = _load_config(db, config_path)
    threshold = min_length if min_length is not None else config.default_min_streak
    if threshold < 1:
        print_error(f"--min-length must be at least 1, got {threshold}")
        raise typer.Exit(code=1)
    with build_analytics_context(config) as ctx:
        if kind == StreakKind.HITTING:
            games = ctx.game_log_repo.batting_games(player_id, season)
        else:
            games = ctx.game_log_repo.pitching_games(player_id, season)
    print_streaks(find_streaks(kind, games, threshold, entity_id=player_id, season=season))


@app.command("run-diff")
def run_diff_cmd(
    team_id: Annotated[str, typer.Argument(help="Retrosheet team code, e.g. BOS")],
    season: Annotated[int, typer.Argument(help="Season year")],
    window: Annotated[list[int] | None, typer.Option("--window", help="Rolling window size(s) in games")] = None,
    db: _DbOpt = None,
    config_path: _ConfigOpt = "bae.yaml",
) -> None:
    """Season run differential with rolling windows."""
    config = _load_config(db, config_path)
    windows = window if window else list(config.default_windows)
    if any(w < 1 for w in windows):
        print_error("--window sizes must be at least 1")
        raise typer.Exit(code=1)
    with build_analytics_context(config) as ctx:
        games = ctx.game_log_repo.team_games(team_id, season)
    print_run_differential(run_differential_series(team_id, season, games, windows))


@app.command("build-we")
def build_we_cmd(
    min_sample: Annotated[int | None, typer.Option("--min-sample", help="Minimum plays per state")] = None,
    era: _EraOpt = None,
    db: _DbOpt = None,
    config_path: _ConfigOpt = "bae.yaml",
) -> None:
    """Build the historical win expectancy table from loaded plays and games."""
    config = _load_config(db, config_path)
    build_era = _parse_era(era)
    threshold = min_sample if min_sample is not None else config.min_sample_size
    if threshold < 1:
        print_error(f"--min-sample must be at least 1, got {threshold}")
        raise typer.Exit(code=1)
    with build_analytics_context(config) as ctx:
        states = ctx.resolver.build_table(threshold, build_era)
        ctx.conn.commit()
    print_build_result(states, build_era.label if build_era is not None else Era().label)


def _import_csv(csv_path: Path, db: str | None, config_path: str, table: str) -> None:
    if not csv_path.exists():
        print_error(f"file not found: {csv_path}")
        raise typer.Exit(code=1)
    config = _load_config(db, config_path)
    with build_analytics_context(config) as ctx:
        if table == "play":
            loader = Loader(
                CsvSource(csv_path, required_columns=PLAY_KEY_COLUMNS), ctx.play_repo, play_mapper, table, conn=ctx.conn
            )
        else:
            loader = Loader(
                CsvSource(csv_path, required_columns=GAME_KEY_COLUMNS), ctx.game_repo, game_mapper, table, conn=ctx.conn
            )
        match loader.load():
            case Ok(summary):
                print_import_result(summary)
            case Err(e):
                print_error(e.message)
                raise typer.Exit(code=1)


@app.command("import-plays")
def import_plays_cmd(
    csv_path: Annotated[Path, typer.Argument(help="Path to a Retrosheet plays.csv file (optionally .gz)")],
    db: _DbOpt = None,
    config_path: _ConfigOpt = "bae.yaml",
) -> None:
    """Import play-by-play rows from a Retrosheet CSV export."""
    _import_csv(csv_path, db, config_path, "play")


@app.command("import-games")
def import_games_cmd(
    csv_path: Annotated[Path, typer.Argument(help="Path to a Retrosheet gameinfo.csv file (optionally .gz)")],
    db: _DbOpt = None,
    config_path: _ConfigOpt = "bae.yaml",
) -> None:
    """Import game results from a Retrosheet CSV export."""
    _import_csv(csv_path, db, config_path, "game")
