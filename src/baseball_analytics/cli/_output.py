from rich.console import Console
from rich.table import Table

from baseball_analytics.domain.leverage import GameWinProbabilitySummary, PlateAppearanceLeverage, PlayerLeverageSummary
from baseball_analytics.domain.pitch import PitchEvent
from baseball_analytics.domain.run_differential import RunDifferentialSeries
from baseball_analytics.domain.streak import Streak
from baseball_analytics.domain.win_expectancy import WinExpectancy, WinExpectancyEra
from baseball_analytics.domain.win_probability import WinProbabilityCurve
from baseball_analytics.ingest.loader import LoadSummary

console = Console(highlight=False)
err_console = Console(stderr=True, highlight=False)


def print_error(message: str) -> None:
    err_console.print(f"[red bold]Error:[/red bold] {message}")


def _half(is_bottom: bool) -> str:
    return "Bot" if is_bottom else "Top"


def print_pitches(pitches: list[PitchEvent]) -> None:
    if not pitches:
        console.print("No pitches recorded.")
        return
    table = Table(show_edge=False, pad_edge=False)
    table.add_column("#", justify="right")
    table.add_column("Code")
    table.add_column("Pitch")
    table.add_column("Count", justify="right")
    table.add_column("Outcome")
    for p in pitches:
        table.add_row(str(p.seq_num), p.pitch_type, p.description, f"{p.balls}-{p.strikes}", p.outcome or "")
    console.print(table)


def print_win_expectancy(record: WinExpectancy) -> None:
    console.print(
        f"[bold]{_half(record.is_bottom)} {record.inning}[/bold], {record.outs} out, "
        f"runners {record.runners_code}, score diff {record.score_diff:+d}"
    )
    console.print(f"  Home win probability: {record.win_probability:.3f}")
    console.print(f"  Sample size: {record.sample_size}")
    console.print(f"  Era: {record.era.label}")


def print_eras(eras: list[WinExpectancyEra]) -> None:
    if not eras:
        console.print("No win expectancy data loaded.")
        return
    table = Table(show_edge=False, pad_edge=False)
    table.add_column("Era")
    table.add_column("States", justify="right")
    table.add_column("Sample", justify="right")
    for era in eras:
        table.add_row(era.label, str(era.state_count), str(era.total_sample))
    console.print(table)


def print_leverages(game_id: str, records: list[PlateAppearanceLeverage]) -> None:
    console.print(f"[bold]{game_id}[/bold]: {len(records)} plate appearances")
    if not records:
        return
    table = Table(show_edge=False, pad_edge=False)
    table.add_column("Play", justify="right")
    table.add_column("Inn")
    table.add_column("Score", justify="right")
    table.add_column("Outs", justify="right")
    table.add_column("Bases")
    table.add_column("Batter")
    table.add_column("LI", justify="right")
    table.add_column("WPA", justify="right")
    table.add_column("Event")
    for r in records:
        color = "green" if r.wpa > 0 else "red" if r.wpa < 0 else "white"
        table.add_row(
            str(r.event_id),
            f"{_half(r.is_bottom)} {r.inning}",
            f"{r.away_score_before}-{r.home_score_before}",
            str(r.outs_before),
            r.bases_before,
            r.batter_id,
            f"{r.leverage_index:.2f}",
            f"[{color}]{r.wpa:+.3f}[/{color}]",
            r.description,
        )
    console.print(table)


def print_leverage_summary(summary: PlayerLeverageSummary) -> None:
    console.print(f"Leverage summary for [bold]{summary.player_id}[/bold] ({summary.season}, {summary.role})")
    console.print(f"  Plate appearances: {summary.plate_appearances}")
    console.print(f"  Average LI: {summary.avg_leverage_index:.2f}")
    console.print(
        f"  Low / medium / high: {summary.low_leverage_pa} / {summary.medium_leverage_pa} / {summary.high_leverage_pa}"
    )
    console.print(f"  WPA: {summary.win_probability_added:+.3f}")


def print_game_summary(summary: GameWinProbabilitySummary) -> None:
    console.print(f"[bold]{summary.away_team} @ {summary.home_team}[/bold] ({summary.game_id})")
    console.print(f"  Home win probability: {summary.home_win_prob_start:.3f} -> {summary.home_win_prob_end:.3f}")
    for label, swing in (
        ("Biggest swing for home", summary.biggest_positive_swing),
        ("Biggest swing against home", summary.biggest_negative_swing),
    ):
        if swing is not None:
            console.print(f"  {label}: play {swing.event_id} {swing.description} ({swing.wpa:+.3f})")


def print_curve(curve: WinProbabilityCurve) -> None:
    console.print(f"[bold]{curve.away_team or '?'} @ {curve.home_team}[/bold] ({curve.game_id})")
    if not curve.points:
        console.print("No plays recorded.")
        return
    table = Table(show_edge=False, pad_edge=False)
    table.add_column("Play", justify="right")
    table.add_column("Inn")
    table.add_column("Score", justify="right")
    table.add_column("Outs", justify="right")
    table.add_column("Bases")
    table.add_column("Home", justify="right")
    table.add_column("Away", justify="right")
    table.add_column("Event")
    for p in curve.points:
        table.add_row(
            str(p.event_index),
            f"{_half(p.is_bottom)} {p.inning}",
            f"{p.away_score}-{p.home_score}",
            str(p.outs),
            p.bases,
            f"{p.home_win_prob:.2f}",
            f"{p.away_win_prob:.2f}",
            p.description,
        )
    console.print(table)


def print_streaks(streaks: list[Streak]) -> None:
    if not streaks:
        console.print("No streaks found.")
        return
    table = Table(show_edge=False, pad_edge=False)
    table.add_column("Streak")
    table.add_column("Start")
    table.add_column("End")
    table.add_column("Games", justify="right")
    for s in streaks:
        table.add_row(s.label, s.start_date, s.end_date, str(s.games))
    console.print(table)


def print_run_differential(series: RunDifferentialSeries) -> None:
    console.print(f"[bold]{series.entity_id}[/bold] {series.season}: {series.games_played} games")
    console.print(
        f"  Runs scored {series.runs_scored}, allowed {series.runs_allowed}, differential {series.run_differential:+d}"
    )
    for window in series.rolling:
        if not window.points:
            console.print(f"  {window.label}: not enough games")
            continue
        diffs = [p.run_differential for p in window.points]
        latest = window.points[-1]
        console.print(
            f"  {window.label}: latest {latest.run_differential:+d} (through {latest.end_date}), "
            f"best {max(diffs):+d}, worst {min(diffs):+d}"
        )


def print_build_result(states: int, label: str) -> None:
    console.print(f"[bold green]Built[/bold green] {states} win expectancy states for {label}")


def print_import_result(summary: LoadSummary) -> None:
    skipped = f" ({summary.rows_skipped} skipped)" if summary.rows_skipped else ""
    console.print(
        f"[bold green]Imported[/bold green] {summary.rows_loaded} rows into {summary.target_table}{skipped} "
        f"in {summary.seconds:.1f}s"
    )
