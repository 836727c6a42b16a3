#!/usr/bin/env python3
"""Calculate equity for a set of poker hands."""

import argparse
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler
from rich.progress import BarColumn, Progress, TextColumn, TimeElapsedColumn
from rich.table import Table

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from pokerodds import (
    CalculationOptions, EquityCalculator, EquityError, EquityResult, GameVariant,
)


def main():
    parser = argparse.ArgumentParser(
        description="Calculate poker equity (exact or Monte Carlo)"
    )
    parser.add_argument(
        "-H", "--hand",
        action="append",
        required=True,
        help="Player hole cards, repeat once per player (e.g. -H AsKs -H QhJh). "
             "Use '' or a partial hand for unknown cards",
    )
    parser.add_argument(
        "-b", "--board",
        default="",
        help="Board cards (e.g., 'Ts9s2h' or 'Ts 9s 2h')",
    )
    parser.add_argument(
        "-d", "--dead",
        default="",
        help="Dead cards, unavailable for dealing",
    )
    parser.add_argument(
        "--variant",
        choices=[v.value for v in GameVariant],
        default=GameVariant.TEXAS_HOLDEM.value,
        help="Game variant (default: texas_holdem)",
    )
    parser.add_argument(
        "-i", "--iterations",
        type=int,
        default=10000,
        help="Maximum Monte Carlo iterations (default: 10000)",
    )
    parser.add_argument(
        "--exhaustive",
        action="store_true",
        help="Force exhaustive enumeration regardless of size",
    )
    parser.add_argument(
        "--max-combinations",
        type=int,
        default=25000,
        help="Largest scenario count solved exactly (default: 25000)",
    )
    parser.add_argument(
        "-t", "--threshold",
        type=float,
        default=0.001,
        help="Monte Carlo early-stop threshold, 0 to disable (default: 0.001)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Random seed for reproducible Monte Carlo runs",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Verbose output",
    )

    args = parser.parse_args()
    console = Console()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )

    calc = EquityCalculator(GameVariant(args.variant))
    try:
        for hand in args.hand:
            calc.add_hand(hand)
        calc.set_board(args.board).add_dead_cards(args.dead)
        options = CalculationOptions(
            iterations=args.iterations,
            force_exhaustive=args.exhaustive,
            max_exhaustive_combinations=args.max_combinations,
            accuracy_threshold=args.threshold or None,
            seed=args.seed,
        )
    except (EquityError, ValueError) as e:
        console.print(f"[red]{e}[/]")
        return 1

    console.print(f"[bold]Variant:[/] {calc.variant.value}")
    console.print(f"[bold]Board:[/] {calc.board or '-'}")
    if calc.dead_cards:
        console.print(f"[bold]Dead:[/] {' '.join(str(c) for c in calc.dead_cards)}")
    console.print(f"[bold]Estimated combinations:[/] {calc.estimate_combinations():,}")
    console.print()

    with Progress(
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TextColumn("{task.percentage:>3.0f}%"),
        TimeElapsedColumn(),
        console=console,
        transient=True,
    ) as progress:
        task = progress.add_task("Calculating equity...", total=1.0)
        options.progress_callback = lambda fraction: progress.update(task, completed=fraction)

        try:
            result = calc.calculate(options)
        except EquityError as e:
            console.print(f"[red]{e}[/]")
            return 1

    _display_results(console, calc, result)
    return 0


def _display_results(console: Console, calc: EquityCalculator, result: EquityResult) -> None:
    """Display per-player equity table."""
    kind = "exact" if result.is_exact else "Monte Carlo"
    table = Table(title=f"Equity ({kind}, {result.total_hands:,} scenarios)")
    table.add_column("Player", style="cyan")
    table.add_column("Hand")
    table.add_column("Equity", justify="right", style="bold")
    table.add_column("Win", justify="right")
    table.add_column("Tie", justify="right")
    table.add_column("Most common hand")

    total = max(result.total_hands, 1)
    for player, hand in zip(result.player_results, calc.hands):
        common = player.most_common_category
        common_str = "-"
        if common is not None:
            share = player.category_counts[common] / total
            common_str = f"{common.label} ({share:.1%})"

        table.add_row(
            str(player.hand_index + 1),
            str(hand) or "??",
            f"{player.equity:.2%}",
            f"{player.wins / total:.2%}",
            f"{player.ties / total:.2%}",
            common_str,
        )

    console.print(table)
    console.print(f"\n[dim]Elapsed: {result.elapsed_time:.3f}s[/]")


if __name__ == "__main__":
    sys.exit(main())
