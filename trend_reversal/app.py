# trend_reversal/app.py
from __future__ import annotations
import asyncio
import json
import logging
from rich import print
from rich.logging import RichHandler
from rich.table import Table
import typer
from .config import settings
from .types import Candle, Instrument, Signal, Timeframe
from .data.base import CandleProvider
from .data.mock_provider import MockProvider
from .strategies import TrendReversalStrategy
from .replay import replay, summarize

cli = typer.Typer(help="Trend-reversal signal evaluator (ZigZag + MBFX + trend line + MA15).")

_RULE_LABELS = {
    "zigzag": "ZigZag pivot",
    "mbfx": "MBFX excursion",
    "trend": "Trend line colour",
    "ma15": "Close vs MA",
}

def setup_logging(level: str) -> None:
    lvl = getattr(logging, (level or "INFO").upper(), logging.INFO)
    logging.basicConfig(
        level=lvl,
        format="%(name)s | %(message)s",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
    )

def _provider_from_name(name: str, csv_path: str) -> CandleProvider:
    if name == "csv":
        from .data.csv_provider import CsvProvider
        if not csv_path:
            print("[red]--csv-path is required with --provider csv[/]")
            raise typer.Exit(code=1)
        return CsvProvider(csv_path)
    return MockProvider()

async def _load(provider: str, csv_path: str, symbol: str, timeframe: Timeframe, limit: int) -> list[Candle]:
    mdp = _provider_from_name(provider, csv_path)
    try:
        return await mdp.get_recent_candles(symbol, timeframe, limit=limit)
    except RuntimeError as e:
        print(f"[red]Provider error: {e}[/]")
        raise typer.Exit(code=1)
    finally:
        await mdp.close()

def _signal_table(sig: Signal) -> Table:
    table = Table(title=f"Rules ({sig.symbol})", show_lines=True)
    table.add_column("Rule"); table.add_column("Valid")
    for name, ok in sig.flags.items():
        table.add_row(_RULE_LABELS.get(name, name), "[green]yes[/]" if ok else "[red]no[/]")
    return table

# ============== EVALUATE ==============

@cli.command()
def evaluate(
    symbol: str = typer.Option(settings.default_symbol, help="Ex: BTCUSDT"),
    timeframe: str = typer.Option(settings.default_timeframe, help="Ex: 15min"),
    limit: int = typer.Option(200, help="Number of candles to load"),
    provider: str = typer.Option("mock", help="mock | csv"),
    csv_path: str = typer.Option("", help="CSV file for --provider csv"),
    json_out: bool = typer.Option(False, "--json", help="JSON output"),
    log_level: str = typer.Option(settings.log_level, help="DEBUG | INFO | WARNING"),
):
    """Evaluates the latest candles once and prints the signal with its rule flags."""
    setup_logging(log_level)
    candles = asyncio.run(_load(provider, csv_path, symbol, timeframe, limit))
    instrument = Instrument(symbol, timeframe, candles)
    strategy = TrendReversalStrategy(instrument, settings.strategy_config())
    sig = strategy.evaluate()

    if json_out:
        out = {
            "symbol": sig.symbol,
            "timeframe": timeframe,
            "type": sig.type,
            "pivot_bar": sig.pivot_bar,
            "indicators": sig.flags,
        }
        print(json.dumps(out, ensure_ascii=False, indent=2))
        return

    print(f"[bold cyan]Loaded {len(candles)} candles for {symbol} / {timeframe}[/]")
    print(_signal_table(sig))
    if sig.pivot_bar is None:
        print("[yellow]No pivot in the lookback window.[/]")
    else:
        print(f"Signal: [bold]{sig.type.upper()}[/]  |  pivot {sig.pivot_bar} bar(s) ago")

# ============== REPLAY ==============

@cli.command(name="replay")
def replay_cmd(
    symbol: str = typer.Option(settings.default_symbol, help="Ex: BTCUSDT"),
    timeframe: str = typer.Option(settings.default_timeframe, help="Ex: 15min"),
    limit: int = typer.Option(1000, help="Number of candles to replay"),
    provider: str = typer.Option("mock", help="mock | csv"),
    csv_path: str = typer.Option("", help="CSV file for --provider csv"),
    warmup: int = typer.Option(30, help="Bars skipped before the first cycle"),
    log_level: str = typer.Option("WARNING", help="DEBUG | INFO | WARNING"),
):
    """Replays the history cycle by cycle and lists the cycles that produced a signal."""
    setup_logging(log_level)
    candles = asyncio.run(_load(provider, csv_path, symbol, timeframe, limit))
    if len(candles) <= warmup:
        print(f"[red]Too few candles ({len(candles)}) for warmup={warmup}.[/]")
        raise typer.Exit(code=1)

    frame = replay(candles, symbol, timeframe, settings.strategy_config(), warmup=warmup)
    fired = frame[frame["pivot_found"] & (frame["type"] != "none")]

    table = Table(title=f"Signals ({symbol} / {timeframe})", show_lines=False)
    table.add_column("Time"); table.add_column("Close"); table.add_column("Type"); table.add_column("Pivot bar")
    for _, row in fired.iterrows():
        table.add_row(str(row["time"]), f"{row['close']:.5f}", row["type"], str(int(row["pivot_bar"])))
    print(table)

    print("[bold magenta]Summary[/]")
    for k, v in summarize(frame).items():
        print(f"{k}: {v}")


if __name__ == "__main__":
    cli()
