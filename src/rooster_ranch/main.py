"""CLI entrypoint for Rooster Ranch."""

from __future__ import annotations

import asyncio
from uuid import UUID

import typer
from rich import print

from rooster_ranch.adapters import (
    EchoGameCommandAdapter,
    GameCommandAdapter,
    MinescriptGameCommandAdapter,
    MinescriptUnavailableError,
)
from rooster_ranch.cli import (
    CommandResult,
    FarmCommandHandler,
    MarketCommandHandler,
    ProfessionCommandHandler,
)
from rooster_ranch.config import settings
from rooster_ranch.context import RanchContext, build_context
from rooster_ranch.models import TradeDirection
from rooster_ranch.telemetry import configure_logging

app = typer.Typer(help="Rooster Ranch farm, economy and market service")
market_app = typer.Typer(help="Buy from and sell to the market vendor")
app.add_typer(market_app, name="market")


def _build_game_adapter() -> GameCommandAdapter:
    if settings.game_adapter.lower() == "minescript":
        try:
            return MinescriptGameCommandAdapter(command_prefix=settings.minescript_command_prefix)
        except MinescriptUnavailableError as exc:
            print({"warning": str(exc), "fallback": "echo"})
    return EchoGameCommandAdapter()


def _load_context(online: list[str] | None = None) -> RanchContext:
    context = build_context(settings, _build_game_adapter())
    context.load()
    for entry in online or []:
        name, _, raw_id = entry.partition("=")
        try:
            owner = UUID(raw_id or name)
        except ValueError:
            raise typer.BadParameter(f"Expected name=uuid, got {entry!r}") from None
        context.hooks.on_account_join(owner, name if raw_id else None)
    return context


def _save(context: RanchContext) -> None:
    if not context.save():
        print({"warning": "some documents were not saved, see the log", "unreadable": sorted(context.unreadable)})


def _report(context: RanchContext, result: CommandResult, *, persist: bool = True) -> None:
    if persist and result.ok:
        _save(context)
    print(
        {
            "ok": result.ok,
            "failure": result.failure.value if result.failure else None,
            "messages": result.messages,
        }
    )
    if not result.ok:
        raise typer.Exit(code=1)


@app.callback()
def main(log_level: str = typer.Option(None, help="Override ROOSTER_RANCH_LOG_LEVEL")) -> None:
    configure_logging(log_level or settings.log_level)


@app.command()
def start() -> None:
    """Show runtime configuration."""
    print(
        {
            "app_name": settings.app_name,
            "data_dir": str(settings.data_dir),
            "schematics_dir": str(settings.schematics_dir),
            "farm_world": settings.farm_world,
            "market_world": settings.market_world,
            "game_adapter": settings.game_adapter,
            "island_spacing": settings.island_spacing,
            "protection_radius": settings.protection_radius,
        }
    )


@app.command()
def farm(
    actor: UUID = typer.Argument(..., help="UUID of the player running the command"),
    args: list[str] = typer.Argument(None, help="Subcommand and its arguments, e.g. 'trust Steve'"),
    online: list[str] = typer.Option([], "--online", help="Online player as name=uuid (repeatable)"),
) -> None:
    """Run a /farm subcommand."""
    context = _load_context(online)
    context.welcome(actor)
    _report(context, FarmCommandHandler(context).handle(actor, args or []))


@app.command()
def profession(
    actor: UUID = typer.Argument(..., help="UUID of the player choosing"),
    name: str = typer.Argument(None, help="Profession id or display name; omit to list choices"),
) -> None:
    """List professions or choose one (re-grants the starter kit)."""
    context = _load_context()
    handler = ProfessionCommandHandler(context)
    if name is None:
        _report(context, handler.menu(), persist=False)
        return
    _report(context, handler.choose(actor, name))


@market_app.command("list")
def market_list(direction: TradeDirection = typer.Option(None, help="buy or sell")) -> None:
    context = _load_context()
    _report(context, MarketCommandHandler(context).listings(direction), persist=False)


@market_app.command("buy")
def market_buy(actor: UUID, good: str) -> None:
    context = _load_context()
    _report(context, MarketCommandHandler(context).buy(actor, good))


@market_app.command("sell")
def market_sell(actor: UUID, good: str) -> None:
    context = _load_context()
    _report(context, MarketCommandHandler(context).sell(actor, good))


@app.command()
def balance(
    actor: UUID,
    deposit: float = typer.Option(None, help="Credit this many RC before reporting"),
) -> None:
    """Show (and optionally top up) an account's RC balance."""
    context = _load_context()
    if deposit is not None:
        context.ledger.deposit(actor, deposit)
        _save(context)
    print({"owner": str(actor), "balance": context.ledger.get_balance(actor)})


@app.command("tick-day")
def tick_day(days: int = typer.Option(1, min=1, help="How many days to advance")) -> None:
    """Advance farm degradation immediately."""
    context = _load_context()
    for _ in range(days):
        context.advance_day()
    _save(context)
    print({"days": days, "farms": len(context.farms)})


@app.command()
def serve(
    checkpoint_seconds: float = typer.Option(300.0, help="How often to save state while running"),
) -> None:
    """Run the day and display timers until interrupted, then save."""
    context = _load_context()
    context.prepare_market()
    scheduler = context.build_scheduler(
        day_interval_seconds=settings.day_interval_seconds,
        refresh_interval_seconds=settings.display_refresh_seconds,
    )

    async def _run() -> None:
        await scheduler.start()
        try:
            while True:
                await asyncio.sleep(checkpoint_seconds)
                context.checkpoint()
        finally:
            await scheduler.stop()

    print({"serving": settings.app_name, "farms": len(context.farms)})
    try:
        asyncio.run(_run())
    except KeyboardInterrupt:
        pass
    finally:
        context.save()
        print({"stopped": settings.app_name})


if __name__ == "__main__":
    app()
