"""Economy helpers — raw production baseline and cost calculations."""

from __future__ import annotations

from flurry.data.balance import BALANCE, EngineBalance
from flurry.engine.catalog import Catalog, CatalogEntry, EntryKind
from flurry.engine.effects import DerivedStats, StatAccumulator
from flurry.engine.game_state import GameSnapshot
from flurry.engine.unlocks import UnlockTracker


def production_baseline(catalog: Catalog, snapshot: GameSnapshot, balance: EngineBalance = BALANCE.engine) -> StatAccumulator:
    """Starting point of a recompute pass: owned × base SPS per assistant."""
    production = {
        aid: adef.base_sps * snapshot.owned(aid)
        for aid, adef in catalog.assistants.items()
    }
    return StatAccumulator.from_baseline(production, balance)


def assistant_cost(catalog: Catalog, assistant_id: str, owned: int, stats: DerivedStats | None = None) -> float:
    """Price of the next unit of an assistant."""
    adef = catalog.assistants[assistant_id]
    cost = adef.base_cost * (adef.cost_rate ** owned)
    if stats is not None:
        cost *= 1.0 - stats.assistant_cost_reduction
    return cost


def upgrade_cost(entry: CatalogEntry, stats: DerivedStats | None = None) -> float:
    """Price of an upgrade; boosts are discounted by boost cost reduction."""
    cost = entry.cost
    if stats is not None and entry.kind is EntryKind.BOOST:
        cost *= 1.0 - stats.boost_cost_reduction
    return cost


def available_upgrades(catalog: Catalog, tracker: UnlockTracker) -> list[CatalogEntry]:
    """Unlocked upgrades (not achievements) in catalog order.

    Purchased entries are included; the game loop tracks purchases and
    filters them out for the shop.
    """
    return [
        entry for entry in catalog
        if not entry.is_achievement and tracker.is_unlocked(entry.id)
    ]
