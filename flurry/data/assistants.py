"""Assistant definitions — passive producers and their group partition."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class AssistantDef:
    """A passive snowball producer the player owns in integer quantity."""

    id: str
    name: str
    description: str
    base_cost: float
    cost_rate: float   # price multiplier per unit already owned
    base_sps: float    # snowballs per second per unit, before multipliers
    group: str         # exactly one group per assistant


ALL_ASSISTANTS: dict[str, AssistantDef] = {
    a.id: a
    for a in [
        AssistantDef("additionalArm", "Additional Arm", "An extra limb just for throwing snowballs!",
                     5, 1.07, 1, "animals"),
        AssistantDef("neighborKids", "Neighbor Kids", "The local kids lend a hand, and an arm!",
                     20, 1.08, 2, "animals"),
        AssistantDef("ballMachine", "Ball Machine", "Like a baseball machine, but snowier.",
                     50, 1.09, 5, "machines"),
        AssistantDef("polarBearFamily", "Polar Bear Family", "Surprisingly cooperative and very fluffy.",
                     120, 1.10, 12, "animals"),
        AssistantDef("snowBlower", "Snow Blower", "Loud, fast, and relentless.",
                     600, 1.115, 60, "machines"),
        AssistantDef("hockeyTeam", "Hockey Team", "Slapshot after slapshot!",
                     3_000, 1.12, 300, "sports"),
        AssistantDef("iglooArsenal", "Igloo Arsenal", "Defended by walls of frozen ammo.",
                     15_000, 1.13, 1_500, "buildings"),
        AssistantDef("golfingRange", "Golfing Range", "FORE!! Be careful of the slice.",
                     80_000, 1.14, 8_000, "sports"),
        AssistantDef("snowstorm", "Snowstorm", "Nature joins the fight.",
                     400_000, 1.145, 40_000, "motherNature"),
        AssistantDef("snowPrincess", "Snow Princess", "A regal force of frozen magic.",
                     2e6, 1.15, 2e5, "magicalBeings"),
        AssistantDef("winterFortress", "Winter Fortress", "Towers, turrets, and terror.",
                     1e7, 1.155, 1e6, "buildings"),
        AssistantDef("wizardBlizzard", "Wizard Blizzard", "Spells with serious snow output.",
                     5e7, 1.16, 5e6, "magicalBeings"),
        AssistantDef("avalanche", "Avalanche", "Nothing stands in its way.",
                     2.5e8, 1.165, 2.5e7, "motherNature"),
        AssistantDef("snowHurricane", "Snow Hurricane", "Spins and slings snowballs nonstop.",
                     1.25e9, 1.17, 1.25e8, "motherNature"),
        AssistantDef("iceDragon", "Ice Dragon", "Ancient, mighty, and very cold.",
                     6.25e9, 1.175, 6.25e8, "mythicalBeasts"),
        AssistantDef("frostGiant", "Frost Giant", "Every step crushes snow into ammo.",
                     3e10, 1.18, 3e9, "mythicalBeasts"),
        AssistantDef("orbitalSnowCannon", "Orbital Snow Cannon", "Space snow superiority.",
                     1.5e11, 1.185, 1.5e10, "space"),
        AssistantDef("templeofWinter", "Temple of Winter", "Spiritual snowball power.",
                     8e11, 1.19, 8e10, "buildings"),
        AssistantDef("cryoCore", "Cryo Core", "A cold engine of destruction.",
                     4e12, 1.195, 4e11, "space"),
        AssistantDef("snowSingularity", "Snow Singularity", "Pulls snow from the Universe.",
                     2e13, 1.20, 2e12, "space"),
    ]
}


def build_groups(assistants: dict[str, AssistantDef]) -> dict[str, tuple[str, ...]]:
    """Partition assistant ids by group, keeping table order inside each group."""
    groups: dict[str, list[str]] = {}
    for aid, adef in assistants.items():
        groups.setdefault(adef.group, []).append(aid)
    return {name: tuple(ids) for name, ids in groups.items()}


GROUPS: dict[str, tuple[str, ...]] = build_groups(ALL_ASSISTANTS)
