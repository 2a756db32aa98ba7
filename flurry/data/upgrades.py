"""Upgrade definitions — boosts, global upgrades, Yeti Jr crew, and click multipliers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class TriggerDef:
    """One raw unlock condition, as written in the content tables.

    ``type`` selects which of the other fields are read:
      stat                      → stat, value
      assistant_group_owned     → group, value (sum across the group)
      assistant_id_owned        → assistant_id, value (0 means "at least one")
      assistant_group_complete  → group, value (every member)
      event                     → event, match, minimum
    """

    type: str = ""
    value: float = 0
    stat: str = ""
    group: str = ""
    assistant_id: str = ""
    event: str = ""
    match: tuple[tuple[str, Any], ...] = ()
    minimum: tuple[tuple[str, float], ...] = ()
    exists: bool = True


NO_TRIGGER = TriggerDef(exists=False)


@dataclass(frozen=True)
class EffectDef:
    """What an entry does once unlocked.

    ``target_ids`` only matters for the ``assistants`` target: "" means every
    assistant, "group:<name>" a whole group, anything else one assistant id.
    ``multiply_mode`` overrides the per-kind reading of ``multiply``.
    """

    target: str = "none"
    action: str = "none"
    value: float = 0.0
    target_ids: str = ""
    multiply_mode: str = ""


NO_EFFECT = EffectDef()


@dataclass(frozen=True)
class UpgradeDef:
    """Definition of a single purchasable upgrade."""

    id: str
    name: str
    description: str
    kind: str
    cost: float
    trigger1: TriggerDef
    effect: EffectDef
    order: int
    trigger2: TriggerDef = NO_TRIGGER
    join: str = ""


def stat(name: str, value: float) -> TriggerDef:
    return TriggerDef("stat", value=value, stat=name)


def group_owned(group: str, value: float) -> TriggerDef:
    return TriggerDef("assistant_group_owned", value=value, group=group)


def group_complete(group: str, value: float) -> TriggerDef:
    return TriggerDef("assistant_group_complete", value=value, group=group)


def assistant_owned(assistant_id: str, value: float = 0) -> TriggerDef:
    return TriggerDef("assistant_id_owned", value=value, assistant_id=assistant_id)


# ── Boosts (per-assistant, reset on jump) ────────────────────────
# Four tiers per assistant, unlocked at 10/20/30/40 owned.

_BOOST_TIERS: tuple[tuple[int, float], ...] = ((10, 0.25), (20, 0.5), (30, 0.75), (40, 1.0))

_BOOST_FAMILIES: tuple[tuple[str, str, tuple[tuple[str, str, float], ...]], ...] = (
    ("additionalArm", "Additional Arms", (
        ("quickDraw", "Quick Draw", 15), ("doubleTrouble", "Double Trouble", 40),
        ("rapidReflexes", "Rapid Reflexes", 80), ("snowstormStrikes", "Snowstorm Strikes", 200))),
    ("neighborKids", "Neighbor Kids", (
        ("slingshots", "Slingshots", 50), ("sugarRush", "Sugar Rush", 120),
        ("snowGoggles", "Snow Goggles", 320), ("iceBoots", "Ice Boots", 750))),
    ("ballMachine", "Ball Machine", (
        ("spinCalibration", "Spin Calibration", 120), ("rapidReload", "Rapid Reload", 350),
        ("targetingSensor", "Targeting Sensor", 800), ("dualLaunchers", "Dual Launchers", 2_000))),
    ("polarBearFamily", "Polar Bear Family", (
        ("bearClaws", "Bear Claws", 300), ("iceToss", "Ice Toss", 750),
        ("polarPrecision", "Polar Precision", 2_000), ("grizzlyBlitz", "Grizzly Blitz", 5_000))),
    ("snowBlower", "Snow Blower", (
        ("turboFan", "Turbo Fan", 1_500), ("heatedChute", "Heated Chute", 4_000),
        ("reverseJet", "Reverse Jet", 9_500), ("snowSurge", "Snow Surge", 25_000))),
    ("hockeyTeam", "Hockey Team", (
        ("coachingStaff", "Coaching Staff", 7_500), ("newSticks", "New Sticks", 20_000),
        ("puckLauncher", "Puck Launcher", 50_000), ("overtimeDrive", "Overtime Drive", 120_000))),
    ("iglooArsenal", "Igloo Arsenal", (
        ("iceTurrets", "Ice Turrets", 35_000), ("frostShields", "Frost Shields", 95_000),
        ("glacierAmmo", "Glacier Ammo", 240_000), ("snowShells", "Snow Shells", 600_000))),
    ("golfingRange", "Golfing Range", (
        ("pressureBoost", "Pressure Boost", 2e5), ("autoTargeting", "Auto Targeting", 5e5),
        ("quadBarrel", "Quad Barrel", 1.3e6), ("snowStream", "Snow Stream", 3.1e6))),
    ("snowstorm", "Snowstorm", (
        ("coldFront", "Cold Front", 9.5e5), ("jetstreamShift", "Jetstream Shift", 2.5e6),
        ("frozenCyclone", "Frozen Cyclone", 6.5e6), ("whiteout", "Whiteout", 1.55e7))),
    ("snowPrincess", "Snow Princess", (
        ("magicMittens", "Magic Mittens", 4.8e6), ("frozenFury", "Frozen Fury", 1.24e7),
        ("snowDance", "Snow Dance", 3.18e7), ("northernLights", "Northern Lights", 7.8e7))),
    ("winterFortress", "Winter Fortress", (
        ("icicleCannons", "Icicle Cannons", 2.38e7), ("arcticGuard", "Arctic Guard", 6.17e7),
        ("blizzardBunker", "Blizzard Bunker", 1.6e8), ("permafrostCore", "Permafrost Core", 3.9e8))),
    ("wizardBlizzard", "Wizard Blizzard", (
        ("enchantedGloves", "Enchanted Gloves", 1.2e8), ("tomeofTundra", "Tome of Tundra", 3.1e8),
        ("blizzardRing", "Blizzard Ring", 7.95e8), ("frostNova", "Frost Nova", 1.95e9))),
    ("avalanche", "Avalanche", (
        ("landslideProtocol", "Landslide Protocol", 6.2e8), ("echoWave", "Echo Wave", 1.6e9),
        ("slideSurge", "Slide Surge", 3.5e9), ("cliffCrash", "Cliff Crash", 5.7e9))),
    ("snowHurricane", "Snow Hurricane", (
        ("eyeoftheStorm", "Eye of the Storm", 3.1e9), ("polarVortex", "Polar Vortex", 7.8e9),
        ("cycloneEcho", "Cyclone Echo", 1.8e10), ("winterWall", "Winter Wall", 2.8e10))),
    ("iceDragon", "Ice Dragon", (
        ("moltenCore", "Molten Core", 1.6e10), ("frostbiteRoar", "Frostbite Roar", 3.9e10),
        ("cryoHowl", "Cryo Howl", 8.8e10), ("dragonGale", "Dragon Gale", 1.4e11))),
    ("frostGiant", "Frost Giant", (
        ("frozenFootsteps", "Frozen Footsteps", 7.5e10), ("glacierGauntlets", "Glacier Gauntlets", 1.9e11),
        ("frozenRoar", "Frozen Roar", 4.2e11), ("arcticSmash", "Arctic Smash", 6.8e11))),
    ("orbitalSnowCannon", "Orbital Snow Cannon", (
        ("satNavLock", "Sat-Nav Lock", 3.8e11), ("cryoPayload", "Cryo Payload", 9.4e11),
        ("orbitalSpin", "Orbital Spin", 2.1e12), ("stratosnow", "Stratosnow", 3.4e12))),
    ("templeofWinter", "Temple of Winter", (
        ("monasticDiscipline", "Monastic Discipline", 2e12), ("frozenZen", "Frozen Zen", 5e12),
        ("chapelChill", "Chapel Chill", 1.1e13), ("icicleChant", "Icicle Chant", 1.8e13))),
    ("cryoCore", "Cryo Core", (
        ("coolantOverclock", "Coolant Overclock", 1e13), ("quantumFrost", "Quantum Frost", 2.5e13),
        ("nanoIce", "Nano Ice", 5.6e13), ("cryoSync", "Cryo Sync", 9.1e13))),
    ("snowSingularity", "Snow Singularity", (
        ("infiniteFeedback", "Infinite Feedback", 5e13), ("eventHorizon", "Event Horizon", 1.2e14),
        ("feedbackLoop", "Feedback Loop", 2.8e14), ("frozenDimension", "Frozen Dimension", 4.6e14))),
)


def _boosts() -> list[UpgradeDef]:
    boosts: list[UpgradeDef] = []
    order = 100
    for assistant_id, label, tiers in _BOOST_FAMILIES:
        for (uid, name, cost), (owned, value) in zip(tiers, _BOOST_TIERS):
            boosts.append(UpgradeDef(
                id=uid,
                name=name,
                description=f"{name} multiplies {label} snowball production by {1 + value:.2f}x.",
                kind="boost",
                cost=cost,
                trigger1=assistant_owned(assistant_id, owned),
                effect=EffectDef("assistants", "multiply", value, target_ids=assistant_id),
                order=order,
            ))
            order += 1
    return boosts


BOOSTS: list[UpgradeDef] = _boosts()

# ── Global upgrades (persist across jumps) ───────────────────────
# Boost-tuning upgrades sit ahead of the boosts so they scale them.

BOOST_EFFICIENCY = UpgradeDef(
    id="boostEfficiency",
    name="Boost Efficiency",
    description="Your boosts are more effective.",
    kind="global",
    cost=500_000,
    trigger1=stat("boosts_purchased", 10),
    effect=EffectDef("boost_effectiveness", "multiply", 0.1),
    order=10,
)

BOOST_MASTERY = UpgradeDef(
    id="boostMastery",
    name="Boost Mastery",
    description="You've mastered the art of boost optimization.",
    kind="global",
    cost=2_500_000,
    trigger1=stat("boosts_purchased", 25),
    effect=EffectDef("boost_effectiveness", "multiply", 0.1),
    order=11,
)

COST_OPTIMIZATION = UpgradeDef(
    id="costOptimization",
    name="Cost Optimization",
    description="Boost costs are reduced through efficient purchasing.",
    kind="global",
    cost=1_000_000,
    trigger1=stat("boosts_purchased", 15),
    effect=EffectDef("boost_cost_reduction", "add", 0.15),
    order=12,
)

GLOBAL_UPGRADES: list[UpgradeDef] = [
    BOOST_EFFICIENCY,
    BOOST_MASTERY,
    COST_OPTIMIZATION,
    UpgradeDef("teamSpirit", "Team Spirit", "Your assistants work better together.",
               "global", 100, stat("assistants_owned", 10),
               EffectDef("sps", "multiply", 0.1), order=200),
    UpgradeDef("assemblyLine", "Assembly Line", "Streamlined assistant production reduces costs.",
               "global", 500, stat("assistants_owned", 20),
               EffectDef("assistant_cost_reduction", "add", 0.1), order=201),
    UpgradeDef("animalTraining", "Animal Training", "Your human and animal assistants become more efficient.",
               "global", 2_500, group_owned("animals", 5),
               EffectDef("assistants", "multiply", 0.1, target_ids="group:animals"), order=202),
    UpgradeDef("machineMaintenance", "Machine Maintenance", "Your mechanical assistants operate at peak efficiency.",
               "global", 5_000, group_owned("machines", 5),
               EffectDef("assistants", "multiply", 0.1, target_ids="group:machines"), order=203),
    UpgradeDef("snowballMastery", "Snowball Mastery", "You've learned to pack snowballs more effectively.",
               "global", 10_000, stat("lifetime_snowballs", 100_000),
               EffectDef("click_power", "multiply", 2), order=204),
    UpgradeDef("massProduction", "Mass Production", "Industrial-scale snowball production methods.",
               "global", 100_000, stat("lifetime_snowballs", 1_000_000),
               EffectDef("sps", "multiply", 0.1), order=205),
    UpgradeDef("callousedFingers", "Calloused Fingers", "Your fingers have toughened from constant clicking.",
               "global", 500, stat("total_clicks", 1_000),
               EffectDef("click_power", "multiply", 2), order=206),
    UpgradeDef("clickReflexes", "Click Reflexes", "Lightning-fast clicking reflexes.",
               "global", 2_500, stat("total_clicks", 5_000),
               EffectDef("click_power", "multiply", 2), order=207),
    UpgradeDef("industrialRevolution", "Industrial Revolution", "Mass-produced assistants cost less.",
               "global", 1e6, stat("assistants_owned", 50),
               EffectDef("assistant_cost_reduction", "add", 0.1), order=208),
    UpgradeDef("magicalResonance", "Magical Resonance", "Your magical beings amplify one another.",
               "global", 50_000, group_owned("magicalBeings", 5),
               EffectDef("assistants", "multiply", 0.5, target_ids="group:magicalBeings"), order=209),
    UpgradeDef("sportsDynasty", "Sports Dynasty", "Your sports teams dominate the league.",
               "global", 25_000, group_owned("sports", 5),
               EffectDef("assistants", "multiply", 0.5, target_ids="group:sports"), order=210),
    UpgradeDef("architecturalMarvels", "Architectural Marvels", "Your buildings become wonders of the world.",
               "global", 75_000, group_owned("buildings", 5),
               EffectDef("assistants", "multiply", 0.5, target_ids="group:buildings"), order=211),
    UpgradeDef("snowballEmpire", "Snowball Empire", "Your snowball production spans the land.",
               "global", 1e7, stat("lifetime_snowballs", 1e8),
               EffectDef("sps", "multiply", 0.1), order=212),
    UpgradeDef("infiniteSnow", "Infinite Snow", "The snow never stops falling.",
               "global", 1e8, stat("lifetime_snowballs", 1e10),
               EffectDef("sps", "multiply", 0.1), order=213),
    UpgradeDef("experience", "Experience", "An hour of practice pays off.",
               "global", 100_000, stat("time_played_seconds", 3_600),
               EffectDef("sps", "multiply", 0.1), order=214),
    UpgradeDef("veteranStatus", "Veteran Status", "Ten hours in, you know every trick.",
               "global", 1e6, stat("time_played_seconds", 36_000),
               EffectDef("sps", "multiply", 0.1), order=215),
    UpgradeDef("supremeCommander", "Supreme Commander", "An army of assistants negotiates bulk rates.",
               "global", 1e9, stat("assistants_owned", 150),
               EffectDef("assistant_cost_reduction", "add", 0.3), order=216),
    UpgradeDef("mythicalBond", "Mythical Bond", "Your mythical beasts fight as one.",
               "global", 5e8, group_owned("mythicalBeasts", 5),
               EffectDef("assistants", "multiply", 3, target_ids="group:mythicalBeasts"), order=217),
    UpgradeDef("naturesWrath", "Nature's Wrath", "Mother Nature unleashes her full fury.",
               "global", 7.5e8, group_owned("motherNature", 5),
               EffectDef("assistants", "multiply", 3, target_ids="group:motherNature"), order=218),
    UpgradeDef("spaceProgram", "Space Program", "Your orbital assets reach full capacity.",
               "global", 1e9, group_owned("space", 5),
               EffectDef("assistants", "multiply", 3, target_ids="group:space"), order=219),
    UpgradeDef("snowballSingularity", "Snowball Singularity", "Snowballs collapse into more snowballs.",
               "global", 1e10, stat("lifetime_snowballs", 1e12),
               EffectDef("sps", "multiply", 6), order=220),
    UpgradeDef("cosmicSnow", "Cosmic Snow", "Snow falls from between the stars.",
               "global", 1e11, stat("lifetime_snowballs", 1e15),
               EffectDef("sps", "multiply", 11), order=221),
    UpgradeDef("yetiHunter", "Yeti Hunter", "A hundred yetis taught you their throw.",
               "global", 5e7, stat("yetis_clicked", 100),
               EffectDef("click_power", "multiply", 2), order=222),
    UpgradeDef("yetiMaster", "Yeti Master", "Every class of yeti has crossed your path.",
               "global", 5e8, stat("yeti_classes_clicked", 4),
               EffectDef("click_power", "multiply", 3), order=223),
    UpgradeDef("explorer", "Explorer", "Ten journeys broaden your supply lines.",
               "global", 1e7, stat("locations_traveled", 10),
               EffectDef("sps", "multiply", 1.5, multiply_mode="direct"), order=224),
    UpgradeDef("worldTraveler", "World Traveler", "You have seen every kind of place.",
               "global", 1e8, stat("location_classes_visited", 4),
               EffectDef("sps", "multiply", 2, multiply_mode="direct"), order=225),
    UpgradeDef("battleHardened", "Battle Hardened", "Fifty victories sharpen your crew.",
               "global", 5e7, stat("battles_won", 50),
               EffectDef("sps", "multiply", 1.75, multiply_mode="direct"), order=226),
    UpgradeDef("mechDestroyer", "Mech Destroyer", "No mech yeti class still stands.",
               "global", 5e8, stat("mech_yeti_classes_defeated", 4),
               EffectDef("sps", "multiply", 2.5, multiply_mode="direct"), order=227),
    UpgradeDef("icicleFarmer", "Icicle Farmer", "You've mastered the art of icicle harvesting.",
               "global", 2.5e7, stat("icicles_harvested", 1_000),
               EffectDef("icicle_rate", "multiply", 1.5, multiply_mode="direct"), order=228),
    UpgradeDef("icicleMaster", "Icicle Master", "You're the undisputed master of icicle collection.",
               "global", 2.5e8, stat("icicles_harvested", 10_000),
               EffectDef("icicle_rate", "multiply", 2, multiply_mode="direct"), order=229),
    UpgradeDef("animalKingdom", "Animal Kingdom", "You have a complete collection of animal assistants.",
               "global", 1e6, group_complete("animals", 5),
               EffectDef("assistants", "multiply", 1.5, target_ids="group:animals"), order=230),
    UpgradeDef("machineEmpire", "Machine Empire", "You have a complete collection of mechanical assistants.",
               "global", 5e6, group_complete("machines", 5),
               EffectDef("assistants", "multiply", 1.5, target_ids="group:machines"), order=231),
    UpgradeDef("magicalAcademy", "Magical Academy", "You have a complete collection of magical beings.",
               "global", 1e7, group_complete("magicalBeings", 5),
               EffectDef("assistants", "multiply", 1.5, target_ids="group:magicalBeings"), order=232),
]

# ── Yeti Jr crew (persist across jumps) ──────────────────────────

YETI_JR: list[UpgradeDef] = [
    UpgradeDef(
        id=f"yetiJr{n}",
        name="Yeti Crew Recruit",
        description="Another yeti crew member arrives and adds 1% to your snowballs per second.",
        kind="yetiJr",
        cost=10.0 ** (n - 2),
        trigger1=stat("lifetime_snowballs", 10.0 ** n),
        effect=EffectDef("sps", "multiply", 0.01),
        order=300 + n,
    )
    for n in range(6, 31)
] + [
    UpgradeDef(f"yetiJr{31 + i}", "Yeti Crew Member",
               "A seasoned crew member adds 5% to your snowballs per second.",
               "yetiJr", 3 * 10.0 ** (8 + 5 * i), stat("lifetime_snowballs", 10.0 ** (10 + 5 * i)),
               EffectDef("sps", "multiply", 0.05), order=331 + i)
    for i in range(5)
] + [
    UpgradeDef(f"yetiJr{36 + i}", "Yeti Crew Expert",
               "A crew expert adds 10% to your snowballs per second.",
               "yetiJr", 7 * 10.0 ** (7 + 9 * i), stat("lifetime_snowballs", 10.0 ** (9 + 9 * i)),
               EffectDef("sps", "multiply", 0.1), order=336 + i)
    for i in range(3)
] + [
    UpgradeDef(f"yetiJr{39 + i}", "Yeti Crew Elite",
               "An elite crew member adds 25% to your snowballs per second.",
               "yetiJr", 10.0 ** (11 + 12 * i), stat("lifetime_snowballs", 10.0 ** (13 + 12 * i)),
               EffectDef("sps", "multiply", 0.25), order=339 + i)
    for i in range(2)
]

# ── Click multipliers (reset on jump) ────────────────────────────
# clickMult n multiplies click power by 2**n + 1.

CLICK_MULTIPLIERS: list[UpgradeDef] = [
    UpgradeDef(
        id=f"clickMult{n}",
        name="Tip of the Iceberg",
        description=f"Each click reveals hidden power beneath the surface: click power x{2 ** n + 1:.1f}.",
        kind="clickMultiplier",
        cost=9 * 10.0 ** (n + 1),
        trigger1=stat("lifetime_snowballs", 10.0 ** (n + 3)),
        effect=EffectDef("click_power", "multiply", float(2 ** n)),
        order=400 + n,
    )
    for n in range(1, 11)
]

# ── Legacy globals (multiply reads as a direct factor) ───────────

LEGACY_UPGRADES: list[UpgradeDef] = [
    UpgradeDef("coloredSnowballs", "Colored Snowballs", "Doubles your snowballs per second.",
               "legacy", 10, stat("assistants_owned", 5),
               EffectDef("sps", "multiply", 2), order=500),
    UpgradeDef("coldFusionCores", "Cold Fusion Cores", "Doubles your snowballs per second.",
               "legacy", 10, stat("assistants_owned", 10),
               EffectDef("sps", "multiply", 2), order=501),
    UpgradeDef("perfectPacking", "Perfect Packing", "Doubles your snowballs per second.",
               "legacy", 10, stat("lifetime_snowballs", 1_000),
               EffectDef("sps", "multiply", 2), order=502),
    UpgradeDef("test", "test", "test of join",
               "legacy", 10, stat("assistants_owned", 5),
               EffectDef("snowballs", "grant_once", 1_000_000), order=503,
               trigger2=stat("lifetime_snowballs", 10_000), join="and"),
    UpgradeDef("animalBehavior", "Animal Behavior", "Triples the SPS of all two and four legged animals!",
               "legacy", 1_000, stat("assistants_owned", 25),
               EffectDef("assistants", "multiply", 3, target_ids="group:animals"), order=504),
    UpgradeDef("animalBehavior2", "Animal Behavior 2", "Doubles the SPS of all two and four legged animals!",
               "legacy", 1_000, assistant_owned("additionalArm"),
               EffectDef("assistants", "multiply", 2, target_ids="group:animals"), order=505,
               trigger2=assistant_owned("neighborKids"), join="AND"),
]

# ── All upgrades registry ────────────────────────────────────────

UPGRADES: list[UpgradeDef] = [*BOOSTS, *GLOBAL_UPGRADES, *YETI_JR, *CLICK_MULTIPLIERS, *LEGACY_UPGRADES]

ALL_UPGRADES: dict[str, UpgradeDef] = {u.id: u for u in UPGRADES}
