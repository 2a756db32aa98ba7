"""Achievement definitions — threshold (level-sensitive) and event (edge-sensitive)."""

from __future__ import annotations

from dataclasses import dataclass

from flurry.data.upgrades import NO_EFFECT, NO_TRIGGER, EffectDef, TriggerDef, stat


@dataclass(frozen=True)
class AchievementDef:
    """Definition of a single achievement. Achievements are never purchased."""

    id: str
    name: str
    description: str
    category: str
    kind: str   # "achievementThreshold" | "achievementEvent"
    trigger1: TriggerDef
    order: int
    effect: EffectDef = NO_EFFECT
    trigger2: TriggerDef = NO_TRIGGER
    join: str = ""


# ── Threshold tables: category → (stat, description template, tiers) ──

_THRESHOLDS: tuple[tuple[str, str, str, tuple[tuple[str, str, float], ...]], ...] = (
    ("clicks", "effective_clicks", "Generate {v:,.0f} snowballs from clicks.", (
        ("clicks_100", "First Flakes", 100), ("clicks_1k", "Click Master", 1_000),
        ("clicks_10k", "Click Legend", 10_000), ("clicks_100k", "Click God", 100_000),
        ("clicks_1m", "Click Deity", 1_000_000))),
    ("economy", "lifetime_snowballs", "Earn {v:,.0f} snowballs in total.", (
        ("snowballs_10k", "Snowball Collector", 1e4), ("snowballs_1m", "Snowball Tycoon", 1e6),
        ("snowballs_100m", "Snowball Empire", 1e8), ("snowballs_1b", "Snowball Billionaire", 1e9),
        ("snowballs_1t", "Snowball Trillionaire", 1e12))),
    ("assistants", "assistants_owned", "Own {v:,.0f} assistants.", (
        ("assistants_10", "Team Builder", 10), ("assistants_50", "Frosty Workforce", 50),
        ("assistants_100", "Snowball Army", 100), ("assistants_500", "Frost Legion", 500),
        ("assistants_1k", "Snowball Dynasty", 1_000))),
    ("upgrades", "upgrades_purchased", "Purchase {v:,.0f} upgrades.", (
        ("upgrades_10", "Upgrade Enthusiast", 10), ("upgrades_50", "Upgrade Master", 50),
        ("upgrades_100", "Upgrade Legend", 100), ("upgrades_250", "Upgrade Sage", 250),
        ("upgrades_500", "Upgrade Deity", 500))),
    ("jumps", "jumps_completed", "Complete {v:,.0f} jumps.", (
        ("jumps_1", "First Jump", 1), ("jumps_5", "Dimensional Traveler", 5),
        ("jumps_10", "Reality Hopper", 10), ("jumps_25", "Dimension Master", 25),
        ("jumps_50", "Reality Architect", 50))),
    ("time", "time_played_seconds", "Play for {v:,.0f} seconds.", (
        ("time_1hr", "Dedicated Player", 3_600), ("time_5hr", "Snowball Veteran", 18_000),
        ("time_24hr", "Snowball Master", 86_400), ("time_100hr", "Snowball Sage", 360_000),
        ("time_1000hr", "Snowball Immortal", 3_600_000))),
    ("streaks", "highest_streak_tier", "Reach click streak tier {v:,.0f}.", (
        ("click_streak_tier_1", "Quick Fingers", 1), ("click_streak_tier_2", "Rapid Fire", 2),
        ("click_streak_tier_3", "Lightning Clicks", 3), ("click_streak_tier_4", "Thunder Hands", 4),
        ("click_streak_tier_5", "Storm Master", 5), ("click_streak_tier_6", "Click God", 6))),
    ("abilities", "ability_belt_level", "Reach ability belt level {v:,.0f}.", (
        ("ability_belt_1", "Ability Belt Initiate", 1), ("ability_belt_5", "Ability Belt Apprentice", 5),
        ("ability_belt_10", "Ability Belt Adept", 10), ("ability_belt_25", "Ability Belt Master", 25),
        ("ability_belt_50", "Ability Belt Grandmaster", 50), ("ability_belt_100", "Ability Belt Legend", 100))),
    ("yetis", "yetis_spotted", "Spot {v:,.0f} yetis.", (
        ("yetis_1", "Yeti Spotter", 1), ("yetis_10", "Yeti Tracker", 10),
        ("yetis_50", "Yeti Hunter", 50), ("yetis_100", "Yeti Master", 100))),
    ("locations", "locations_unlocked", "Visit {v:,.0f} locations.", (
        ("locations_1", "Explorer", 1), ("locations_5", "World Explorer", 5),
        ("locations_all", "World Master", 8), ("locations_10", "Globe Trotter", 10))),
    ("locations", "travel_count", "Travel {v:,.0f} times.", (
        ("travel_100", "Frequent Traveler", 100),)),
    ("icicles", "icicles_harvested", "Harvest {v:,.0f} icicles.", (
        ("icicles_1", "Icicle Harvester", 1), ("icicles_10", "Icicle Collector", 10),
        ("icicles_100", "Icicle Master", 100), ("icicles_1000", "Icicle Sage", 1_000))),
    ("battles", "battles_won", "Win {v:,.0f} battles.", (
        ("battles_1", "First Battle", 1), ("battles_10", "Battle Veteran", 10),
        ("battles_50", "Battle Master", 50), ("battles_100", "Battle Legend", 100))),
    ("battles", "battle_streak", "Win {v:,.0f} battles in a row.", (
        ("battle_streak_5", "Victory Streak", 5),)),
    ("sps", "sps", "Reach {v:,.0f} snowballs per second.", (
        ("snowball_mist", "Snowball Mist", 10), ("snowball_flurry", "Snowball Flurry", 100),
        ("snowball_rain", "Snowball Rain", 1_000), ("snowball_storm", "Snowball Storm", 10_000),
        ("snowball_hurricane", "Snowball Hurricane", 100_000))),
    ("crystalSnowballs", "crystal_snowballs_collected", "Collect {v:,.0f} crystal snowballs.", (
        ("crystal_snowballs_1", "Crystal Collector", 1), ("crystal_snowballs_10", "Crystal Enthusiast", 10),
        ("crystal_snowballs_100", "Crystal Master", 100), ("crystal_snowballs_1000", "Crystal Sage", 1_000),
        ("crystal_snowballs_10000", "Crystal Deity", 10_000))),
    ("snowflakes", "snowflakes_found", "Find {v:,.0f} snowflakes.", (
        ("snowflakes_1", "Snowflake Finder", 1), ("snowflakes_10", "Snowflake Collector", 10),
        ("snowflakes_100", "Snowflake Master", 100), ("snowflakes_1000", "Snowflake Sage", 1_000),
        ("snowflakes_10000", "Snowflake Deity", 10_000))),
    ("snowflakeTree", "snowflake_tree_purchases", "Buy {v:,.0f} snowflake tree upgrades.", (
        ("snowflake_tree_1", "Tree Planter", 1), ("snowflake_tree_5", "Tree Gardener", 5),
        ("snowflake_tree_10", "Tree Master", 10), ("snowflake_tree_25", "Tree Sage", 25),
        ("snowflake_tree_50", "Tree Deity", 50))),
    ("babyYeti", "baby_yeti_owned", "Own {v:,.0f} Baby Yetis.", (
        ("baby_yeti_1", "Baby Yeti Parent", 1), ("baby_yeti_5", "Baby Yeti Family", 5),
        ("baby_yeti_10", "Baby Yeti Herd", 10), ("baby_yeti_25", "Baby Yeti Colony", 25),
        ("baby_yeti_50", "Baby Yeti Empire", 50))),
)


def _threshold_achievements() -> list[AchievementDef]:
    out: list[AchievementDef] = []
    order = 1000
    for category, stat_name, template, tiers in _THRESHOLDS:
        for aid, name, value in tiers:
            out.append(AchievementDef(
                id=aid,
                name=name,
                description=template.format(v=value),
                category=category,
                kind="achievementThreshold",
                trigger1=stat(stat_name, value),
                order=order,
            ))
            order += 1
    return out


THRESHOLD_ACHIEVEMENTS: list[AchievementDef] = _threshold_achievements()

# ── Event achievements (fire once when the event is seen) ────────

EVENT_ACHIEVEMENTS: list[AchievementDef] = [
    AchievementDef(
        id="yeti_rare_1",
        name="Rare Yeti Finder",
        description="Find a rare yeti variant.",
        category="yetis",
        kind="achievementEvent",
        trigger1=TriggerDef("event", event="rareYetiFound", match=(("variant", "any"),)),
        order=2000,
    ),
    AchievementDef(
        id="icicle_level_1",
        name="Level Up",
        description="Spend icicles to level up an assistant.",
        category="icicles",
        kind="achievementEvent",
        trigger1=TriggerDef("event", event="icicleLevelUp", match=(("level", 1),)),
        order=2001,
    ),
    AchievementDef(
        id="first_prestige",
        name="Leap of Faith",
        description="Complete your first jump.",
        category="jumps",
        kind="achievementEvent",
        trigger1=TriggerDef("event", event="firstPrestige", match=(("jump", 1),)),
        order=2002,
    ),
    AchievementDef(
        id="speed_clicker",
        name="Speed Clicker",
        description="Click 10 times per second for 5 seconds.",
        category="clicks",
        kind="achievementEvent",
        trigger1=TriggerDef("event", event="speedClicker", minimum=(("cps", 10), ("duration", 5))),
        order=2003,
    ),
]

# ── All achievements registry ────────────────────────────────────

ACHIEVEMENTS: list[AchievementDef] = [*THRESHOLD_ACHIEVEMENTS, *EVENT_ACHIEVEMENTS]

ALL_ACHIEVEMENTS: dict[str, AchievementDef] = {a.id: a for a in ACHIEVEMENTS}
