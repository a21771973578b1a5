"""
Display helpers for luck statistics.
"""

from league_luck.models.luck import LuckClassification, ScheduleClassification

LUCK_DESCRIPTIONS: dict[LuckClassification, str] = {
    LuckClassification.VERY_LUCKY: "Very Lucky",
    LuckClassification.LUCKY: "Lucky",
    LuckClassification.NEUTRAL: "About Average",
    LuckClassification.UNLUCKY: "Unlucky",
    LuckClassification.VERY_UNLUCKY: "Very Unlucky",
}


def format_luck_index(luck_index: float) -> str:
    """Signed luck index with one decimal, e.g. +2.3 or -1.5."""
    return f"{luck_index:+.1f}"


def classify_luck(luck_index: float) -> LuckClassification:
    """Bucket a luck index: +2 or more is very lucky, -2 or less very unlucky."""
    if luck_index >= 2:
        return LuckClassification.VERY_LUCKY
    if luck_index >= 0.5:
        return LuckClassification.LUCKY
    if luck_index > -0.5:
        return LuckClassification.NEUTRAL
    if luck_index > -2:
        return LuckClassification.UNLUCKY
    return LuckClassification.VERY_UNLUCKY


def luck_description(classification: LuckClassification) -> str:
    """Human-readable label for a luck classification."""
    return LUCK_DESCRIPTIONS[classification]


def format_schedule_strength(strength: float) -> str:
    """Schedule strength as a whole percentage, e.g. 54%."""
    return f"{strength * 100:.0f}%"


def classify_schedule(strength: float) -> ScheduleClassification:
    """Bucket schedule strength around .500, from very easy to very hard."""
    if strength >= 0.55:
        return ScheduleClassification.VERY_HARD
    if strength >= 0.52:
        return ScheduleClassification.HARD
    if strength >= 0.48:
        return ScheduleClassification.AVERAGE
    if strength >= 0.45:
        return ScheduleClassification.EASY
    return ScheduleClassification.VERY_EASY


def format_win_percentage(win_pct: float) -> str:
    """Baseball-style win percentage, e.g. .714 (1.000 stays as is)."""
    formatted = f"{win_pct:.3f}"
    return formatted[1:] if formatted.startswith("0") else formatted
