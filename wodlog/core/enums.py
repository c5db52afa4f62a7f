"""Shared enums for models and API."""

from enum import Enum


class MovementType(str, Enum):
    """Category of a movement."""

    WEIGHTLIFTING = "weightlifting"
    BODYWEIGHT = "bodyweight"
    GYMNASTICS = "gymnastics"
    CARDIO = "cardio"


class ScoreType(str, Enum):
    """Which single measurement scores a WOD."""

    TIME = "Time (HH:MM:SS)"
    ROUNDS_REPS = "Rounds+Reps"
    MAX_WEIGHT = "Max Weight"


class WODSource(str, Enum):
    CROSSFIT = "CrossFit"
    OTHER_COACH = "Other Coach"
    SELF_RECORDED = "Self-recorded"


class WODType(str, Enum):
    BENCHMARK = "Benchmark"
    HERO = "Hero"
    GIRL = "Girl"
    NOTABLES = "Notables"
    GAMES = "Games"
    ENDURANCE = "Endurance"
    SELF_CREATED = "Self-created"


class WODRegime(str, Enum):
    """Scoring regimen (how the WOD is run)."""

    EMOM = "EMOM"
    AMRAP = "AMRAP"
    FASTEST_TIME = "Fastest Time"
    SLOWEST_ROUND = "Slowest Round"
    GET_STRONGER = "Get Stronger"
    SKILLS = "Skills"


class WorkoutType(str, Enum):
    """Optional classification of a logged session."""

    STRENGTH = "strength"
    METCON = "metcon"
    CARDIO = "cardio"
    MIXED = "mixed"


class Formula(str, Enum):
    """1RM estimation formula actually used."""

    NONE = ""
    ACTUAL = "Actual 1RM"  # 1 rep
    EPLEY = "Epley (2-10 reps)"
    WATHAN = "Wathan (11+ reps)"
