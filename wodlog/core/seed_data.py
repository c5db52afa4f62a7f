"""Standard catalog: seeded movements, benchmark WODs and sample templates.

Rows seeded from here are marked is_standard and are read-only for users.
"""

from __future__ import annotations

from wodlog.core.enums import MovementType, ScoreType, WODRegime, WODSource, WODType

# (name, description, type)
STANDARD_MOVEMENTS: tuple[tuple[str, str, MovementType], ...] = (
    ("Back Squat", "Barbell back squat", MovementType.WEIGHTLIFTING),
    ("Front Squat", "Barbell front squat", MovementType.WEIGHTLIFTING),
    ("Overhead Squat", "Barbell overhead squat", MovementType.WEIGHTLIFTING),
    ("Deadlift", "Conventional deadlift", MovementType.WEIGHTLIFTING),
    ("Sumo Deadlift High Pull", "SDHP with barbell", MovementType.WEIGHTLIFTING),
    ("Clean", "Full clean", MovementType.WEIGHTLIFTING),
    ("Power Clean", "Power clean (squat above parallel)", MovementType.WEIGHTLIFTING),
    ("Hang Clean", "Clean from hang position", MovementType.WEIGHTLIFTING),
    ("Snatch", "Full snatch", MovementType.WEIGHTLIFTING),
    ("Power Snatch", "Power snatch (squat above parallel)", MovementType.WEIGHTLIFTING),
    ("Clean and Jerk", "Full clean and jerk", MovementType.WEIGHTLIFTING),
    ("Thruster", "Front squat to push press", MovementType.WEIGHTLIFTING),
    ("Push Press", "Barbell push press", MovementType.WEIGHTLIFTING),
    ("Push Jerk", "Barbell push jerk", MovementType.WEIGHTLIFTING),
    ("Split Jerk", "Barbell split jerk", MovementType.WEIGHTLIFTING),
    ("Kettlebell Swing", "Kettlebell swing", MovementType.WEIGHTLIFTING),
    ("Pull-up", "Strict or kipping pull-up", MovementType.GYMNASTICS),
    ("Chest-to-Bar Pull-up", "Pull-up with chest touching bar", MovementType.GYMNASTICS),
    ("Muscle-up", "Ring or bar muscle-up", MovementType.GYMNASTICS),
    ("Handstand Push-up", "HSPU against wall or freestanding", MovementType.GYMNASTICS),
    ("Dip", "Ring or bar dip", MovementType.GYMNASTICS),
    ("Toes-to-Bar", "Hanging toes to bar", MovementType.GYMNASTICS),
    ("Knees-to-Elbow", "Hanging knees to elbows", MovementType.GYMNASTICS),
    ("Push-up", "Standard push-up", MovementType.BODYWEIGHT),
    ("Sit-up", "Abdominal sit-up", MovementType.BODYWEIGHT),
    ("Air Squat", "Bodyweight squat", MovementType.BODYWEIGHT),
    ("Burpee", "Full burpee", MovementType.BODYWEIGHT),
    ("Box Jump", "Jump onto box", MovementType.BODYWEIGHT),
    ("Row", "Rowing machine (meters or calories)", MovementType.CARDIO),
    ("Run", "Running (meters or miles)", MovementType.CARDIO),
    ("Bike", "Assault bike or stationary bike", MovementType.CARDIO),
    ("Ski Erg", "Ski erg machine", MovementType.CARDIO),
)

# name -> (source, type, regime, score_type, description, url)
STANDARD_WODS: dict[str, tuple[WODSource, WODType, WODRegime, ScoreType, str, str]] = {
    "Fran": (
        WODSource.CROSSFIT, WODType.GIRL, WODRegime.FASTEST_TIME, ScoreType.TIME,
        "21-15-9 reps for time of: Thrusters (95/65 lb), Pull-ups",
        "https://www.crossfit.com/workout/fran",
    ),
    "Helen": (
        WODSource.CROSSFIT, WODType.GIRL, WODRegime.FASTEST_TIME, ScoreType.TIME,
        "3 rounds for time of: 400m Run, 21 Kettlebell Swings (53/35 lb), 12 Pull-ups",
        "https://www.crossfit.com/workout/helen",
    ),
    "Cindy": (
        WODSource.CROSSFIT, WODType.GIRL, WODRegime.AMRAP, ScoreType.ROUNDS_REPS,
        "20 min AMRAP of: 5 Pull-ups, 10 Push-ups, 15 Air Squats",
        "https://www.crossfit.com/workout/cindy",
    ),
    "Grace": (
        WODSource.CROSSFIT, WODType.GIRL, WODRegime.FASTEST_TIME, ScoreType.TIME,
        "30 Clean and Jerks for time (135/95 lb)",
        "https://www.crossfit.com/workout/grace",
    ),
    "Annie": (
        WODSource.CROSSFIT, WODType.GIRL, WODRegime.FASTEST_TIME, ScoreType.TIME,
        "50-40-30-20-10 reps for time of: Double-Unders, Sit-ups",
        "https://www.crossfit.com/workout/annie",
    ),
    "Karen": (
        WODSource.CROSSFIT, WODType.GIRL, WODRegime.FASTEST_TIME, ScoreType.TIME,
        "150 Wall Ball Shots for time (20/14 lb, 10/9 ft)",
        "https://www.crossfit.com/workout/karen",
    ),
    "Diane": (
        WODSource.CROSSFIT, WODType.GIRL, WODRegime.FASTEST_TIME, ScoreType.TIME,
        "21-15-9 reps for time of: Deadlifts (225/155 lb), Handstand Push-ups",
        "https://www.crossfit.com/workout/diane",
    ),
    "Elizabeth": (
        WODSource.CROSSFIT, WODType.GIRL, WODRegime.FASTEST_TIME, ScoreType.TIME,
        "21-15-9 reps for time of: Cleans (135/95 lb), Dips",
        "https://www.crossfit.com/workout/elizabeth",
    ),
    "Murph": (
        WODSource.CROSSFIT, WODType.HERO, WODRegime.FASTEST_TIME, ScoreType.TIME,
        "For time: 1 mile Run, 100 Pull-ups, 200 Push-ups, 300 Air Squats, 1 mile Run",
        "https://www.crossfit.com/workout/murph",
    ),
    "DT": (
        WODSource.CROSSFIT, WODType.HERO, WODRegime.FASTEST_TIME, ScoreType.TIME,
        "5 rounds for time of: 12 Deadlifts, 9 Hang Power Cleans, 6 Push Jerks (155/105 lb)",
        "https://www.crossfit.com/workout/dt",
    ),
    "CrossFit Total": (
        WODSource.CROSSFIT, WODType.BENCHMARK, WODRegime.GET_STRONGER, ScoreType.MAX_WEIGHT,
        "Sum of best Back Squat, Shoulder Press and Deadlift (3 attempts each)",
        "https://www.crossfit.com/workout/crossfit-total",
    ),
}

# Template name -> (notes, [(movement name, weight, sets, reps)], [wod names])
STANDARD_TEMPLATES: dict[str, tuple[str, list[tuple[str, float | None, int, int]], list[str]]] = {
    "Strength Training - Back Squat Focus": (
        "5x5 progressive overload program",
        [("Back Squat", 225.0, 5, 5)],
        [],
    ),
    "Olympic Lifting - Clean & Jerk Practice": (
        "Technical practice with moderate weight",
        [("Clean", 135.0, 5, 3), ("Push Jerk", 135.0, 5, 3)],
        [],
    ),
    "Gymnastics Strength": (
        "Bodyweight strength and skill work",
        [("Pull-up", None, 5, 10), ("Dip", None, 5, 10), ("Handstand Push-up", None, 5, 5)],
        [],
    ),
    "Benchmark Day - Fran": (
        "Warm up thoroughly, then go for time",
        [],
        ["Fran"],
    ),
}
