"""Exercise definitions and metadata."""

from dataclasses import dataclass, field
from enum import Enum


class MuscleGroup(str, Enum):
    """Major muscle groups."""

    CHEST = "chest"
    BACK = "back"
    SHOULDERS = "shoulders"
    BICEPS = "biceps"
    TRICEPS = "triceps"
    QUADS = "quads"
    HAMSTRINGS = "hamstrings"
    GLUTES = "glutes"
    CALVES = "calves"
    ABS = "abs"
    LATS = "lats"


class MovementPattern(str, Enum):
    """Fundamental movement patterns."""

    PUSH_HORIZONTAL = "push_horizontal"
    PUSH_VERTICAL = "push_vertical"
    PULL_HORIZONTAL = "pull_horizontal"
    PULL_VERTICAL = "pull_vertical"
    SQUAT = "squat"
    HINGE = "hinge"
    LUNGE = "lunge"
    ISOLATION = "isolation"


class EquipmentType(str, Enum):
    """Equipment types for exercises."""

    BARBELL = "barbell"
    DUMBBELL = "dumbbell"
    KETTLEBELL = "kettlebell"
    CABLE = "cable"
    MACHINE = "machine"
    BODYWEIGHT = "bodyweight"
    BANDS = "bands"
    PULL_UP_BAR = "pull_up_bar"

    @property
    def label(self) -> str:
        return self.value.replace("_", " ").title()


@dataclass
class Exercise:
    """Represents an exercise with metadata."""

    name: str
    muscle_groups: list[MuscleGroup]
    movement_pattern: MovementPattern
    equipment: list[EquipmentType]
    is_compound: bool = False  # True for multi-joint movements
    id: int | None = None

    def to_dict(self) -> dict:
        """Convert to dictionary for storage."""
        return {
            "name": self.name,
            "muscle_groups": [mg.value for mg in self.muscle_groups],
            "movement_pattern": self.movement_pattern.value,
            "equipment": [eq.value for eq in self.equipment],
            "is_compound": self.is_compound,
        }

    @classmethod
    def from_dict(cls, data: dict, id: int | None = None) -> "Exercise":
        """Create from dictionary."""
        return cls(
            id=id,
            name=data["name"],
            muscle_groups=[MuscleGroup(mg) for mg in data["muscle_groups"]],
            movement_pattern=MovementPattern(data["movement_pattern"]),
            equipment=[EquipmentType(eq) for eq in data["equipment"]],
            is_compound=data.get("is_compound", False),
        )

    def usable_with(self, equipment: set[str] | frozenset[str]) -> bool:
        """True if any of this exercise's equipment options is available."""
        return any(eq.value in equipment for eq in self.equipment)


# Built-in library seeded into the exercises table by ``weekfit init``
COMMON_EXERCISES: list[Exercise] = [
    # Chest - Horizontal Push
    Exercise(
        name="Bench Press, Barbell",
        muscle_groups=[MuscleGroup.CHEST, MuscleGroup.TRICEPS, MuscleGroup.SHOULDERS],
        movement_pattern=MovementPattern.PUSH_HORIZONTAL,
        equipment=[EquipmentType.BARBELL],
        is_compound=True,
    ),
    Exercise(
        name="Bench Press, Dumbbell",
        muscle_groups=[MuscleGroup.CHEST, MuscleGroup.TRICEPS, MuscleGroup.SHOULDERS],
        movement_pattern=MovementPattern.PUSH_HORIZONTAL,
        equipment=[EquipmentType.DUMBBELL],
        is_compound=True,
    ),
    Exercise(
        name="Push Up, Bodyweight",
        muscle_groups=[MuscleGroup.CHEST, MuscleGroup.TRICEPS, MuscleGroup.SHOULDERS],
        movement_pattern=MovementPattern.PUSH_HORIZONTAL,
        equipment=[EquipmentType.BODYWEIGHT],
        is_compound=True,
    ),
    Exercise(
        name="Chest Fly, Cable",
        muscle_groups=[MuscleGroup.CHEST],
        movement_pattern=MovementPattern.ISOLATION,
        equipment=[EquipmentType.CABLE],
    ),
    Exercise(
        name="Chest Fly, Dumbbell",
        muscle_groups=[MuscleGroup.CHEST],
        movement_pattern=MovementPattern.ISOLATION,
        equipment=[EquipmentType.DUMBBELL],
    ),
    Exercise(
        name="Chest Press, Machine",
        muscle_groups=[MuscleGroup.CHEST, MuscleGroup.TRICEPS],
        movement_pattern=MovementPattern.PUSH_HORIZONTAL,
        equipment=[EquipmentType.MACHINE],
        is_compound=True,
    ),
    # Shoulders - Vertical Push
    Exercise(
        name="Overhead Press, Barbell",
        muscle_groups=[MuscleGroup.SHOULDERS, MuscleGroup.TRICEPS],
        movement_pattern=MovementPattern.PUSH_VERTICAL,
        equipment=[EquipmentType.BARBELL],
        is_compound=True,
    ),
    Exercise(
        name="Shoulder Press, Dumbbell",
        muscle_groups=[MuscleGroup.SHOULDERS, MuscleGroup.TRICEPS],
        movement_pattern=MovementPattern.PUSH_VERTICAL,
        equipment=[EquipmentType.DUMBBELL],
        is_compound=True,
    ),
    Exercise(
        name="Lateral Raise, Dumbbell",
        muscle_groups=[MuscleGroup.SHOULDERS],
        movement_pattern=MovementPattern.ISOLATION,
        equipment=[EquipmentType.DUMBBELL],
    ),
    Exercise(
        name="Lateral Raise, Band",
        muscle_groups=[MuscleGroup.SHOULDERS],
        movement_pattern=MovementPattern.ISOLATION,
        equipment=[EquipmentType.BANDS],
    ),
    # Triceps
    Exercise(
        name="Triceps Pushdown, Cable",
        muscle_groups=[MuscleGroup.TRICEPS],
        movement_pattern=MovementPattern.ISOLATION,
        equipment=[EquipmentType.CABLE],
    ),
    Exercise(
        name="Bench Dip, Bodyweight",
        muscle_groups=[MuscleGroup.TRICEPS, MuscleGroup.CHEST],
        movement_pattern=MovementPattern.PUSH_VERTICAL,
        equipment=[EquipmentType.BODYWEIGHT],
    ),
    # Back - Horizontal Pull
    Exercise(
        name="Bent Over Row, Barbell",
        muscle_groups=[MuscleGroup.BACK, MuscleGroup.LATS, MuscleGroup.BICEPS],
        movement_pattern=MovementPattern.PULL_HORIZONTAL,
        equipment=[EquipmentType.BARBELL],
        is_compound=True,
    ),
    Exercise(
        name="Bent Over One Arm Row, Dumbbell",
        muscle_groups=[MuscleGroup.BACK, MuscleGroup.LATS, MuscleGroup.BICEPS],
        movement_pattern=MovementPattern.PULL_HORIZONTAL,
        equipment=[EquipmentType.DUMBBELL],
        is_compound=True,
    ),
    Exercise(
        name="Seated Row, Cable",
        muscle_groups=[MuscleGroup.BACK, MuscleGroup.LATS, MuscleGroup.BICEPS],
        movement_pattern=MovementPattern.PULL_HORIZONTAL,
        equipment=[EquipmentType.CABLE],
        is_compound=True,
    ),
    Exercise(
        name="Bent Over Row, Band",
        muscle_groups=[MuscleGroup.BACK, MuscleGroup.BICEPS],
        movement_pattern=MovementPattern.PULL_HORIZONTAL,
        equipment=[EquipmentType.BANDS],
    ),
    # Back - Vertical Pull
    Exercise(
        name="Pull Up, Bodyweight",
        muscle_groups=[MuscleGroup.LATS, MuscleGroup.BACK, MuscleGroup.BICEPS],
        movement_pattern=MovementPattern.PULL_VERTICAL,
        equipment=[EquipmentType.PULL_UP_BAR],
        is_compound=True,
    ),
    Exercise(
        name="Lat Pulldown, Cable",
        muscle_groups=[MuscleGroup.LATS, MuscleGroup.BACK, MuscleGroup.BICEPS],
        movement_pattern=MovementPattern.PULL_VERTICAL,
        equipment=[EquipmentType.CABLE, EquipmentType.MACHINE],
        is_compound=True,
    ),
    # Biceps
    Exercise(
        name="Bicep Curl, Barbell",
        muscle_groups=[MuscleGroup.BICEPS],
        movement_pattern=MovementPattern.ISOLATION,
        equipment=[EquipmentType.BARBELL],
    ),
    Exercise(
        name="Hammer Curl, Dumbbell",
        muscle_groups=[MuscleGroup.BICEPS],
        movement_pattern=MovementPattern.ISOLATION,
        equipment=[EquipmentType.DUMBBELL],
    ),
    Exercise(
        name="Bicep Curl, Band",
        muscle_groups=[MuscleGroup.BICEPS],
        movement_pattern=MovementPattern.ISOLATION,
        equipment=[EquipmentType.BANDS],
    ),
    # Legs - Squat
    Exercise(
        name="Squat, Barbell",
        muscle_groups=[MuscleGroup.QUADS, MuscleGroup.GLUTES, MuscleGroup.HAMSTRINGS],
        movement_pattern=MovementPattern.SQUAT,
        equipment=[EquipmentType.BARBELL],
        is_compound=True,
    ),
    Exercise(
        name="Goblet Squat, Kettlebell",
        muscle_groups=[MuscleGroup.QUADS, MuscleGroup.GLUTES],
        movement_pattern=MovementPattern.SQUAT,
        equipment=[EquipmentType.KETTLEBELL, EquipmentType.DUMBBELL],
        is_compound=True,
    ),
    Exercise(
        name="Air Squat, Bodyweight",
        muscle_groups=[MuscleGroup.QUADS, MuscleGroup.GLUTES],
        movement_pattern=MovementPattern.SQUAT,
        equipment=[EquipmentType.BODYWEIGHT],
    ),
    Exercise(
        name="Leg Press, Machine",
        muscle_groups=[MuscleGroup.QUADS, MuscleGroup.GLUTES],
        movement_pattern=MovementPattern.SQUAT,
        equipment=[EquipmentType.MACHINE],
        is_compound=True,
    ),
    # Legs - Hinge
    Exercise(
        name="Deadlift, Barbell",
        muscle_groups=[MuscleGroup.HAMSTRINGS, MuscleGroup.GLUTES, MuscleGroup.BACK],
        movement_pattern=MovementPattern.HINGE,
        equipment=[EquipmentType.BARBELL],
        is_compound=True,
    ),
    Exercise(
        name="Romanian Deadlift, Dumbbell",
        muscle_groups=[MuscleGroup.HAMSTRINGS, MuscleGroup.GLUTES],
        movement_pattern=MovementPattern.HINGE,
        equipment=[EquipmentType.DUMBBELL],
        is_compound=True,
    ),
    Exercise(
        name="Kettlebell Swing, Kettlebell",
        muscle_groups=[MuscleGroup.GLUTES, MuscleGroup.HAMSTRINGS],
        movement_pattern=MovementPattern.HINGE,
        equipment=[EquipmentType.KETTLEBELL],
        is_compound=True,
    ),
    Exercise(
        name="Glute Bridge, Bodyweight",
        muscle_groups=[MuscleGroup.GLUTES, MuscleGroup.HAMSTRINGS],
        movement_pattern=MovementPattern.HINGE,
        equipment=[EquipmentType.BODYWEIGHT],
    ),
    # Legs - Lunge and isolation
    Exercise(
        name="Walking Lunge, Dumbbell",
        muscle_groups=[MuscleGroup.QUADS, MuscleGroup.GLUTES],
        movement_pattern=MovementPattern.LUNGE,
        equipment=[EquipmentType.DUMBBELL],
        is_compound=True,
    ),
    Exercise(
        name="Reverse Lunge, Bodyweight",
        muscle_groups=[MuscleGroup.QUADS, MuscleGroup.GLUTES],
        movement_pattern=MovementPattern.LUNGE,
        equipment=[EquipmentType.BODYWEIGHT],
    ),
    Exercise(
        name="Leg Curl, Machine",
        muscle_groups=[MuscleGroup.HAMSTRINGS],
        movement_pattern=MovementPattern.ISOLATION,
        equipment=[EquipmentType.MACHINE],
    ),
    Exercise(
        name="Leg Extension, Machine",
        muscle_groups=[MuscleGroup.QUADS],
        movement_pattern=MovementPattern.ISOLATION,
        equipment=[EquipmentType.MACHINE],
    ),
    Exercise(
        name="Standing Calf Raise, Bodyweight",
        muscle_groups=[MuscleGroup.CALVES],
        movement_pattern=MovementPattern.ISOLATION,
        equipment=[EquipmentType.BODYWEIGHT, EquipmentType.DUMBBELL],
    ),
    # Core
    Exercise(
        name="Plank, Bodyweight",
        muscle_groups=[MuscleGroup.ABS],
        movement_pattern=MovementPattern.ISOLATION,
        equipment=[EquipmentType.BODYWEIGHT],
    ),
    Exercise(
        name="Cable Crunch, Cable",
        muscle_groups=[MuscleGroup.ABS],
        movement_pattern=MovementPattern.ISOLATION,
        equipment=[EquipmentType.CABLE],
    ),
]
