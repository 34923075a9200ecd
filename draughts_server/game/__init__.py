"""Game logic."""

from draughts_server.exceptions import UnknownVariant
from draughts_server.models import BoardSize

from .english import EnglishDraughts
from .rules import RuleEngine

# Rule sets selectable by name
VARIANTS: dict[str, type[RuleEngine]] = {
    EnglishDraughts.name: EnglishDraughts,
}


def create_engine(variant: str = "english", size: BoardSize | None = None) -> RuleEngine:
    """Create a rule engine for a new game.

    Args:
        variant: Registered variant name
        size: Board dimensions (variant default if not provided)

    Returns:
        RuleEngine in its starting position

    Raises:
        UnknownVariant: The variant is not registered.
    """
    engine_class = VARIANTS.get(variant)
    if engine_class is None:
        raise UnknownVariant(variant)
    return engine_class(size)


__all__ = [
    "EnglishDraughts",
    "RuleEngine",
    "VARIANTS",
    "create_engine",
]
