"""Errors raised by the dice engine."""


class DiceGameError(Exception):
    """Base class for all engine errors."""


class InvalidDieSelection(DiceGameError, ValueError):
    """Chosen tier is not one of the player's current dice."""


class InvalidPhase(DiceGameError, ValueError):
    """Operation is not allowed in the session's current phase."""


class InvalidChoicePhase(InvalidPhase):
    """No human decision is pending, or upgrade requested at terminal tier."""


class InvariantViolation(DiceGameError, RuntimeError):
    """Engine state that should be unreachable."""


class InvalidGameSetup(DiceGameError, ValueError):
    """Bad parameters for a new session."""
