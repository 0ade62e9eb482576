"""
Pass the Pigs - Input Validation Utilities

Provides validation functions for the engine's setup helpers. All validators
either return validated data or raise descriptive ValueError exceptions.
The four game actions never call these; they ignore illegal calls instead.
"""

import math

MAX_NAME_LENGTH = 30


def validate_player_name(name: str, max_length: int = MAX_NAME_LENGTH) -> str:
    """
    Validate and normalize a player's display name.

    Args:
        name: Name to validate
        max_length: Longest allowed name after stripping whitespace

    Returns:
        The name with surrounding whitespace removed

    Raises:
        ValueError: If the name is not a string, blank, or too long
    """
    if not isinstance(name, str):
        raise ValueError(f"Player name must be a string, got {type(name).__name__}.")

    cleaned = name.strip()
    if not cleaned:
        raise ValueError("Player name cannot be blank.")

    if len(cleaned) > max_length:
        raise ValueError(
            f"Player name must be at most {max_length} characters, got {len(cleaned)}."
        )

    return cleaned


def validate_player_count(count: int, minimum: int = 2, maximum: int | None = None) -> int:
    """
    Validate number of players.

    Args:
        count: Number of players
        minimum: Fewest players allowed
        maximum: Most players allowed (None = no limit)

    Returns:
        Validated count

    Raises:
        ValueError: If count is out of range
    """
    if not isinstance(count, int) or isinstance(count, bool):
        raise ValueError(f"Player count must be an integer, got {type(count).__name__}.")

    if count < minimum:
        raise ValueError(f"At least {minimum} players required, got {count}.")

    if maximum is not None and count > maximum:
        raise ValueError(f"At most {maximum} players allowed, got {count}.")

    return count


def validate_target_score(score: int, minimum: int | None = 1) -> int:
    """
    Validate target score for a game.

    Args:
        score: Target score to validate
        minimum: Lowest acceptable target (None = no lower bound)

    Returns:
        Validated score

    Raises:
        ValueError: If score is not an integer or below the minimum
    """
    if not isinstance(score, int) or isinstance(score, bool):
        raise ValueError(f"Target score must be an integer, got {type(score).__name__}.")

    if minimum is not None and score < minimum:
        raise ValueError(f"Target score must be at least {minimum}, got {score}.")

    return score


def validate_weight(value: float) -> float:
    """
    Validate an outcome weight.

    Negative weights are accepted here; the sampler treats them as zero.

    Args:
        value: Weight to validate

    Returns:
        The weight as a float

    Raises:
        ValueError: If value is not a finite number
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"Weight must be a number, got {type(value).__name__}.")

    if not math.isfinite(value):
        raise ValueError(f"Weight must be finite, got {value}.")

    return float(value)
