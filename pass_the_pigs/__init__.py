"""Pass the Pigs - turn-based pig-dice scoring engine."""

__version__ = "0.1.0"
