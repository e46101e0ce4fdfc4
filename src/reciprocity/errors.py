"""Error taxonomy for the tournament engine.

All errors raised by the engine derive from ReciprocityError and also from
the builtin exception that best matches their meaning, so callers may catch
either.

- InvalidConfiguration: rejected at initialize(); reconfigure and retry
- UnknownStrategy: configuration names an unregistered strategy id
- InvalidPairing: internal consistency violation (programming error)
- SimulationStateError: lifecycle misuse, e.g. stepping before initialize()
"""


class ReciprocityError(Exception):
    """Base class for all engine errors."""


class InvalidConfiguration(ReciprocityError, ValueError):
    """Raised when a run cannot be built from its configuration."""


class UnknownStrategy(ReciprocityError, KeyError):
    """Raised when a strategy id is not present in the registry."""

    def __init__(self, strategy_id: str):
        super().__init__(strategy_id)
        self.strategy_id = strategy_id

    def __str__(self) -> str:
        return f"Unknown strategy: {self.strategy_id!r}"


class InvalidPairing(ReciprocityError, RuntimeError):
    """Raised when a pairing references agents that cannot play each other."""


class SimulationStateError(ReciprocityError, RuntimeError):
    """Raised when a controller operation is called in the wrong phase."""
