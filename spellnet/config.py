"""Configuration classes for spellnet solvers."""

from dataclasses import dataclass, replace


@dataclass(frozen=True)
class SolverConfig:
    """Numeric settings shared by the flow and weight solvers."""

    # Weight of an edge with no dependencies; every derived weight adds this
    # constant, which keeps dominance strict.
    base_weight: float = 1.0

    # Residual capacities at or below this value are treated as exhausted.
    tolerance: float = 2**-12

    # Check solved weights against the contracted dependency graph and raise
    # InconsistentPresetError on violations.
    validate_presets: bool = False

    def __post_init__(self) -> None:
        if self.base_weight <= 0:
            raise ValueError(f"base_weight must be positive, got {self.base_weight}")
        if self.tolerance < 0:
            raise ValueError(f"tolerance must be non-negative, got {self.tolerance}")

    def with_overrides(self, **changes) -> "SolverConfig":
        """Return a copy with selected fields replaced."""
        return replace(self, **changes)


# Global configuration instance (immutable)
SOLVER_CONFIG = SolverConfig()
