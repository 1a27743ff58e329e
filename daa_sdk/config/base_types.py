"""
Base types and enums for configuration system
"""

from enum import Enum


class Tier(Enum):
    """Runtime tier a binding can be resolved against"""

    ACCELERATED = "native"  # Compiled native extension
    PORTABLE = "portable"  # Sandboxed portable module

    @property
    def other(self) -> "Tier":
        """The alternate tier"""
        if self is Tier.ACCELERATED:
            return Tier.PORTABLE
        return Tier.ACCELERATED

    @classmethod
    def parse(cls, value: str) -> "Tier":
        """Parse a tier from its value or member name"""
        normalized = value.strip().lower()
        for tier in cls:
            if normalized in (tier.value, tier.name.lower()):
                return tier
        raise ValueError(
            f"Unknown tier '{value}', expected one of: "
            f"{', '.join(t.value for t in cls)}"
        )


class ModuleIdentity(Enum):
    """Optional feature modules known to the binding registry"""

    CRYPTO = "crypto"
    ORCHESTRATION = "orchestration"
    TRAINING = "training"


# Platforms where only sandboxed modules can run (Pyodide, WASI builds)
SANDBOX_PLATFORMS = frozenset({"emscripten", "wasi"})
