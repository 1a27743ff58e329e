"""
Load Outcome Dataclasses

This module defines the handle returned by a successful binding load and the
tagged outcome every load produces.
"""

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from daa_sdk.config.base_types import ModuleIdentity, Tier


class UnavailableReason(Enum):
    """Why a binding could not be loaded"""

    RESOLUTION_FAILED = "resolution_failed"
    TIER_UNSUPPORTED = "tier_unsupported"
    FALLBACK_EXHAUSTED = "fallback_exhausted"
    TIMED_OUT = "timed_out"


class AttemptFailure(Enum):
    """Failure classification for a single resolution attempt"""

    ABSENT = "absent"  # Module is not installed
    INCOMPATIBLE = "incompatible"  # Present but could not be imported
    INIT_FAILED = "init_failed"  # Imported but initialisation raised


@dataclass(frozen=True)
class LoadAttempt:
    """A single failed resolution attempt"""

    tier: Tier
    failure: AttemptFailure
    error: str

    def __str__(self) -> str:
        return f"{self.tier.value}: {self.failure.value} ({self.error})"


@dataclass
class ModuleHandle:
    """Reference to a loaded binding's entry surface"""

    identity: ModuleIdentity
    tier: Tier
    module: Any
    degraded: bool = False  # Loaded through the fallback tier
    loaded_at: float = field(default_factory=time.time)

    @property
    def module_name(self) -> str:
        return getattr(self.module, "__name__", type(self.module).__name__)

    @property
    def version(self) -> Optional[str]:
        """Version reported by the module, if it exposes one"""
        version = getattr(self.module, "__version__", None)
        if version is None and callable(getattr(self.module, "version", None)):
            version = self.module.version()
        return str(version) if version is not None else None

    def __getattr__(self, name: str) -> Any:
        # Only reached for names the handle itself does not define
        if name == "module":
            raise AttributeError(name)
        return getattr(self.module, name)


@dataclass(frozen=True)
class LoadOutcome:
    """Either a loaded handle or an unavailability reason, never both"""

    identity: ModuleIdentity
    handle: Optional[ModuleHandle] = None
    reason: Optional[UnavailableReason] = None
    attempts: Tuple[LoadAttempt, ...] = ()

    def __post_init__(self):
        if (self.handle is None) == (self.reason is None):
            raise ValueError("LoadOutcome needs exactly one of handle or reason")

    @classmethod
    def loaded(
        cls, handle: ModuleHandle, attempts: Tuple[LoadAttempt, ...] = ()
    ) -> "LoadOutcome":
        return cls(identity=handle.identity, handle=handle, attempts=attempts)

    @classmethod
    def unavailable(
        cls,
        identity: ModuleIdentity,
        reason: UnavailableReason,
        attempts: Tuple[LoadAttempt, ...] = (),
    ) -> "LoadOutcome":
        return cls(identity=identity, reason=reason, attempts=attempts)

    @property
    def is_loaded(self) -> bool:
        return self.handle is not None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "identity": self.identity.value,
            "loaded": self.is_loaded,
            "attempts": [str(attempt) for attempt in self.attempts],
        }
        if self.handle is not None:
            data["tier"] = self.handle.tier.value
            data["degraded"] = self.handle.degraded
            data["module"] = self.handle.module_name
        else:
            data["reason"] = self.reason.value
        return data
