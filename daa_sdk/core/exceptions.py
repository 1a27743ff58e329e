"""
Binding Exception System.

Exceptions raised by the binding resolution layer. Ordinary unavailability
is reported through LoadOutcome; these are for program defects and for
feature-access code that needs a module and cannot continue without it.
"""

import time
from typing import Any, Dict, List, Optional, Sequence


class DAAError(Exception):
    """Base exception for all binding-related errors."""

    def __init__(
            self,
            message: str,
            context: Dict = None,
            suggestions: List[str] = None
    ):
        super().__init__(message)
        self.context = context or {}
        self.suggestions = suggestions or []
        self.timestamp = time.time()
        self.error_type = self.__class__.__name__

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for reporting."""
        return {
            "error_type": self.error_type,
            "message": str(self),
            "context": self.context,
            "suggestions": self.suggestions,
            "timestamp": self.timestamp,
        }


class RegistryConfigurationError(DAAError):
    """Malformed binding registry, detected at construction time."""

    def __init__(self, identity: Optional[str], problem: str, **kwargs):
        self.identity = identity
        self.problem = problem

        message = "Invalid binding registry"
        if identity:
            message += f" entry '{identity}'"
        message += f": {problem}"

        super().__init__(message, **kwargs)


class UnknownModuleError(DAAError):
    """Identity is not present in the binding registry."""

    def __init__(self, identity: str, known: Sequence[str] = (), **kwargs):
        self.identity = identity

        message = f"Unknown module '{identity}'"
        if known:
            message += f" (registered: {', '.join(known)})"

        super().__init__(message, **kwargs)


class ModuleUnavailableError(DAAError):
    """A required module could not be loaded on this platform."""

    def __init__(
            self,
            identity: str,
            reason: str,
            tier: Optional[str] = None,
            attempts: Sequence[Any] = (),
            **kwargs
    ):
        self.identity = identity
        self.reason = reason
        self.tier = tier
        self.attempts = list(attempts)

        message = f"Module '{identity}' is not available"
        if tier:
            message += f" on the {tier} tier"
        message += f" ({reason})"

        context = kwargs.pop("context", {})
        context.update({
            "identity": identity,
            "reason": reason,
            "tier": tier,
            "attempts": [str(attempt) for attempt in self.attempts],
        })

        suggestions = kwargs.pop("suggestions", None) or [
            f"Install the native or portable package providing '{identity}'",
            "Run 'daa-sdk info' to inspect available bindings",
        ]

        super().__init__(message, context=context, suggestions=suggestions, **kwargs)
