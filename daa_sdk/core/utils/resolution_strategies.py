"""
Resolution strategies for binding modules

Each strategy is a zero-argument callable returning the resolved module or
raising. Strategies are bound to a module name when the registry is built,
and expose it as ``module_name`` so the loader can tell a missing binding
apart from a binding whose own dependencies are missing.
"""

import importlib
import importlib.util
import logging
from typing import Any, Callable

logger = logging.getLogger(__name__)

ResolutionStrategy = Callable[[], Any]


def native_extension_strategy(module_name: str) -> ResolutionStrategy:
    """Resolve a compiled extension: locate it first, then import it"""

    def resolve() -> Any:
        if importlib.util.find_spec(module_name) is None:
            raise ModuleNotFoundError(
                f"No module named '{module_name}'", name=module_name
            )
        logger.debug(f"Loading native bindings: {module_name}")
        return importlib.import_module(module_name)

    resolve.__qualname__ = f"native_extension_strategy[{module_name}]"
    resolve.module_name = module_name
    return resolve


def portable_module_strategy(
    module_name: str, init_hook: str = "init"
) -> ResolutionStrategy:
    """Resolve a portable module and run its initialisation hook"""

    def resolve() -> Any:
        logger.debug(f"Loading portable bindings: {module_name}")
        module = importlib.import_module(module_name)

        hook = getattr(module, init_hook, None) if init_hook else None
        if callable(hook):
            hook()
        return module

    resolve.__qualname__ = f"portable_module_strategy[{module_name}]"
    resolve.module_name = module_name
    return resolve
