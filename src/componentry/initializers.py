"""Loading of per-component initializer files.

A component may ship an ``initialize.py`` file in its directory. When
present, the file is executed as a module and must define an
``Initialize`` attribute (a class, an instance or a module) exposing
either or both of the lifecycle hooks::

    # components/clients/initialize.py
    class Initialize:
        @staticmethod
        def init(app):
            app.config.x["clients.enabled"] = True

        @staticmethod
        def ready(app):
            ...

Both hooks are optional and receive the host application. Which hooks a
handle provides is decided once, when the handle is created, and recorded
on :class:`InitializerHandle`.
"""

from __future__ import annotations

import importlib.util
import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from componentry.exceptions import MalformedInitializerError
from componentry.models import ComponentDescriptor, ComponentrySettings

logger = logging.getLogger(__name__)

MODULE_PREFIX = "componentry_components"
"""Top-level name under which initializer modules are registered in ``sys.modules``."""


@dataclass(frozen=True)
class InitializerHandle:
    """The hook-bearing object resolved from a component's initializer file.

    Attributes:
        component: Name of the component the handle belongs to.
        target: The resolved ``Initialize`` object.
        module_name: Name the initializer module is registered under.
        has_init: Whether *target* provides a callable ``init``.
        has_ready: Whether *target* provides a callable ``ready``.
    """

    component: str
    target: Any
    module_name: str
    has_init: bool
    has_ready: bool

    def init(self, app: Any) -> None:
        if self.has_init:
            self.target.init(app)

    def ready(self, app: Any) -> None:
        if self.has_ready:
            self.target.ready(app)


def initializer_module_name(descriptor: ComponentDescriptor) -> str:
    """Return the ``sys.modules`` key for a component's initializer.

    The key follows the directory names under the components root, so
    ``clients/_components/billing`` maps to
    ``componentry_components.clients._components.billing.initialize``.
    """
    parts = descriptor.relative_path.split("/")
    return ".".join([MODULE_PREFIX, *parts, "initialize"])


def initializer_path(descriptor: ComponentDescriptor, settings: ComponentrySettings) -> Path:
    return descriptor.path / settings.initializer_file


def _has_hook(target: Any, hook: str) -> bool:
    return callable(getattr(target, hook, None))


def resolve_handle(
    component: str, module: Any, handle_name: str
) -> InitializerHandle:
    """Resolve the hook handle declared by an initializer *module*.

    Raises:
        MalformedInitializerError: If *module* has no *handle_name* attribute.
    """
    target = getattr(module, handle_name, None)
    if target is None:
        raise MalformedInitializerError(
            f"Initializer for component {component} ({getattr(module, '__file__', module)}) "
            f"does not define '{handle_name}'"
        )
    return InitializerHandle(
        component=component,
        target=target,
        module_name=getattr(module, "__name__", ""),
        has_init=_has_hook(target, "init"),
        has_ready=_has_hook(target, "ready"),
    )


def load_initializer(
    descriptor: ComponentDescriptor, settings: ComponentrySettings
) -> Optional[InitializerHandle]:
    """Execute a component's initializer file and resolve its handle.

    The file is executed fresh on every call, replacing any module
    previously registered under the same name.

    Args:
        descriptor: The component whose initializer should be loaded.
        settings: Supplies the initializer file and handle names.

    Returns:
        The resolved handle, or ``None`` when the component has no
        initializer file.

    Raises:
        MalformedInitializerError: If the file defines no handle.
    """
    path = initializer_path(descriptor, settings)
    if not path.is_file():
        logger.debug("Component %s has no initializer", descriptor.name)
        return None

    module_name = initializer_module_name(descriptor)
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        raise MalformedInitializerError(f"Cannot load initializer {path}")
    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    except BaseException:
        sys.modules.pop(module_name, None)
        raise

    handle = resolve_handle(descriptor.name, module, settings.initializer_handle)
    logger.debug(
        "Loaded initializer %s (init=%s, ready=%s)",
        module_name,
        handle.has_init,
        handle.has_ready,
    )
    return handle


def unload_initializers() -> list[str]:
    """Drop every initializer module from ``sys.modules``.

    Returns:
        The module names that were removed.
    """
    prefix = MODULE_PREFIX + "."
    removed = [name for name in sys.modules if name.startswith(prefix)]
    for name in removed:
        del sys.modules[name]
    return removed
