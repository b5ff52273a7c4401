"""Two-phase lifecycle dispatch across discovered components.

:class:`LifecycleDispatcher` drives every component through three states::

    IDLE -> INITIALIZED -> READY

``init`` runs during the host's own initialization, so a component can
still configure the host (register middleware, add settings). ``ready``
runs after the host reports that all initialization is complete, so a
component can safely reference other components and their services.

Both passes follow scan order. Errors raised by a hook are not caught:
they propagate and abort the host's startup.
"""

from __future__ import annotations

import enum
import logging
from typing import Any, Iterable

from componentry.context import FrameworkContext
from componentry.exceptions import ComponentNotFoundError
from componentry.initializers import load_initializer
from componentry.namespaces import Namespace

logger = logging.getLogger(__name__)


class LifecycleState(str, enum.Enum):
    """Lifecycle state of a single component."""

    IDLE = "idle"
    INITIALIZED = "initialized"
    READY = "ready"


class LifecycleDispatcher:
    """Loads initializers and dispatches ``init``/``ready`` hooks.

    Args:
        context: The application's discovery context.

    Example:
        Driving both phases by hand::

            dispatcher = LifecycleDispatcher(context)
            dispatcher.load_initializers()
            dispatcher.run_init(app)
            dispatcher.run_ready(app)
    """

    def __init__(self, context: FrameworkContext) -> None:
        self.context = context
        self._states: dict[str, LifecycleState] = {}

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def load_initializers(self) -> None:
        """Create each component's namespace and register its initializer.

        Components without an initializer file get an empty namespace.
        """
        self.context.log("Load Components Initializers")
        for descriptor in self.context.components():
            namespace = self.context.namespaces.ensure(descriptor.name)
            namespace.initializer = load_initializer(descriptor, self.context.settings)
            self._states.setdefault(descriptor.name, LifecycleState.IDLE)

    def component_namespaces(self, load_initializers: bool = False) -> list[Namespace]:
        """Return the namespace node of every component, in scan order.

        Args:
            load_initializers: Execute the initializer files first.
        """
        if load_initializers:
            self.load_initializers()
        return [self.namespace_by_name(d.name) for d in self.context.components()]

    def namespace_by_name(self, name: str) -> Namespace:
        """Return the namespace node for the component called *name*.

        Raises:
            ComponentNotFoundError: If no discovered component has that name.
        """
        if self.context.find(name) is None:
            message = f"Component {name} not found"
            self.context.log(message)
            raise ComponentNotFoundError(message)
        return self.context.namespaces.ensure(name)

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def run_init(self, app: Any, exclude: Iterable[str] = ()) -> list[str]:
        """Call ``init`` on every component that provides it.

        Args:
            app: The host application passed to each hook.
            exclude: Component names to skip entirely.

        Returns:
            Names of the components whose ``init`` hook ran.
        """
        self.context.log("Initialize Components")
        return self._dispatch(app, "init", LifecycleState.INITIALIZED, set(exclude))

    def run_ready(self, app: Any, exclude: Iterable[str] = ()) -> list[str]:
        """Call ``ready`` on every component that provides it.

        Args:
            app: The host application passed to each hook.
            exclude: Component names to skip entirely.

        Returns:
            Names of the components whose ``ready`` hook ran.
        """
        self.context.log("Post-Initialize Components")
        return self._dispatch(app, "ready", LifecycleState.READY, set(exclude))

    def _dispatch(
        self, app: Any, hook: str, reached: LifecycleState, exclude: set[str]
    ) -> list[str]:
        called: list[str] = []
        for namespace in self.component_namespaces():
            if namespace.name in exclude:
                continue
            handle = namespace.initializer
            if handle is not None and getattr(handle, f"has_{hook}"):
                logger.debug("Running %s hook for %s", hook, namespace.name)
                getattr(handle, hook)(app)
                called.append(namespace.name)
            self._states[namespace.name] = reached
        return called

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    def state_of(self, name: str) -> LifecycleState:
        """Return the lifecycle state of the component called *name*."""
        self.namespace_by_name(name)
        return self._states.get(name, LifecycleState.IDLE)

    def states(self) -> dict[str, LifecycleState]:
        """Lifecycle state of every discovered component, in scan order."""
        return {
            d.name: self._states.get(d.name, LifecycleState.IDLE)
            for d in self.context.components()
        }

    def reset_states(self, keep: Iterable[str] = ()) -> None:
        """Return every component to ``IDLE`` except those named in *keep*."""
        kept = set(keep)
        self._states = {name: state for name, state in self._states.items() if name in kept}
