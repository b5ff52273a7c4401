"""Entry point wiring component discovery into a host application.

:func:`initialize` is called once while the host is being configured. It
registers component paths with the host right away and defers hook
dispatch to two host callbacks:

1. an ``initialize_components`` initializer, run as part of the host's
   own initialization, which loads every ``initialize.py`` and calls
   ``init``;
2. an ``after_initialize`` callback, run when the host is fully
   configured, which calls ``ready``.

In development mode a :class:`~componentry.reloading.ReloadCoordinator`
re-runs both phases after every code reload.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from componentry.context import FrameworkContext
from componentry.host import DEVELOPMENT
from componentry.lifecycle import LifecycleDispatcher
from componentry.models import ComponentDescriptor, ComponentrySettings
from componentry.namespaces import Namespace
from componentry.paths import PathRegistrar
from componentry.reloading import ReloadCoordinator

logger = logging.getLogger(__name__)

INITIALIZER_NAME = "initialize_components"


class ComponentFramework:
    """Discovery and dispatch for one host application.

    Created by :func:`initialize`; rarely constructed directly.

    Args:
        context: The application's discovery context.
    """

    def __init__(self, context: FrameworkContext) -> None:
        self.context = context
        self.dispatcher = LifecycleDispatcher(context)
        self.paths = PathRegistrar(context)
        self.reload_coordinator: Optional[ReloadCoordinator] = None

    def components(self) -> list[ComponentDescriptor]:
        """Discovered components, sorted by path."""
        return self.context.components()

    def component_modules(self, load_initializers: bool = False) -> list[Namespace]:
        """Namespace node of every component, in scan order."""
        return self.dispatcher.component_namespaces(load_initializers=load_initializers)

    def component_module_by_name(self, name: str) -> Namespace:
        """Namespace node of the component called *name*.

        Raises:
            ComponentNotFoundError: If no component has that name.
        """
        return self.dispatcher.namespace_by_name(name)

    def reset(self) -> None:
        """Forget cached discovery state; the next access rescans."""
        self.context.reset()
        self.dispatcher.reset_states()

    # ------------------------------------------------------------------
    # Host wiring
    # ------------------------------------------------------------------

    def configure(self, app: Any) -> None:
        """Register paths and lifecycle callbacks with *app*."""
        context = self.context
        settings = context.settings
        base = context.base_dir
        try:
            base_rel = base.relative_to(app.root).as_posix()
        except ValueError:
            base_rel = base.as_posix()

        context.log("Components Initialization Started")
        context.log(f"Components Path: {base}")

        app.autoloader.collapse(f"{base_rel}/*/{settings.nested_marker}")
        app.autoloader.ignore(f"{base_rel}/**/{settings.routes_file}")

        app.config.autoload_paths.append(str(base))
        app.config.eager_load_paths.append(str(base))

        context.log(
            "Discovered Components: " + ", ".join(d.name for d in self.components())
        )
        self.paths.register(app)

        app.initializer(INITIALIZER_NAME, self._run_init, group="all")
        app.config.after_initialize(self._run_ready)

        if getattr(app, "env", None) == DEVELOPMENT:
            self.reload_coordinator = ReloadCoordinator(context, self.dispatcher, app)
            self.reload_coordinator.install(app.reloader)
            context.log("Reloading enabled")

        context.log("Configuration Finished")

    def _run_init(self, app: Any) -> None:
        self.dispatcher.load_initializers()
        self.dispatcher.run_init(app)

    def _run_ready(self, app: Any) -> None:
        self.dispatcher.run_ready(app)
        self.context.log("Components Initialization Done")


def initialize(
    application: Any,
    verbose: bool = False,
    settings: Optional[ComponentrySettings] = None,
) -> ComponentFramework:
    """Configure *application* to discover and initialize its components.

    Args:
        application: The host application (see :class:`~componentry.host.Host`).
        verbose: Emit ``[CF init]`` progress lines.
        settings: Directory conventions; defaults are used when omitted.

    Returns:
        The :class:`ComponentFramework` bound to *application*.

    Raises:
        ConfigError: If two component directories map to the same name.
    """
    settings = (settings or ComponentrySettings()).model_copy()
    if verbose:
        settings.verbose = True
    context = FrameworkContext(
        application.root, settings, logger=getattr(application, "logger", None)
    )
    framework = ComponentFramework(context)
    framework.configure(application)
    logger.debug("Configured %d components under %s", len(framework.components()), context.base_dir)
    return framework
