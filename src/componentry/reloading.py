"""Development-mode re-dispatch of lifecycle hooks on code reload.

When the host unloads and reloads application code, component
initializers must run again against the fresh code. Hosts may fire their
"prepare" signal more than once per reload, so a single latch makes sure
the ``init``/``ready`` pass runs at most once per unload.

Components listed in ``settings.reload_exclude`` (the tracing component by
default) are never re-dispatched; their hooks run once per process.
"""

from __future__ import annotations

import logging
from typing import Any

from componentry.context import FrameworkContext
from componentry.initializers import unload_initializers
from componentry.lifecycle import LifecycleDispatcher

logger = logging.getLogger(__name__)


class ReloadCoordinator:
    """Re-runs component hooks once per host reload cycle.

    Args:
        context: The application's discovery context.
        dispatcher: Dispatcher used for the re-run.
        app: Host application passed to the hooks.
    """

    def __init__(
        self, context: FrameworkContext, dispatcher: LifecycleDispatcher, app: Any
    ) -> None:
        self.context = context
        self.dispatcher = dispatcher
        self.app = app
        # Nothing to redo until the host announces an unload.
        self._reinitialized = True
        self.cycles = 0

    @property
    def pending(self) -> bool:
        """Whether a re-dispatch is due on the next prepare signal."""
        return not self._reinitialized

    def install(self, reloader: Any) -> None:
        reloader.before_class_unload(self.before_unload)
        reloader.to_prepare(self.prepare)

    def before_unload(self, *_: Any) -> None:
        self._reinitialized = False
        removed = unload_initializers()
        self.context.reset()
        self.dispatcher.reset_states(keep=self.context.settings.reload_exclude)
        logger.debug("Unloaded %d component initializers", len(removed))

    def prepare(self, *_: Any) -> None:
        if self._reinitialized:
            return
        self._reinitialized = True

        exclude = self.context.settings.reload_exclude
        self.context.log("Reload Components")
        self.dispatcher.load_initializers()
        self.dispatcher.run_init(self.app, exclude=exclude)
        self.dispatcher.run_ready(self.app, exclude=exclude)
        self.cycles += 1
        self.context.log("Components Reload Done")
