"""Per-application discovery state.

:class:`FrameworkContext` replaces process-wide memoized state: the host
creates one context per application and passes it to the dispatcher, the
path registrar and the reload coordinator. The cached scan result and the
namespace registry live here and are dropped together by :meth:`reset`.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from componentry.models import ComponentDescriptor, ComponentrySettings
from componentry.namespaces import NamespaceRegistry
from componentry.scanner import scan_components

LOG_PREFIX = "[CF init] "


class FrameworkContext:
    """Settings, cached descriptors and namespaces for one application.

    Args:
        app_root: The application root directory.
        settings: Directory conventions; defaults to
            :class:`~componentry.models.ComponentrySettings`.
        logger: Host logger for progress lines. When ``None`` progress lines
            go to the diagnostics stream of :mod:`componentry.output`.
    """

    def __init__(
        self,
        app_root: Path,
        settings: Optional[ComponentrySettings] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.app_root = Path(app_root)
        self.settings = settings or ComponentrySettings()
        self.logger = logger
        self.namespaces = NamespaceRegistry()
        self._components: Optional[list[ComponentDescriptor]] = None

    @property
    def base_dir(self) -> Path:
        """Absolute components root directory."""
        return (self.app_root / self.settings.base_dir).resolve()

    @property
    def verbose(self) -> bool:
        return self.settings.verbose

    def components(self) -> list[ComponentDescriptor]:
        """Return the discovered components, scanning on first access."""
        if self._components is None:
            self._components = scan_components(self.base_dir, self.settings.nested_marker)
        return list(self._components)

    def find(self, name: str) -> Optional[ComponentDescriptor]:
        """Return the descriptor called *name*, or ``None``."""
        for descriptor in self.components():
            if descriptor.name == name:
                return descriptor
        return None

    def reset(self) -> None:
        """Forget the cached scan and every namespace node."""
        self._components = None
        self.namespaces.clear()

    def log(self, message: str) -> None:
        """Emit a ``[CF init]`` progress line when verbose mode is on."""
        if not self.verbose:
            return
        message = LOG_PREFIX + message
        if self.logger is not None:
            self.logger.info(message)
        else:
            from componentry.output import info

            info(message)
