"""componentry -- discover component directories and run their lifecycle hooks.

The package scans an application's ``components/`` tree, registers each
component's paths with the host application (autoload, eager-load, routes,
helpers, migrations) and calls the optional ``init`` and ``ready`` hooks of
every component in a deterministic order.

Typical use from a host application::

    from componentry import initialize

    framework = initialize(app, verbose=True)
    app.boot()

Modules:
    framework: :func:`initialize` and :class:`ComponentFramework`.
    scanner: Directory scanning and the directory-to-name transform.
    namespaces: Explicit registry of hierarchical component namespaces.
    initializers: Loading of per-component ``initialize.py`` files.
    lifecycle: Two-phase ``init``/``ready`` dispatch.
    reloading: Development-mode re-dispatch on host code reloads.
    paths: Auxiliary path registration (routes, helpers, migrations).
    host: The host contract and an in-process reference host.
    models: Pydantic models shared across the package.
    config: Project settings file and precedence resolution.
    exceptions: Exception hierarchy with exit-code mapping.
    output: stdout/stderr formatting system with Rich support.
"""

__version__ = "0.4.0"

from componentry.exceptions import (  # noqa: E402
    ComponentNotFoundError,
    ComponentryError,
    ConfigError,
    MalformedInitializerError,
)
from componentry.framework import ComponentFramework, initialize  # noqa: E402

__all__ = [
    "ComponentFramework",
    "ComponentNotFoundError",
    "ComponentryError",
    "ConfigError",
    "MalformedInitializerError",
    "initialize",
]
