"""Explicit registry of hierarchical component namespaces.

Every component name (``Clients``, ``Clients::Billing``) maps to a
:class:`Namespace` node. Nodes are created eagerly at startup by
:meth:`NamespaceRegistry.ensure`, parents before children, and are never
replaced once they exist. The lifecycle dispatcher attaches each
component's initializer handle to its node.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterator, Optional

from componentry.models import NAMESPACE_SEPARATOR

if TYPE_CHECKING:
    from componentry.initializers import InitializerHandle

_SEPARATORS = re.compile(r"::|/|\.")


@dataclass(eq=False)
class Namespace:
    """A named, initially empty namespace node.

    Attributes:
        name: Full hierarchical name (``"Clients::Billing"``).
        parent: Enclosing node, or ``None`` for a top-level namespace.
        children: Child nodes keyed by their last segment.
        initializer: Hook-bearing handle registered for the component, if any.
    """

    name: str
    parent: Optional[Namespace] = None
    children: dict[str, Namespace] = field(default_factory=dict)
    initializer: Optional[InitializerHandle] = None

    @property
    def short_name(self) -> str:
        """The last segment of :attr:`name`."""
        return self.name.rsplit(NAMESPACE_SEPARATOR, 1)[-1]

    def __repr__(self) -> str:
        return f"Namespace({self.name!r})"


def split_name(name: str) -> list[str]:
    """Split a ``::``, ``/`` or ``.`` separated name into segments."""
    segments = [s for s in _SEPARATORS.split(name.strip()) if s]
    if not segments:
        raise ValueError(f"Invalid namespace name: {name!r}")
    return segments


class NamespaceRegistry:
    """Mapping from hierarchical names to :class:`Namespace` nodes."""

    def __init__(self) -> None:
        self._nodes: dict[str, Namespace] = {}

    def ensure(self, name: str) -> Namespace:
        """Return the node for *name*, creating it and any missing parents.

        Calling this twice with the same name returns the same node.
        """
        parent: Optional[Namespace] = None
        path: list[str] = []
        for segment in split_name(name):
            path.append(segment)
            full_name = NAMESPACE_SEPARATOR.join(path)
            node = self._nodes.get(full_name)
            if node is None:
                node = Namespace(name=full_name, parent=parent)
                self._nodes[full_name] = node
                if parent is not None:
                    parent.children[segment] = node
            parent = node
        assert parent is not None
        return parent

    def get(self, name: str) -> Optional[Namespace]:
        """Return the node for *name*, or ``None`` if it was never created."""
        try:
            key = NAMESPACE_SEPARATOR.join(split_name(name))
        except ValueError:
            return None
        return self._nodes.get(key)

    def names(self) -> list[str]:
        """All registered names in creation order."""
        return list(self._nodes)

    def clear(self) -> None:
        self._nodes.clear()

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.get(name) is not None

    def __iter__(self) -> Iterator[Namespace]:
        return iter(list(self._nodes.values()))

    def __len__(self) -> int:
        return len(self._nodes)
