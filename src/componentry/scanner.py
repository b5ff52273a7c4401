"""Directory scanner for component discovery.

Walks the components root and returns one
:class:`~componentry.models.ComponentDescriptor` per component directory:

* every immediate child directory of the root, and
* every immediate child directory of a nested-marker directory
  (``_components`` by default) found anywhere under the root.

Nested components are flattened one level into their parent's namespace::

    components/clients/                       -> Clients
    components/clients/_components/billing/   -> Clients::Billing

The result is sorted by path so that hook dispatch order is reproducible
across runs and machines.
"""

from __future__ import annotations

import re
from pathlib import Path

from componentry.exceptions import ConfigError
from componentry.models import NAMESPACE_SEPARATOR, ComponentDescriptor

_WORD_SPLIT = re.compile(r"[_\-]+")


def camelize(segment: str) -> str:
    """Convert a directory name to a namespace segment.

    ``billing`` becomes ``Billing``, ``tax_rules`` becomes ``TaxRules`` and
    ``tax-rules`` is treated the same as ``tax_rules``. Existing capitals
    inside a word are preserved (``apiV2`` becomes ``ApiV2``).
    """
    return "".join(word[:1].upper() + word[1:] for word in _WORD_SPLIT.split(segment) if word)


def component_name(base_dir: Path, path: Path, nested_marker: str = "_components") -> str:
    """Derive the hierarchical component name for *path*.

    Args:
        base_dir: The components root directory.
        path: A component directory under *base_dir*.
        nested_marker: Directory name that marks nested sub-components.

    Returns:
        The ``::``-joined, camelized name with marker segments removed.
    """
    relative = path.relative_to(base_dir)
    segments = [camelize(part) for part in relative.parts if part != nested_marker]
    return NAMESPACE_SEPARATOR.join(segments)


def _is_hidden(name: str) -> bool:
    return name.startswith(".") or (name.startswith("__") and name.endswith("__"))


def _is_candidate(path: Path) -> bool:
    return not _is_hidden(path.name) and path.is_dir()


def _candidate_dirs(base_dir: Path, nested_marker: str) -> list[Path]:
    found = [p for p in base_dir.iterdir() if _is_candidate(p)]
    for marker_dir in base_dir.glob(f"**/{nested_marker}"):
        # Only markers inside a component count; a root-level marker has no parent.
        if not marker_dir.is_dir() or marker_dir.parent == base_dir:
            continue
        if any(_is_hidden(part) for part in marker_dir.relative_to(base_dir).parts):
            continue
        found.extend(p for p in marker_dir.iterdir() if _is_candidate(p))
    return [p for p in found if p.name != nested_marker]


def scan_components(
    base_dir: Path, nested_marker: str = "_components"
) -> list[ComponentDescriptor]:
    """Discover component directories under *base_dir*.

    Args:
        base_dir: The components root directory. A missing directory yields
            an empty list.
        nested_marker: Directory name whose children are sub-components of
            the directory containing it.

    Returns:
        Descriptors sorted by path.

    Raises:
        ConfigError: If two directories map to the same component name.
    """
    base_dir = Path(base_dir).resolve()
    if not base_dir.is_dir():
        return []

    descriptors: list[ComponentDescriptor] = []
    seen: dict[str, Path] = {}
    for path in sorted(_candidate_dirs(base_dir, nested_marker), key=str):
        name = component_name(base_dir, path, nested_marker)
        if name in seen:
            raise ConfigError(
                f"Component name '{name}' is produced by both {seen[name]} and {path}"
            )
        seen[name] = path
        relative = path.relative_to(base_dir)
        descriptors.append(
            ComponentDescriptor(
                name=name,
                path=path,
                relative_path=relative.as_posix(),
                sub_component=nested_marker in relative.parts,
            )
        )
    return descriptors
