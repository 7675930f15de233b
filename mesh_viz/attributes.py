"""
Attribute helpers shared by nodes, edges and subgraphs.
"""

from __future__ import annotations

from typing import Mapping, MutableMapping


def apply_attributes(
    target: MutableMapping[str, str], attributes: Mapping[str, object] | None
) -> MutableMapping[str, str]:
    """
    Set every attribute of `attributes` on `target`.

    Values already present on the target are overwritten, so applying several
    buckets in sequence gives the later bucket precedence.

    Args:
        target: Attribute map of a node, edge or subgraph
        attributes: Attribute name to value; values are converted to str

    Returns:
        The target, for chaining
    """
    for name, value in (attributes or {}).items():
        target[str(name)] = str(value)
    return target
