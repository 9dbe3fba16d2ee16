"""Graphviz export of declared targets."""

from collections.abc import Sequence

from ..models.target import Target

DECLARED_COLOR = "#d4edda"  # Green
ENSURED_COLOR = "#cce5ff"  # Blue
PLACEHOLDER_COLOR = "#fff3cd"  # Yellow


def _quote(name: str) -> str:
    return '"' + name.replace("\\", "\\\\").replace('"', '\\"') + '"'


def to_dot(targets: Sequence[Target]) -> str:
    """
    Generate DOT format representation of the target graph.

    Edges point from a dependency to the target that needs it, so the
    rendered graph reads in activation order. Dependency names with no
    declared target are drawn as dashed placeholders.

    Args:
        targets: Declared (and optionally synthesized) targets

    Returns:
        String containing the Graphviz DOT definition
    """
    lines = ["digraph ReqOrder {"]
    lines.append("    rankdir=LR;")
    lines.append("    node [shape=box style=filled];")

    known = {target.name for target in targets}
    placeholders: list[str] = []

    for target in targets:
        if target.synthesized:
            style = ' style="filled,dashed"'
            color = PLACEHOLDER_COLOR
        else:
            style = ""
            color = ENSURED_COLOR if target.payload.ensure else DECLARED_COLOR

        lines.append(f'    {_quote(target.name)} [fillcolor="{color}"{style}];')

        for dependency in target.dependencies:
            if dependency not in known and dependency not in placeholders:
                placeholders.append(dependency)

    for name in placeholders:
        lines.append(f'    {_quote(name)} [fillcolor="{PLACEHOLDER_COLOR}" style="filled,dashed"];')

    for target in targets:
        for dependency in target.dependencies:
            lines.append(f"    {_quote(dependency)} -> {_quote(target.name)};")

    lines.append("}")
    return "\n".join(lines)
