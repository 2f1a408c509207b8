"""ASCII tree-style exporter for dependency graphs."""

from typing import List, Set, Tuple

from graph.model import DependencyGraph


# Unicode tree characters
UNICODE_BRANCH = "├── "
UNICODE_LAST = "└── "
UNICODE_VERTICAL = "│   "
UNICODE_SPACE = "    "

# ASCII fallback characters
ASCII_BRANCH = "|-- "
ASCII_LAST = "\\-- "
ASCII_VERTICAL = "|   "
ASCII_SPACE = "    "


def to_ascii(graph: DependencyGraph, root: str, style: str = "tree") -> str:
    """
    Render the dependencies of a file as a tree.

    Children appear in the order they were required. A node already shown
    on the current branch is marked with [*] and not expanded again.

    Args:
        graph: The dependency graph.
        root: The file whose dependencies are rendered.
        style: Output style - "tree" (Unicode) or "ascii" (pure ASCII).

    Returns:
        ASCII tree string.
    """
    if style == "ascii":
        chars = (ASCII_BRANCH, ASCII_LAST, ASCII_VERTICAL, ASCII_SPACE)
    else:
        chars = (UNICODE_BRANCH, UNICODE_LAST, UNICODE_VERTICAL, UNICODE_SPACE)

    lines: List[str] = []
    _render_node(graph, root, "", True, chars, set(), lines, is_root=True)
    return "\n".join(lines)


def _render_node(
    graph: DependencyGraph,
    node: str,
    prefix: str,
    is_last: bool,
    chars: Tuple[str, str, str, str],
    visited: Set[str],
    lines: List[str],
    is_root: bool = False,
) -> None:
    """Recursively render a node and its dependencies."""
    branch, last, vertical, space = chars

    is_cycle = node in visited
    cycle_marker = " [*]" if is_cycle else ""

    if is_root:
        lines.append(f"{node}{cycle_marker}")
    else:
        connector = last if is_last else branch
        lines.append(f"{prefix}{connector}{node}{cycle_marker}")

    if is_cycle:
        return

    visited.add(node)

    children = graph.get_targets(node)
    new_prefix = "" if is_root else prefix + (space if is_last else vertical)
    for index, child in enumerate(children):
        _render_node(
            graph,
            child,
            new_prefix,
            index == len(children) - 1,
            chars,
            visited,
            lines,
        )

    # Allow the same node on other branches
    visited.discard(node)
