"""Graph data model for storing file dependency relationships."""

from typing import Dict, List, Set


class CyclicDependencyError(Exception):
    """Raised when chain extraction walks back into a node still being visited."""

    def __init__(self, cycle: List[str]):
        self.cycle = list(cycle)
        super().__init__(f"Cyclic dependency detected: {' -> '.join(self.cycle)}")


class DependencyGraph:
    """
    A directed graph of file identities.

    An edge 'dependent -> dependency' means the dependent requires the
    dependency, so the dependency must be emitted first. Edges keep the
    order in which they were added.
    """

    def __init__(self):
        self._nodes: Dict[str, None] = {}
        self._edges: Dict[str, List[str]] = {}

    @property
    def nodes(self) -> List[str]:
        """Return all nodes in insertion order."""
        return list(self._nodes)

    @property
    def edges(self) -> Dict[str, List[str]]:
        """Return adjacency list representation of edges."""
        return {k: list(v) for k, v in self._edges.items()}

    def add_node(self, node: str) -> None:
        """Add a node to the graph."""
        self._nodes.setdefault(node, None)

    def add_edge(self, dependent: str, dependency: str) -> None:
        """
        Record that dependent requires dependency.

        Automatically adds both nodes. Re-adding an existing edge is a no-op.
        """
        self.add_node(dependent)
        self.add_node(dependency)

        targets = self._edges.setdefault(dependent, [])
        if dependency not in targets:
            targets.append(dependency)

    def get_targets(self, node: str) -> List[str]:
        """Get the direct dependencies of a node, in the order they were added."""
        return list(self._edges.get(node, []))

    def chain(self, start: str) -> List[str]:
        """
        Return every node reachable from start, dependencies first.

        The traversal is a depth-first postorder walk over each node's
        dependencies in insertion order. A node reached again through a
        different path is emitted once; a node reached again while it is
        still on the traversal stack is a cycle. The walk keeps its own
        stack, so deep chains are not bound by the recursion limit.

        Args:
            start: The node whose dependencies should be ordered.

        Returns:
            Ordered list of identities, excluding start itself.

        Raises:
            CyclicDependencyError: If a cycle is reachable from start.
        """
        result: List[str] = []
        done: Set[str] = set()
        stack: List[str] = [start]
        on_stack: Set[str] = {start}
        # Next dependency index to visit for each node on the stack
        positions: List[int] = [0]

        while stack:
            node = stack[-1]
            dependencies = self._edges.get(node, [])

            if positions[-1] == len(dependencies):
                stack.pop()
                positions.pop()
                on_stack.discard(node)
                if stack:
                    done.add(node)
                    result.append(node)
                continue

            dependency = dependencies[positions[-1]]
            positions[-1] += 1

            if dependency in on_stack:
                index = stack.index(dependency)
                raise CyclicDependencyError(stack[index:] + [dependency])
            if dependency in done:
                continue

            stack.append(dependency)
            positions.append(0)
            on_stack.add(dependency)

        return result

    def __len__(self) -> int:
        """Return the number of nodes in the graph."""
        return len(self._nodes)

    def __contains__(self, node: str) -> bool:
        """Check if a node is in the graph."""
        return node in self._nodes

    def __repr__(self) -> str:
        return f"DependencyGraph(nodes={len(self._nodes)}, edges={sum(len(t) for t in self._edges.values())})"
