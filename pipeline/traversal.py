"""
DOCFLOW - Execution Order
Breadth-first walk of the workflow graph from its start nodes.
"""

import logging
from collections import deque
from typing import List, Optional

from core.exceptions import CyclicGraphError, NoStartNode
from schemas.workflow_schemas import Graph, Node

logger = logging.getLogger(__name__)


def find_cycle(graph: Graph, roots: Optional[List[Node]] = None) -> Optional[List[str]]:
    """
    Return the node ids of one cycle reachable from ``roots`` (default: the
    start nodes), closed by repeating its first id, or None if there is none.
    """
    roots = graph.start_nodes() if roots is None else roots
    done = set()

    for root in roots:
        if root.id in done:
            continue
        path = [root.id]
        on_path = {root.id}
        stack = [iter(graph.outgoing_targets(root.id))]

        while stack:
            child = next(stack[-1], None)
            if child is None:
                stack.pop()
                finished = path.pop()
                on_path.discard(finished)
                done.add(finished)
                continue
            if child in on_path:
                return path[path.index(child):] + [child]
            if child in done:
                continue
            path.append(child)
            on_path.add(child)
            stack.append(iter(graph.outgoing_targets(child)))

    return None


def topological_order(graph: Graph, strict: bool = False) -> List[Node]:
    """
    Compute the execution order of ``graph``.

    Start nodes (no incoming edge) seed a FIFO queue in node order; each
    popped node is visited once and its targets are queued in edge order.
    Nodes not reachable from a start node are left out.

    With ``strict`` a reachable cycle raises CyclicGraphError instead of
    being cut short by the visited guard.
    """
    start_nodes = graph.start_nodes()
    if not start_nodes:
        raise NoStartNode()

    if strict:
        cycle = find_cycle(graph, start_nodes)
        if cycle:
            raise CyclicGraphError(cycle)

    order: List[Node] = []
    visited = set()
    queue = deque(start_nodes)

    while queue:
        node = queue.popleft()
        if node.id in visited:
            continue
        order.append(node)
        visited.add(node.id)
        for target_id in graph.outgoing_targets(node.id):
            target = graph.get_node(target_id)
            if target is not None:
                queue.append(target)

    logger.debug("[Traverse] order=%s", [n.id for n in order])
    return order
