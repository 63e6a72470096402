"""
Graph inspection helpers: statistics and a log-friendly summary of
everything recorded on a tape.
"""

import logging
from collections import Counter
from typing import Dict

import numpy as np

from .tape import Tape

logger = logging.getLogger(__name__)


def get_graph_stats(tape: Tape) -> Dict:
    """
    Collect graph statistics without logging anything.

    Returns:
        dict with nodes, edges, leaves, max_fan_out, avg_fan_out and
        operations (op tag -> count, leaves excluded)
    """
    n_nodes = len(tape)
    if n_nodes == 0:
        return {
            'nodes': 0,
            'edges': 0,
            'leaves': 0,
            'max_fan_out': 0,
            'avg_fan_out': 0.0,
            'operations': {}
        }

    parent_lists = [tape.parent_indices(i) for i in range(n_nodes)]
    edges = [p for parents in parent_lists for p in parents]

    # fan-out: how many operand slots read each node
    fan_outs = np.bincount(np.asarray(edges, dtype=np.int64), minlength=n_nodes)

    op_counter = Counter(
        tape.operation(i).tag for i in range(n_nodes) if tape.operation(i) is not None
    )

    return {
        'nodes': n_nodes,
        'edges': len(edges),
        'leaves': n_nodes - sum(op_counter.values()),
        'max_fan_out': int(fan_outs.max()),
        'avg_fan_out': float(fan_outs.mean()),
        'operations': dict(op_counter)
    }


def log_graph_summary(tape: Tape, detailed: bool = False, max_nodes: int = 100) -> Dict:
    """
    Log the graph statistics at INFO level.

    Args:
        tape: tape to inspect
        detailed: also log one line per node when the tape holds at most
            `max_nodes` nodes
        max_nodes: largest tape for which the per-node lines are logged

    Returns:
        the statistics dict from get_graph_stats
    """
    stats = get_graph_stats(tape)
    if stats['nodes'] == 0:
        logger.info("empty computation graph")
        return stats

    logger.info(
        "graph: %d nodes (%d leaves), %d edges, fan-out max %d avg %.2f",
        stats['nodes'], stats['leaves'], stats['edges'],
        stats['max_fan_out'], stats['avg_fan_out'],
    )
    for tag, count in Counter(stats['operations']).most_common():
        logger.info("  %-6s %6d (%5.1f%%)", tag, count, 100.0 * count / stats['nodes'])

    if detailed and stats['nodes'] <= max_nodes:
        for node in tape.nodes():
            if node.is_leaf:
                logger.info("Node %3d: %-6s (%12.6g) [leaf]", node.index, "", node.value)
            else:
                parent_info = ", ".join(f"Node{p}" for p in node.parents)
                logger.info("Node %3d: %-6s (%12.6g) <- [%s]",
                            node.index, node.op_tag, node.value, parent_info)
    return stats
