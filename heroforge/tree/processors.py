"""
Processor targeting within one sibling array.

A processor applies to the non-processor siblings ahead of it, back to the
previous processor (or the start of the array). A sibling group counts as a
single target; the processor never reaches inside it.

    [surface-a, group-b, processor-1, surface-c, processor-2, surface-d]
      processor-1 -> surface-a, group-b
      processor-2 -> surface-c
      surface-d   -> no processor

The layer panel draws a bracket from each processor up to its targets: the
first target gets the arrow head (``is_processor_target``), and every
target gets the connecting line (``has_processor_below``).
"""

from typing import Sequence

from heroforge.layers.node import LayerNode
from heroforge.layers.processor_layer import ProcessorLayer


def _next_processor_index(siblings: Sequence[LayerNode], index: int) -> int:
    """Index of the first processor after ``index``, or -1."""
    for i in range(index + 1, len(siblings)):
        if isinstance(siblings[i], ProcessorLayer):
            return i
    return -1


def get_processor_targets(siblings: Sequence[LayerNode], processor_index: int) -> list[int]:
    """
    Get the sibling indices a processor applies to.

    Args:
        siblings: Children of one parent (or the root list)
        processor_index: Index of the processor

    Returns:
        Target indices in array order; empty when the index is not a
        processor or nothing precedes it
    """
    if not 0 <= processor_index < len(siblings):
        return []
    if not isinstance(siblings[processor_index], ProcessorLayer):
        return []

    start = processor_index
    while start > 0 and not isinstance(siblings[start - 1], ProcessorLayer):
        start -= 1
    return list(range(start, processor_index))


def get_processor_target_pairs(siblings: Sequence[LayerNode]) -> list[tuple[ProcessorLayer, list[LayerNode]]]:
    """Pair every processor in a sibling array with the nodes it applies to."""
    pairs = []
    for index, node in enumerate(siblings):
        if isinstance(node, ProcessorLayer):
            pairs.append((node, [siblings[i] for i in get_processor_targets(siblings, index)]))
    return pairs


def has_processor_below(siblings: Sequence[LayerNode], index: int) -> bool:
    """Check whether a later sibling processor applies to the node at ``index``."""
    if not 0 <= index < len(siblings):
        return False
    if isinstance(siblings[index], ProcessorLayer):
        return False
    return _next_processor_index(siblings, index) != -1


def is_processor_target(siblings: Sequence[LayerNode], index: int) -> bool:
    """
    Check whether ``index`` is the first target of the processor below it.

    Only the first non-processor after the previous processor (or the array
    start) qualifies, and only when a processor follows.
    """
    if not has_processor_below(siblings, index):
        return False
    return index == 0 or isinstance(siblings[index - 1], ProcessorLayer)
