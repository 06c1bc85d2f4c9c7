from typing import List, Sequence, Tuple

import numpy as np
import rerun as rr

from .engine import Symbol
from .turtle import PlantGeometry

STEM_COLOR = [110, 72, 40]
LEAF_COLOR = [90, 170, 60]
FLOWER_COLOR = [250, 230, 240]


def stem_segments(geometry: PlantGeometry) -> List[np.ndarray]:
    """Start and end point of every stem, recovered from its transform."""
    segments: List[np.ndarray] = []
    for stem in geometry.stems:
        center = stem.transform[:3, 3]
        # Local y carries the segment length
        half_axis = stem.transform[:3, 1] * 0.5
        segments.append(np.stack([center - half_axis, center + half_axis]))
    return segments


def log_geometry(geometry: PlantGeometry, entity_path: str = "plant"):
    strips = stem_segments(geometry)
    rr.log(
        f"{entity_path}/stems",
        rr.LineStrips3D(
            strips,
            radii=[stem.thickness * 0.5 for stem in geometry.stems],
            colors=STEM_COLOR,
        ),
    )
    rr.log(
        f"{entity_path}/leaves",
        rr.Points3D(
            [m[:3, 3] for m in geometry.leaves],
            radii=0.05,
            colors=LEAF_COLOR,
        ),
    )
    rr.log(
        f"{entity_path}/flowers",
        rr.Points3D(
            [m[:3, 3] for m in geometry.flowers],
            radii=0.08,
            colors=FLOWER_COLOR,
        ),
    )


def symbols_as_markdown(symbols: Sequence[Symbol]) -> str:
    tab_size = 0
    markdown_lines: List[str] = []
    for symbol in symbols:
        if symbol.name == "]":
            tab_size = max(0, tab_size - 1)

        indent = "  " * tab_size
        markdown_lines.append(f"{indent}- {str(symbol)}")

        if symbol.name == "[":
            tab_size += 1
    return "\n".join(markdown_lines)


def symbol_graph(symbols: Sequence[Symbol]) -> Tuple[List[str], List[str], List[Tuple[str, str]]]:
    """Node ids, labels and edges of the branching structure; ``]`` returns to the branch point."""
    node_ids = [str(i) for i in range(len(symbols))]
    node_labels = [str(symbol) for symbol in symbols]
    edges: List[Tuple[str, str]] = []

    branch_stack: List[int] = []

    curr_id = 0
    for next_id, next_symbol in enumerate(symbols[1:], start=1):
        if next_symbol.name == "[":
            branch_stack.append(curr_id)

        edges.append((node_ids[curr_id], node_ids[next_id]))
        curr_id = next_id

        if next_symbol.name == "]":
            if branch_stack:
                curr_id = branch_stack.pop()
    return node_ids, node_labels, edges


def log_graph(symbols: Sequence[Symbol], entity_path: str = "world_graph"):
    node_ids, node_labels, edges = symbol_graph(symbols)
    rr.log(
        entity_path,
        rr.GraphNodes(node_ids=node_ids, labels=node_labels),
        rr.GraphEdges(
            edges=edges,
            graph_type="directed",
        ),
    )


def log_as_markdown(symbols: Sequence[Symbol], entity_path: str = "markdown"):
    rr.log(
        entity_path,
        rr.TextDocument(
            symbols_as_markdown(symbols),
            media_type=rr.MediaType.MARKDOWN,
        ),
    )
