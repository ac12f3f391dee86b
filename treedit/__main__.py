"""
Compute the edit distance between two trees stored as JSON files.

A tree file holds a root and either an edge list or a children mapping:

    {"root": "f", "edges": [["f", "d"], ["f", "e"], ["d", "a"]]}
    {"root": "f", "children": {"f": ["d", "e"], "d": ["a"]}}

Siblings are ordered as listed.
"""

import argparse
import json
import logging
import sys
from collections.abc import Hashable
from pathlib import Path
from typing import Any, Sequence

from .constants import LOG_FORMAT
from .distance import TreeEditDistance
from .errors import TreeEditError
from .trees import tree_from_children, tree_from_edges

logger = logging.getLogger(__name__)


def _check_vertex(path: Path, vertex: Any) -> Any:
    if not isinstance(vertex, Hashable):
        raise TreeEditError(f"{path}: vertex {vertex!r} must be a string or a number")
    return vertex


def load_tree(path: Path) -> tuple[dict[Any, tuple[Any, ...]], Any]:
    """Reads a tree file, returning (adjacency, root)."""
    with open(path) as f:
        data = json.load(f)

    if not isinstance(data, dict) or "root" not in data:
        raise TreeEditError(f"{path}: expected an object with a 'root' key")
    root = _check_vertex(path, data["root"])

    if "edges" in data:
        edges = data["edges"]
        if not isinstance(edges, list) or not all(
            isinstance(edge, list) and len(edge) == 2 for edge in edges
        ):
            raise TreeEditError(f"{path}: 'edges' must be a list of [u, v] pairs")
        tree = tree_from_edges(
            ((_check_vertex(path, u), _check_vertex(path, v)) for u, v in edges),
            extra_vertices=(root,),
        )
    elif "children" in data:
        children = data["children"]
        if not isinstance(children, dict) or not all(
            isinstance(kids, list) for kids in children.values()
        ):
            raise TreeEditError(
                f"{path}: 'children' must map each parent to a list of children"
            )
        for kids in children.values():
            for kid in kids:
                _check_vertex(path, kid)
        tree = tree_from_children(children)
        tree.setdefault(root, ())
    else:
        raise TreeEditError(f"{path}: expected an 'edges' or a 'children' key")

    logger.debug(f"Loaded {path}: {len(tree)} vertices, root {root!r}")
    return tree, root


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="treedit", description="Zhang-Shasha tree edit distance"
    )
    parser.add_argument("tree1", type=Path, help="Source tree JSON file")
    parser.add_argument("tree2", type=Path, help="Target tree JSON file")
    parser.add_argument(
        "--script", action="store_true", help="Print one optimal edit script"
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)
    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    try:
        tree1, root1 = load_tree(args.tree1)
        tree2, root2 = load_tree(args.tree2)
        ted = TreeEditDistance(tree1, root1, tree2, root2)
        distance = ted.distance()
        script = ted.edit_script()
    except (OSError, json.JSONDecodeError, TreeEditError) as e:
        logger.error(str(e))
        return 2

    print(distance)
    if args.script:
        for operation in script:
            print(operation)
    return 0


if __name__ == "__main__":
    sys.exit(main())
