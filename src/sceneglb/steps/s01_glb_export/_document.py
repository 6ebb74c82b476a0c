"""Top-level glTF JSON document assembly."""

from __future__ import annotations

from typing import Any

from ._context import ExportContext


def build_document(context: ExportContext, root_nodes: list[int]) -> dict[str, Any]:
    """Assemble the document in glTF key order.

    Mesh-related arrays are present but empty; payload description is not
    emitted yet.
    """
    return {
        "asset": {},
        "scene": 0,
        "scenes": [{"nodes": list(root_nodes)}],
        "nodes": context.nodes,
        "meshes": [],
        "accessors": [],
        "bufferViews": [],
        "buffers": [],
    }
