"""Scene graph walker: File -> Model -> Group forest into a flat glTF node array.

Children are appended before their parent, so every child index is
strictly smaller than the index of the node that references it. The walk
uses an explicit stack; nesting depth is bounded only by ``max_depth``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable

from sceneglb.core.scene import Group, GroupKind

from ._context import ExportContext

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 512


class SceneStructureError(ValueError):
    """The input forest does not have the File -> Model -> Group shape."""


@dataclass
class _Frame:
    group: Group
    depth: int
    next_child: int = 0
    child_indices: list[int] = field(default_factory=list)


class SceneWalker:
    def __init__(self, context: ExportContext, max_depth: int = DEFAULT_MAX_DEPTH):
        self.context = context
        self.max_depth = max_depth
        self._visited: set[int] = set()

    def walk(self, roots: Iterable[Group]) -> list[int]:
        """Process every FILE root and return the scene's root node indices."""
        root_nodes: list[int] = []
        for file in roots:
            self._expect(file, GroupKind.FILE)
            self._process_file(file, root_nodes)
        logger.debug(
            f"Walked forest: {len(self.context.nodes)} nodes, {len(root_nodes)} roots"
        )
        return root_nodes

    def _process_file(self, file: Group, root_nodes: list[int]) -> None:
        # Files and models are not recorded as nodes; only their groups are
        for model in file.children:
            self._expect(model, GroupKind.MODEL)
            self._process_model(model, root_nodes)

    def _process_model(self, model: Group, root_nodes: list[int]) -> None:
        for group in model.children:
            root_nodes.append(self.process_group(group))

    def process_group(self, group: Group) -> int:
        """Emit the nodes for ``group`` and its subtree; return the index of ``group``."""
        self._enter(group, 0)
        stack = [_Frame(group, 0)]
        while True:
            frame = stack[-1]
            children = frame.group.children
            if frame.next_child < len(children):
                child = children[frame.next_child]
                frame.next_child += 1
                self._enter(child, frame.depth + 1)
                stack.append(_Frame(child, frame.depth + 1))
                continue

            stack.pop()
            index = self._emit(frame)
            if not stack:
                return index
            stack[-1].child_indices.append(index)

    def _enter(self, group: Group, depth: int) -> None:
        self._expect(group, GroupKind.GROUP)
        if depth >= self.max_depth:
            raise SceneStructureError(
                f"Group nesting exceeds max depth {self.max_depth} at {group.name!r}"
            )
        if id(group) in self._visited:
            raise SceneStructureError(
                f"Group {group.name!r} reached twice (cycle or shared child)"
            )
        self._visited.add(id(group))

    def _emit(self, frame: _Frame) -> int:
        group = frame.group
        node: dict[str, Any] = {}
        if group.name is not None:
            node["name"] = group.name

        if self.context.include_attributes and group.attributes:
            extras: dict[str, str] = {}
            for att in group.attributes:
                extras[att.key] = att.value
            node["extras"] = extras

        if group.children:
            node["children"] = frame.child_indices

        return self.context.add_node(node)

    @staticmethod
    def _expect(group: Group, kind: GroupKind) -> None:
        if group.kind is not kind:
            raise SceneStructureError(
                f"Expected {kind.value} node, got {group.kind.value} ({group.name!r})"
            )
