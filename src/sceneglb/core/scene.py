"""In-memory scene forest: File -> Model -> Group, with string attributes.

The exporter only reads these objects; the source system that builds them
owns them for the duration of an export.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Iterator


class GroupKind(str, enum.Enum):
    FILE = "file"
    MODEL = "model"
    GROUP = "group"


@dataclass
class Attribute:
    """A key/value pair attached to a group. Keys need not be unique."""

    key: str
    value: str


@dataclass(eq=False)
class Group:
    """A forest node. Only GROUP kinds become output nodes."""

    kind: GroupKind
    name: str | None = None
    children: list[Group] = field(default_factory=list)
    attributes: list[Attribute] = field(default_factory=list)

    def add_child(self, child: Group) -> Group:
        self.children.append(child)
        return child

    def add_attribute(self, key: str, value: str) -> None:
        self.attributes.append(Attribute(key, value))

    def iter_groups(self) -> Iterator[Group]:
        """Yield every GROUP-kind node below (and including) this one, pre-order."""
        stack = [self]
        while stack:
            node = stack.pop()
            if node.kind is GroupKind.GROUP:
                yield node
            stack.extend(reversed(node.children))


@dataclass
class SceneStore:
    """Read-only handle over the forest of FILE roots."""

    roots: list[Group] = field(default_factory=list)

    def __iter__(self) -> Iterator[Group]:
        return iter(self.roots)

    def add_file(self, name: str | None = None) -> Group:
        file = Group(GroupKind.FILE, name)
        self.roots.append(file)
        return file

    @property
    def num_files(self) -> int:
        return len(self.roots)

    @property
    def num_models(self) -> int:
        return sum(
            1 for f in self.roots for m in f.children if m.kind is GroupKind.MODEL
        )

    @property
    def num_groups(self) -> int:
        return sum(1 for f in self.roots for _ in f.iter_groups())
