"""I/O utilities: scene description files (JSON / YAML) <-> SceneStore."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Union

import yaml
from pydantic import BaseModel, Field, field_validator

from sceneglb.core.scene import Attribute, Group, GroupKind, SceneStore


# ── Scene description schema ─────────────────────────────────────────

class AttributeSpec(BaseModel):
    key: str
    value: str

    @field_validator("value", mode="before")
    @classmethod
    def _stringify(cls, v: Any) -> str:
        return v if isinstance(v, str) else str(v)


AttributesField = Union[list[AttributeSpec], dict[str, Any]]


def _attributes(raw: AttributesField) -> list[Attribute]:
    # Mapping form cannot carry duplicate keys; list form keeps them in order
    if isinstance(raw, dict):
        return [Attribute(str(k), v if isinstance(v, str) else str(v)) for k, v in raw.items()]
    return [Attribute(a.key, a.value) for a in raw]


class GroupSpec(BaseModel):
    name: str | None = None
    attributes: AttributesField = Field(default_factory=list)
    children: list[GroupSpec] = Field(default_factory=list)

    def _node(self) -> Group:
        return Group(GroupKind.GROUP, self.name, attributes=_attributes(self.attributes))

    def to_group(self) -> Group:
        """Build the Group subtree without recursing (nesting can be deep)."""
        root = self._node()
        stack = [(self, root)]
        while stack:
            spec, group = stack.pop()
            for child_spec in spec.children:
                child = child_spec._node()
                group.add_child(child)
                stack.append((child_spec, child))
        return root


class ModelSpec(BaseModel):
    name: str | None = None
    attributes: AttributesField = Field(default_factory=list)
    groups: list[GroupSpec] = Field(default_factory=list)

    def to_group(self) -> Group:
        return Group(
            GroupKind.MODEL,
            self.name,
            children=[g.to_group() for g in self.groups],
            attributes=_attributes(self.attributes),
        )


class FileSpec(BaseModel):
    name: str | None = None
    attributes: AttributesField = Field(default_factory=list)
    models: list[ModelSpec] = Field(default_factory=list)

    def to_group(self) -> Group:
        return Group(
            GroupKind.FILE,
            self.name,
            children=[m.to_group() for m in self.models],
            attributes=_attributes(self.attributes),
        )


class SceneSpec(BaseModel):
    """Top-level scene description: a list of files."""

    files: list[FileSpec] = Field(default_factory=list)

    def to_store(self) -> SceneStore:
        return SceneStore(roots=[f.to_group() for f in self.files])


GroupSpec.model_rebuild()


# ── Readers / writers ────────────────────────────────────────────────

def read_scene_spec(path: Path) -> SceneSpec:
    """Parse a .json/.yaml/.yml scene description into a validated SceneSpec."""
    path = Path(path)
    with open(path, encoding="utf-8") as f:
        if path.suffix.lower() == ".json":
            raw = json.load(f)
        else:
            raw = yaml.safe_load(f)
    return SceneSpec(**(raw or {}))


def scene_from_dict(data: dict[str, Any]) -> SceneStore:
    """Build a SceneStore from an already-parsed scene description."""
    return SceneSpec(**data).to_store()


def load_scene(path: Path) -> SceneStore:
    """Load a scene description file straight into a SceneStore."""
    return read_scene_spec(path).to_store()


def _node_to_dict(group: Group) -> dict[str, Any]:
    out: dict[str, Any] = {}
    if group.name is not None:
        out["name"] = group.name
    if group.attributes:
        out["attributes"] = [{"key": a.key, "value": a.value} for a in group.attributes]
    return out


def _group_to_dict(group: Group) -> dict[str, Any]:
    root = _node_to_dict(group)
    stack = [(group, root)]
    while stack:
        node, out = stack.pop()
        if node.children:
            out["children"] = []
            for child in node.children:
                entry = _node_to_dict(child)
                out["children"].append(entry)
                stack.append((child, entry))
    return root


def store_to_dict(store: SceneStore) -> dict[str, Any]:
    """Serialize a SceneStore back into the scene description layout."""
    files = []
    for file in store.roots:
        entry = _node_to_dict(file)
        entry["models"] = []
        for model in file.children:
            m = _node_to_dict(model)
            m["groups"] = [_group_to_dict(g) for g in model.children]
            entry["models"].append(m)
        files.append(entry)
    return {"files": files}


def write_scene(path: Path, store: SceneStore) -> Path:
    """Write a SceneStore as a JSON scene description."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(store_to_dict(store), f, indent=2, ensure_ascii=False)
    return path
