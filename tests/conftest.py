"""Shared pytest fixtures for sceneglb tests."""

import json
from pathlib import Path

import pytest

from sceneglb.core.scene import Group, GroupKind, SceneStore


class RecordingLogger:
    """Logger callback that keeps (level, formatted message) pairs."""

    def __init__(self):
        self.records: list[tuple[int, str]] = []

    def __call__(self, level: int, fmt: str, *args) -> None:
        self.records.append((level, fmt % args if args else fmt))

    @property
    def errors(self) -> list[str]:
        return [msg for level, msg in self.records if level == 2]


@pytest.fixture
def recording_logger() -> RecordingLogger:
    return RecordingLogger()


@pytest.fixture
def data_root(tmp_path: Path) -> Path:
    """Create a temporary data root with standard directory structure."""
    for subdir in ["raw", "interim/s00_import_scene", "processed"]:
        (tmp_path / subdir).mkdir(parents=True, exist_ok=True)
    return tmp_path


@pytest.fixture
def abc_store() -> SceneStore:
    """One file, one model, groups A (unit=mm) and B with child C."""
    store = SceneStore()
    file = store.add_file("plant.rvm")
    model = file.add_child(Group(GroupKind.MODEL, "PLANT"))
    a = model.add_child(Group(GroupKind.GROUP, "A"))
    a.add_attribute("unit", "mm")
    b = model.add_child(Group(GroupKind.GROUP, "B"))
    b.add_child(Group(GroupKind.GROUP, "C"))
    return store


@pytest.fixture
def abc_scene_dict() -> dict:
    return {
        "files": [
            {
                "name": "plant.rvm",
                "models": [
                    {
                        "name": "PLANT",
                        "groups": [
                            {"name": "A", "attributes": [{"key": "unit", "value": "mm"}]},
                            {"name": "B", "children": [{"name": "C"}]},
                        ],
                    }
                ],
            }
        ]
    }


@pytest.fixture
def abc_scene_json(data_root: Path, abc_scene_dict: dict) -> Path:
    """Write the A/B/C scene description to raw/scene.json."""
    scene_file = data_root / "raw" / "scene.json"
    with open(scene_file, "w") as f:
        json.dump(abc_scene_dict, f)
    return scene_file
