"""Per-export mutable state threaded through the walker and writer."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ._staging import Payload, PayloadStaging


@dataclass
class ExportContext:
    """Everything one export call accumulates. Never shared between calls."""

    include_attributes: bool = True
    nodes: list[dict[str, Any]] = field(default_factory=list)
    staging: PayloadStaging = field(default_factory=PayloadStaging)

    @property
    def data_bytes(self) -> int:
        return self.staging.data_bytes

    def add_node(self, node: dict[str, Any]) -> int:
        index = len(self.nodes)
        self.nodes.append(node)
        return index

    def add_data(self, data: Payload, own_copy: bool = False) -> int:
        return self.staging.register(data, own_copy=own_copy)
