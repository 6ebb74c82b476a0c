"""Base class for sceneglb pipeline steps.

A step declares pydantic Input, Output and Config models. Its input names
one file (``input_path_field``) which must exist before ``run`` is called,
and its results land in a directory under ``data_root`` (``stage_dir``).
"""

from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from pathlib import Path
from typing import ClassVar, Generic, TypeVar

from pydantic import BaseModel

InputT = TypeVar("InputT", bound=BaseModel)
OutputT = TypeVar("OutputT", bound=BaseModel)
ConfigT = TypeVar("ConfigT", bound=BaseModel)

logger = logging.getLogger(__name__)


class BaseStep(ABC, Generic[InputT, OutputT, ConfigT]):
    """One stage of the scene -> GLB pipeline.

    Subclasses set ``input_type``, ``output_type``, ``config_type`` and
    ``input_path_field``, and implement ``run``. Override
    ``validate_inputs`` to add checks on top of the existence check.
    """

    name: ClassVar[str] = ""
    input_type: ClassVar[type[BaseModel]]
    output_type: ClassVar[type[BaseModel]]
    config_type: ClassVar[type[BaseModel]]
    input_path_field: ClassVar[str]

    def __init__(self, config: ConfigT, data_root: Path):
        self.config = config
        self.data_root = Path(data_root)

    @property
    def step_name(self) -> str:
        return self.name or self.__class__.__name__

    @abstractmethod
    def run(self, inputs: InputT) -> OutputT:
        ...

    def input_path(self, inputs: InputT) -> Path:
        return Path(getattr(inputs, self.input_path_field))

    def validate_inputs(self, inputs: InputT) -> bool:
        """Return False (and log why) when the input file is missing."""
        path = self.input_path(inputs)
        if not path.is_file():
            logger.error(f"[{self.step_name}] Scene description not found: {path}")
            return False
        return True

    def stage_dir(self, *parts: str) -> Path:
        """Create and return ``data_root/<parts...>``."""
        path = self.data_root.joinpath(*parts)
        path.mkdir(parents=True, exist_ok=True)
        return path

    def execute(self, inputs: InputT) -> OutputT:
        """validate_inputs + run, timed. Invalid inputs raise ValueError."""
        logger.info(f"[{self.step_name}] {self.input_path(inputs)}")
        if not self.validate_inputs(inputs):
            raise ValueError(f"[{self.step_name}] Input validation failed")

        t0 = time.perf_counter()
        result = self.run(inputs)
        logger.info(f"[{self.step_name}] Done in {time.perf_counter() - t0:.3f}s")
        return result

    @classmethod
    def required_inputs(cls) -> list[str]:
        """Input fields with no default, from the input model's JSON schema."""
        return list(cls.input_type.model_json_schema().get("required", []))
