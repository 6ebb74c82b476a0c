"""sceneglb core: pipeline runner, base step, scene model, shared contracts."""

from .step_base import BaseStep
from .contracts import PipelineConfig, StepEntry
from .pipeline_runner import run_pipeline, load_pipeline_config, load_step_config
from .logging import logging_callback, setup_logging
from .scene import Attribute, Group, GroupKind, SceneStore

__all__ = [
    "BaseStep",
    "PipelineConfig",
    "StepEntry",
    "run_pipeline",
    "load_pipeline_config",
    "load_step_config",
    "setup_logging",
    "logging_callback",
    "Attribute",
    "Group",
    "GroupKind",
    "SceneStore",
]
