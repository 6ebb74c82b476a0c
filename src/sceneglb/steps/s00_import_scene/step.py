"""Step 00: Import a scene description (JSON/YAML) into the pipeline."""

from __future__ import annotations

import logging
from typing import ClassVar

from sceneglb.core.step_base import BaseStep
from sceneglb.utils.io import read_scene_spec, write_scene
from .config import ImportSceneConfig
from .contracts import ImportSceneInput, ImportSceneOutput

logger = logging.getLogger(__name__)


class ImportSceneStep(BaseStep[ImportSceneInput, ImportSceneOutput, ImportSceneConfig]):
    """Validate a scene description and hand a normalized copy to s01."""

    name: ClassVar[str] = "import_scene"
    input_type: ClassVar = ImportSceneInput
    output_type: ClassVar = ImportSceneOutput
    config_type: ClassVar = ImportSceneConfig
    input_path_field: ClassVar[str] = "source_path"

    def validate_inputs(self, inputs: ImportSceneInput) -> bool:
        if not super().validate_inputs(inputs):
            return False
        if inputs.source_path.suffix.lower() not in self.config.allowed_suffixes:
            logger.error(f"Unsupported scene description type: {inputs.source_path.suffix}")
            return False
        return True

    def run(self, inputs: ImportSceneInput) -> ImportSceneOutput:
        spec = read_scene_spec(inputs.source_path)
        store = spec.to_store()
        logger.info(
            f"Scene {inputs.source_path.name}: {store.num_files} files, "
            f"{store.num_models} models, {store.num_groups} groups"
        )

        scene_path = inputs.source_path
        if self.config.write_normalized:
            output_dir = self.stage_dir("interim", "s00_import_scene")
            scene_path = write_scene(output_dir / f"{inputs.source_path.stem}.json", store)
            logger.info(f"Saved normalized scene -> {scene_path}")

        return ImportSceneOutput(
            scene_path=scene_path,
            num_files=store.num_files,
            num_models=store.num_models,
            num_groups=store.num_groups,
        )
