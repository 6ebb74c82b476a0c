"""Step 01: GLB export - scene description -> glTF binary container.

Loads the File -> Model -> Group forest, walks it into glTF nodes and
writes a two-chunk GLB under processed/.
"""

from __future__ import annotations

import logging
import sys
from typing import ClassVar

from sceneglb.core.logging import logging_callback
from sceneglb.core.step_base import BaseStep
from sceneglb.utils.io import load_scene
from .config import GlbExportConfig
from .contracts import GlbExportInput, GlbExportOutput

logger = logging.getLogger(__name__)


class GlbExportStep(BaseStep[GlbExportInput, GlbExportOutput, GlbExportConfig]):
    name: ClassVar[str] = "glb_export"
    input_type: ClassVar = GlbExportInput
    output_type: ClassVar = GlbExportOutput
    config_type: ClassVar = GlbExportConfig
    input_path_field: ClassVar[str] = "scene_path"

    def run(self, inputs: GlbExportInput) -> GlbExportOutput:
        from .exporter import export_scene
        from ._glb_reader import read_glb

        output_name = self.config.output_name or f"{inputs.scene_path.stem}.glb"
        glb_path = self.stage_dir("processed") / output_name

        store = load_scene(inputs.scene_path)
        logger.info(
            f"Loaded scene: {store.num_files} files, {store.num_models} models, "
            f"{store.num_groups} groups"
        )

        ok = export_scene(
            store,
            logging_callback(logger),
            glb_path,
            include_attributes=self.config.include_attributes,
            max_depth=self.config.max_depth,
            dump_json=sys.stdout if self.config.dump_json else None,
            atomic=self.config.atomic_write,
        )
        if not ok:
            raise RuntimeError(f"GLB export failed: {glb_path}")

        glb = read_glb(glb_path)
        document = glb.json
        return GlbExportOutput(
            glb_path=glb_path,
            num_nodes=len(document["nodes"]),
            num_root_nodes=len(document["scenes"][0]["nodes"]),
            json_chunk_bytes=glb.chunks[0].length,
            bin_chunk_bytes=len(glb.bin),
            total_bytes=glb.total_length,
        )
