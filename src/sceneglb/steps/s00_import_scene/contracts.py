"""I/O contracts for Step 00: Import scene description."""

from pathlib import Path

from pydantic import BaseModel, Field


class ImportSceneInput(BaseModel):
    source_path: Path = Field(..., description="Scene description file (.json/.yaml)")


class ImportSceneOutput(BaseModel):
    scene_path: Path = Field(..., description="Validated scene description for s01")
    num_files: int = Field(0, description="Number of file roots")
    num_models: int = Field(0, description="Number of models across all files")
    num_groups: int = Field(0, description="Number of groups (future glTF nodes)")
