"""I/O contracts for Step 01: GLB export (scene description -> .glb)."""

from pathlib import Path

from pydantic import BaseModel, Field


class GlbExportInput(BaseModel):
    scene_path: Path = Field(..., description="Path to scene description (.json/.yaml) from s00")


class GlbExportOutput(BaseModel):
    glb_path: Path = Field(..., description="Path to exported .glb file")
    num_nodes: int = Field(0, description="Number of glTF nodes (one per group)")
    num_root_nodes: int = Field(0, description="Number of nodes referenced by the scene")
    json_chunk_bytes: int = Field(0, description="Padded JSON chunk length")
    bin_chunk_bytes: int = Field(0, description="Padded BIN chunk length")
    total_bytes: int = Field(0, description="Container size in bytes")
