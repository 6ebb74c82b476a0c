"""Configuration for Step 01: GLB export."""

from pydantic import BaseModel, Field


class GlbExportConfig(BaseModel):
    include_attributes: bool = Field(True, description="Emit group attributes as node extras")
    max_depth: int = Field(512, ge=1, description="Maximum group nesting depth before the scene is rejected")
    dump_json: bool = Field(False, description="Pretty-print the glTF document to stdout")
    atomic_write: bool = Field(
        False, description="Write to a temporary file and rename on success"
    )
    output_name: str | None = Field(
        None, description="Output file name under processed/ (None = scene stem + .glb)"
    )
