"""Configuration for Step 00: Import scene description."""

from pydantic import BaseModel, Field


class ImportSceneConfig(BaseModel):
    allowed_suffixes: list[str] = Field(
        default=[".json", ".yaml", ".yml"], description="Accepted scene description extensions"
    )
    write_normalized: bool = Field(
        True, description="Write the validated scene as interim JSON (otherwise pass the source through)"
    )
