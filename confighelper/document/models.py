# ConfigHelper Document Models
# Pydantic models for directory entries and drive mappings

from typing import Any

from pydantic import BaseModel, Field, field_validator


class DirectoryEntry(BaseModel):
    """A directory to process plus relative sub-paths to skip beneath it."""

    path: str = Field(default="", description="Directory path, unique within the directories section")
    exclusions: list[str] = Field(default_factory=list, description="Relative sub-paths excluded under path")

    @field_validator("exclusions", mode="before")
    @classmethod
    def clean_exclusions(cls, v: Any) -> list[str]:
        """Accept a comma-delimited string or a sequence; drop blank items."""
        if v is None:
            return []
        if isinstance(v, str):
            v = v.split(",")
        return [str(item).strip() for item in v if item is not None and str(item).strip()]

    def __str__(self) -> str:
        if not self.exclusions:
            return self.path
        return f"{self.path} (Exclusions: {', '.join(self.exclusions)})"


class DriveMapping(BaseModel):
    """A drive letter mapped to a network share."""

    drive_letter: str = Field(default="", description='Drive letter, canonically "V:"')
    unc_path: str = Field(default="", description=r'Network location, e.g. "\\server\share"')

    def __str__(self) -> str:
        return f"{self.drive_letter} -> {self.unc_path}"
