# ConfigHelper Options Schema
# Pydantic models for the host options file

from pydantic import BaseModel, Field, field_validator

from confighelper.utils.paths import expand_path


class OutputConfig(BaseModel):
    """Console output configuration."""

    verbose: bool = Field(default=False, description="Show debug log lines")
    colored: bool = Field(default=True, description="Enable colored output")


class HelperConfig(BaseModel):
    """Root options model for the confighelper host."""

    document: str = Field(
        default="~/.config/confighelper/app.config",
        description="Path to the XML configuration document",
    )
    strict: bool = Field(default=True, description="Validate drive letter and UNC path formats")
    case_sensitive_paths: bool = Field(default=True, description="Compare directory paths case-sensitively")
    output: OutputConfig = Field(default_factory=OutputConfig, description="Output settings")

    @field_validator("document")
    @classmethod
    def expand_document_path(cls, v: str) -> str:
        """Expand ~ and environment variables in the document path."""
        return str(expand_path(v))
