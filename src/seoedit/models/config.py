"""Configuration models for the SEO editor."""

from pydantic import BaseModel, Field, ValidationError


class NamesConfig(BaseModel):
    """Default names given to new entities."""

    initial_page: str = Field(
        default="首頁",
        description="Name of the page in a fresh document (and of the page created for orphan blocks on import)"
    )

    new_page: str = Field(
        default="新頁面",
        description="Name given by AddPage"
    )

    new_block: str = Field(
        default="新區塊",
        description="Name given by AddBlock"
    )

    model_config = {"frozen": True}


class ExportConfig(BaseModel):
    """Settings for the markdown export."""

    title: str = Field(
        default="SEO Content",
        description="Leading '# ' title line; empty string omits it"
    )

    filename_prefix: str = Field(
        default="seo-content",
        min_length=1,
        description="Export files are named '<prefix>-YYYY-MM-DD.md'"
    )

    model_config = {"frozen": True}


class EditingConfig(BaseModel):
    """Edit lock behaviour."""

    exclusive_lock: bool = Field(
        default=True,
        description="Refuse to open a tag for editing while another one is open"
    )

    model_config = {"frozen": True}


class Config(BaseModel):
    """Root configuration for the SEO editor."""

    names: NamesConfig = Field(default_factory=NamesConfig, description="Default names")
    export: ExportConfig = Field(default_factory=ExportConfig, description="Export settings")
    editing: EditingConfig = Field(default_factory=EditingConfig, description="Editing settings")

    @classmethod
    def from_dict(cls, data: dict) -> "Config":
        """Validate raw config data, reporting problems as ValueError."""
        if not isinstance(data, dict):
            raise ValueError(f"Configuration must be a mapping, got {type(data).__name__}")
        try:
            return cls(**data)
        except ValidationError as e:
            raise ValueError(str(e)) from e

    model_config = {"frozen": True}
