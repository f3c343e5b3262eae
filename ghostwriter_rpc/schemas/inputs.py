"""
Operation Input Models

Input Values for the operation catalog. Validation happens here, before any
request is built, so an invalid call never reaches the network. Unknown keys
are dropped.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, PositiveInt, field_validator, model_validator
from pydantic.alias_generators import to_camel

DEFAULT_CHAPTER_SEPARATOR = "\n\n===\n\n"


class FileUpload(BaseModel):
    """File-like input field. Its presence forces multipart encoding."""

    filename: str = Field(..., min_length=1)
    content: bytes
    content_type: str = "application/octet-stream"


class InputModel(BaseModel):
    """Base model for Input Values (camelCase wire names, unknown keys ignored)."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


# =============================================================================
# Shared Inputs
# =============================================================================


class IdInput(InputModel):
    id: int


class GhostwriterRefInput(InputModel):
    """Operations addressed by ghostwriter id (path parameter ``gwid``)."""

    gwid: int


class PaginationInput(InputModel):
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=20, ge=1, le=100)


# =============================================================================
# Ghostwriter & Original Content
# =============================================================================


class CreateGhostwriterInput(InputModel):
    name: str = Field(..., min_length=1)
    content: str = Field(..., min_length=1, description="Content samples separated by '==='")


class UpdateGhostwriterInput(IdInput):
    name: str = Field(..., min_length=1)


class AddOriginalContentInput(GhostwriterRefInput):
    content: str = Field(..., min_length=1)


# =============================================================================
# Generated Content
# =============================================================================


class GeneratedContentListInput(PaginationInput):
    writing_profile_id: int | None = None
    psy_profile_id: int | None = None
    persona_id: int | None = None
    ghostwriter_id: int | None = None


class UpdateGeneratedContentInput(IdInput):
    content: str | None = Field(default=None, min_length=1)
    user_feed_back: str | None = None
    is_training_data: bool | None = None


# =============================================================================
# Profiles
# =============================================================================


class CreatePsyProfileInput(InputModel):
    name: str = Field(..., min_length=1)
    content: str = Field(..., min_length=1)
    gw_id: str | None = None


class UpdateProfileInput(IdInput):
    name: str | None = Field(default=None, min_length=1)
    content: str | None = Field(default=None, min_length=1)


class CustomizeProfileInput(IdInput):
    modifications: str = Field(..., min_length=1)


# =============================================================================
# Content Generation
# =============================================================================


class GenerateContentInput(InputModel):
    psychology_profile_id: str = Field(..., min_length=1)
    writing_profile_id: str = Field(..., min_length=1)
    persona_profile_id: str | None = None
    gw_id: str | None = None
    topic: str | None = None
    insight_id: str | None = None

    @model_validator(mode="after")
    def require_topic_or_insight(self) -> "GenerateContentInput":
        if not (self.topic or self.insight_id):
            raise ValueError("Either topic or insightId is required")
        return self


class SaveContentInput(InputModel):
    """Generated draft to keep. ``isTrainingData`` is only sent when true."""

    content: str = Field(..., min_length=1)
    gw_id: str | None = None
    psy_profile_id: str = Field(..., min_length=1)
    writing_profile_id: str = Field(..., min_length=1)
    persona_profile_id: str | None = None
    prompt: str = Field(..., min_length=1)
    user_feedback: str | None = None
    is_training_data: bool | None = None

    @field_validator("is_training_data")
    @classmethod
    def only_when_true(cls, v: bool | None) -> bool | None:
        return True if v else None


# =============================================================================
# Personas
# =============================================================================


class CreatePersonaInput(InputModel):
    name: str = Field(..., min_length=1)
    description: str | None = None
    content: str = Field(..., min_length=1)


class ExtractPersonaInput(InputModel):
    gw_id: str = Field(..., min_length=1)


class UpdatePersonaInput(IdInput):
    name: str | None = Field(default=None, min_length=1)
    description: str | None = None
    content: str | None = Field(default=None, min_length=1)


# =============================================================================
# Resources
# =============================================================================


class UploadPdfInput(InputModel):
    pdf_file: FileUpload
    title: str = Field(..., min_length=1)
    max_pages: PositiveInt | None = None
    encoding: Literal["utf-8", "utf-16", "ascii"] = "utf-8"


class UploadEpubInput(InputModel):
    epub_file: FileUpload
    title: str = Field(..., min_length=1)
    include_metadata: bool = False
    chapter_separator: str = DEFAULT_CHAPTER_SEPARATOR


class UploadTextInput(InputModel):
    """Plain-text resource, given inline or as an uploaded .txt file."""

    title: str = Field(..., min_length=1)
    content: str | None = Field(default=None, min_length=1)
    text_file: FileUpload | None = None

    @model_validator(mode="after")
    def require_content_or_file(self) -> "UploadTextInput":
        if self.content is None and self.text_file is None:
            raise ValueError("Either content or textFile is required")
        return self


# =============================================================================
# Insights
# =============================================================================


class ExtractInsightsInput(InputModel):
    persona_id: str = Field(..., min_length=1)
    resource_id: str = Field(..., min_length=1)
    topic: str | None = None


class InsightListInput(PaginationInput):
    persona_id: int | None = None
    resource_id: int | None = None
