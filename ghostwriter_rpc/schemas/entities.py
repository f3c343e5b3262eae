"""
Remote Content API Entity Models

Output schemas for every operation in the catalog. Attributes are
snake_case in Python and camelCase on the wire; unknown keys returned by the
API are kept so a validated value dumps back to the payload it came from.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class WireModel(BaseModel):
    """Base model for API payloads (camelCase aliases, extra keys preserved)."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )


# =============================================================================
# Core Entities
# =============================================================================


class Ghostwriter(WireModel):
    id: int
    name: str
    user_id: int
    psy_profile_id: int | None
    writing_profile_id: int | None
    created_at: str
    updated_at: str


class PsyProfile(WireModel):
    id: int
    name: str
    content: str
    user_id: int
    ghostwriter_id: int | None
    created_at: str
    updated_at: str


class WritingProfile(WireModel):
    id: int
    name: str
    content: str
    user_id: int
    ghostwriter_id: int | None
    created_at: str
    updated_at: str


class Persona(WireModel):
    id: int
    name: str
    description: str | None
    content: str
    user_id: int
    created_at: str
    updated_at: str


class OriginalContent(WireModel):
    id: int
    content: str
    ghostwriter_id: int
    created_at: str
    updated_at: str


class GeneratedContent(WireModel):
    id: int
    content: str
    prompt: str
    user_id: int
    ghostwriter_id: int | None
    writing_profile_id: int
    psy_profile_id: int
    persona_id: int | None
    user_feed_back: str | None
    is_training_data: bool
    created_at: str
    updated_at: str


class ResourceContent(WireModel):
    id: int
    title: str
    content: str
    user_id: int
    created_at: str
    updated_at: str


class Insight(WireModel):
    id: int
    title: str
    key_points: str
    raw_content: str
    user_id: int
    persona_id: int
    resource_content_id: int
    created_at: str
    updated_at: str


# =============================================================================
# Summaries (listAll)
# =============================================================================


class GhostwriterSummary(WireModel):
    id: int
    name: str
    psy_profile_id: int | None
    writing_profile_id: int | None


class ProfileSummary(WireModel):
    id: int
    name: str


class PersonaSummary(WireModel):
    id: int
    name: str
    description: str | None


class ResourceSummary(WireModel):
    id: int
    title: str


class UserData(WireModel):
    """Everything the current user owns, in summary form."""

    ghostwriters: list[GhostwriterSummary]
    psy_profiles: list[ProfileSummary]
    writing_profiles: list[ProfileSummary]
    personas: list[PersonaSummary]
    resource_contents: list[ResourceSummary]


# =============================================================================
# Composite Results
# =============================================================================


class GhostwriterBundle(WireModel):
    """Result of creating a ghostwriter: the entity plus its generated profiles."""

    ghostwriter: Ghostwriter
    psy_profile: PsyProfile
    writing_profile: WritingProfile
    original_contents: list[OriginalContent]


class GhostwriterDetail(Ghostwriter):
    original_contents: list[OriginalContent]


class InsightDetail(Insight):
    """Insight joined with the persona and resource it was extracted for."""

    persona: ProfileSummary
    resource_content: ResourceSummary


class GeneratedDraft(WireModel):
    """Unsaved content returned by content generation."""

    content: str
    writing_profile_id: str
    psychology_profile_id: str
    topic: str | None = None
    gw_id: str | None = None
    persona_profile_id: str | None = None


class PsyProfileTraining(WireModel):
    improved_psy_profile: str


class WritingProfileTraining(WireModel):
    improved_writing_profile: str


class SuccessFlag(WireModel):
    success: bool


class DeleteResult(WireModel):
    success: bool
    message: str


class MessageResult(WireModel):
    message: str
