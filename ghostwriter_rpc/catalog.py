"""
Operation Catalog - the fixed registry of Remote Content API operations.

Built once at import time and exposed read-only. Adding a remote capability
means adding an entry here; existing entries are never changed in place.
"""

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from .errors import OperationNotFoundError
from .operations import Encoding, Operation
from .schemas import entities as e
from .schemas import inputs as i

_OPERATIONS: list[Operation] = [
    # =========================================================================
    # Core Data
    # =========================================================================
    Operation(
        "listAll",
        "GET",
        "gw",
        output=list[e.UserData],
        description="All ghostwriters, profiles, personas and resources of the user",
    ),
    # =========================================================================
    # Ghostwriter Lifecycle
    # =========================================================================
    Operation(
        "ghostwriter.create",
        "POST",
        "gw",
        output=e.GhostwriterBundle,
        input_model=i.CreateGhostwriterInput,
        long_running=True,
        description="Create a ghostwriter and generate its profiles from samples",
    ),
    Operation(
        "ghostwriter.get",
        "GET",
        "gw/ghostwriter/{id}",
        output=e.GhostwriterDetail,
        input_model=i.IdInput,
    ),
    Operation(
        "ghostwriter.update",
        "PATCH",
        "gw/ghostwriter/{id}",
        output=e.Ghostwriter,
        input_model=i.UpdateGhostwriterInput,
    ),
    Operation(
        "ghostwriter.delete",
        "DELETE",
        "gw/ghostwriter/{id}",
        output=Any,
        input_model=i.IdInput,
        description="Delete a ghostwriter and all associated data",
    ),
    Operation(
        "originalContent.get",
        "GET",
        "gw/original-content/{gwid}",
        output=list[e.OriginalContent],
        input_model=i.GhostwriterRefInput,
    ),
    Operation(
        "originalContent.add",
        "POST",
        "gw/original-content/{gwid}",
        output=e.SuccessFlag,
        input_model=i.AddOriginalContentInput,
    ),
    # =========================================================================
    # Generated Content
    # =========================================================================
    Operation(
        "generatedContent.list",
        "GET",
        "gw/generated-content",
        output=list[e.GeneratedContent],
        input_model=i.GeneratedContentListInput,
        paginated=True,
    ),
    Operation(
        "generatedContent.get",
        "GET",
        "gw/generated-content/{gwid}",
        output=list[e.GeneratedContent],
        input_model=i.GhostwriterRefInput,
    ),
    Operation(
        "generatedContent.update",
        "PATCH",
        "gw/generated-content/{id}",
        output=e.GeneratedContent,
        input_model=i.UpdateGeneratedContentInput,
    ),
    Operation(
        "generatedContent.delete",
        "DELETE",
        "gw/generated-content/{id}",
        output=e.DeleteResult,
        input_model=i.IdInput,
    ),
    # =========================================================================
    # Psychology Profiles
    # =========================================================================
    Operation(
        "psyProfile.create",
        "POST",
        "gw/psyprofile",
        output=list[e.PsyProfile],
        input_model=i.CreatePsyProfileInput,
        long_running=True,
    ),
    Operation(
        "psyProfile.get",
        "GET",
        "gw/psyprofile/{id}",
        output=e.PsyProfile,
        input_model=i.IdInput,
    ),
    Operation(
        "psyProfile.update",
        "PATCH",
        "gw/psyprofile/{id}",
        output=e.PsyProfile,
        input_model=i.UpdateProfileInput,
    ),
    Operation(
        "psyProfile.train",
        "POST",
        "gw/psyprofile/train/{gwid}",
        output=e.PsyProfileTraining,
        input_model=i.GhostwriterRefInput,
        long_running=True,
        description="Improve the profile from content marked as training data",
    ),
    Operation(
        "psyProfile.customize",
        "POST",
        "gw/psyprofile/customize/{id}",
        output=e.PsyProfile,
        input_model=i.CustomizeProfileInput,
        long_running=True,
    ),
    # =========================================================================
    # Writing Profiles
    # =========================================================================
    Operation(
        "writingProfile.get",
        "GET",
        "gw/writingprofile/{id}",
        output=e.WritingProfile,
        input_model=i.IdInput,
    ),
    Operation(
        "writingProfile.update",
        "PATCH",
        "gw/writingprofile/{id}",
        output=e.WritingProfile,
        input_model=i.UpdateProfileInput,
    ),
    Operation(
        "writingProfile.train",
        "POST",
        "gw/writingprofile/train/{gwid}",
        output=e.WritingProfileTraining,
        input_model=i.GhostwriterRefInput,
        long_running=True,
        description="Improve the profile from content marked as training data",
    ),
    Operation(
        "writingProfile.customize",
        "POST",
        "gw/writingprofile/customize/{id}",
        output=e.WritingProfile,
        input_model=i.CustomizeProfileInput,
        long_running=True,
    ),
    # =========================================================================
    # Content Generation
    # =========================================================================
    Operation(
        "content.generate",
        "POST",
        "gw/generate",
        output=e.GeneratedDraft,
        input_model=i.GenerateContentInput,
        long_running=True,
    ),
    Operation(
        "content.save",
        "POST",
        "gw/save-content",
        output=e.SuccessFlag,
        input_model=i.SaveContentInput,
    ),
    # =========================================================================
    # Personas
    # =========================================================================
    Operation(
        "persona.create",
        "POST",
        "gw/persona",
        output=list[e.Persona],
        input_model=i.CreatePersonaInput,
    ),
    Operation(
        "persona.extract",
        "POST",
        "gw/persona-extractor",
        output=list[e.Persona],
        input_model=i.ExtractPersonaInput,
        long_running=True,
        description="Extract personas from a ghostwriter's content",
    ),
    Operation(
        "persona.get",
        "GET",
        "gw/persona/{id}",
        output=e.Persona,
        input_model=i.IdInput,
    ),
    Operation(
        "persona.update",
        "PATCH",
        "gw/persona/{id}",
        output=e.Persona,
        input_model=i.UpdatePersonaInput,
    ),
    Operation(
        "persona.delete",
        "DELETE",
        "gw/persona/{id}",
        output=e.MessageResult,
        input_model=i.IdInput,
    ),
    # =========================================================================
    # Resources
    # =========================================================================
    Operation(
        "resources.uploadPdf",
        "POST",
        "gw/pdf-resource",
        output=e.ResourceContent,
        input_model=i.UploadPdfInput,
        encoding=Encoding.MULTIPART,
        long_running=True,
    ),
    Operation(
        "resources.uploadEpub",
        "POST",
        "gw/epub-resource",
        output=e.ResourceContent,
        input_model=i.UploadEpubInput,
        encoding=Encoding.MULTIPART,
        long_running=True,
    ),
    Operation(
        "resources.uploadText",
        "POST",
        "gw/text-resource",
        output=e.ResourceContent,
        input_model=i.UploadTextInput,
        encoding=Encoding.AUTO,
        long_running=True,
        description="Create a text resource from inline content or an uploaded file",
    ),
    Operation(
        "resources.list",
        "GET",
        "gw/resources",
        output=list[e.ResourceContent],
        input_model=i.PaginationInput,
        paginated=True,
    ),
    Operation(
        "resources.get",
        "GET",
        "gw/resource/{id}",
        output=e.ResourceContent,
        input_model=i.IdInput,
    ),
    Operation(
        "resources.delete",
        "DELETE",
        "gw/resource/{id}",
        output=e.MessageResult,
        input_model=i.IdInput,
    ),
    # =========================================================================
    # Insights
    # =========================================================================
    Operation(
        "insights.extract",
        "POST",
        "gw/value-extractor",
        output=list[e.Insight],
        input_model=i.ExtractInsightsInput,
        long_running=True,
        description="Extract insights from a resource for a persona",
    ),
    Operation(
        "insights.list",
        "GET",
        "gw/insights",
        output=list[e.InsightDetail],
        input_model=i.InsightListInput,
        paginated=True,
    ),
    Operation(
        "insights.get",
        "GET",
        "gw/insight/{id}",
        output=e.InsightDetail,
        input_model=i.IdInput,
    ),
    Operation(
        "insights.delete",
        "DELETE",
        "gw/insight/{id}",
        output=e.MessageResult,
        input_model=i.IdInput,
    ),
]


def _build_registry(operations: list[Operation]) -> Mapping[str, Operation]:
    registry: dict[str, Operation] = {}
    for op in operations:
        if op.name in registry:
            raise ValueError(f"Duplicate operation name: {op.name}")
        registry[op.name] = op
    return MappingProxyType(registry)


OPERATIONS: Mapping[str, Operation] = _build_registry(_OPERATIONS)

GROUPS: tuple[str, ...] = tuple(dict.fromkeys(op.group for op in _OPERATIONS if op.group))

del _OPERATIONS


def get_operation(name: str) -> Operation:
    """Look up an operation by its dotted name.

    Raises:
        OperationNotFoundError: If no such operation exists.
    """
    try:
        return OPERATIONS[name]
    except KeyError:
        raise OperationNotFoundError(name) from None


def operations_in_group(group: str) -> list[Operation]:
    """All operations of one group, in catalog order."""
    return [op for op in OPERATIONS.values() if op.group == group]
