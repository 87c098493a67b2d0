"""Data models for contentbridge.

Public API:
    ContentFile, ContentFolder - Leaf media and browse handles
    Plan, PlanSection, PlanPresentation - The presentations format
    Instructions, InstructionItem - The instructions formats
    ProviderCapabilities, ProviderInfo, AuthData - Provider description
    FormatMeta, ResolvedFormat - Resolver results
"""

from contentbridge.models.content import (
    ContentFile,
    ContentFolder,
    InstructionItem,
    Instructions,
    Plan,
    PlanPresentation,
    PlanSection,
    Playlist,
)
from contentbridge.models.enums import ActionType, ContentFormat, ItemKind, MediaType
from contentbridge.models.provider import (
    AuthData,
    ProviderCapabilities,
    ProviderInfo,
    ProviderLogos,
)
from contentbridge.models.resolved import FormatMeta, ResolvedFormat

__all__ = [
    "ActionType",
    "AuthData",
    "ContentFile",
    "ContentFolder",
    "ContentFormat",
    "FormatMeta",
    "InstructionItem",
    "Instructions",
    "ItemKind",
    "MediaType",
    "Plan",
    "PlanPresentation",
    "PlanSection",
    "Playlist",
    "ProviderCapabilities",
    "ProviderInfo",
    "ProviderLogos",
    "ResolvedFormat",
]
