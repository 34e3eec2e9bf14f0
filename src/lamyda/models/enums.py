"""Shared enums for models."""

from enum import Enum


class TeamRole(str, Enum):
    """Role of a user inside a team."""

    LEADER = "leader"
    MEMBER = "member"


class AssetKind(str, Enum):
    """What a promoted binary is to its owning process."""

    INLINE_IMAGE = "inline_image"
    DOCUMENT = "document"
    VIDEO = "video"
