"""Cleanup policy model.

This module defines the user-configurable policy that governs which
files and folders a cleanup run may remove and where deleted entries
go. It is stored in TOML and validated with Pydantic.
"""

from enum import Enum
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, field_validator

WILDCARD_EXTENSION = "*"


class ExcludeInclude(str, Enum):
    """Semantics of the excluded folder list.

    Attributes:
        EXCLUDE: Matching paths are never removed.
        INCLUDE: Only matching paths may be removed.
    """

    EXCLUDE = "exclude"
    INCLUDE = "include"


class DeletionDestination(str, Enum):
    """Where deleted entries go.

    Attributes:
        PERMANENT: Erase from disk.
        SYSTEM_TRASH: Move to the operating system trash.
        APP_TRASH: Move to the vault's own ``.trash`` folder.
    """

    PERMANENT = "permanent"
    SYSTEM_TRASH = "system"
    APP_TRASH = "app"


class CleanupPolicy(BaseModel):
    """Settings for a cleanup run.

    Read-only for the duration of a run.

    Attributes:
        attachment_extensions: Extensions the attachment rules apply to
            ("*" means every non-markdown extension).
        attachments_exclude_include: True if ``attachment_extensions`` is an
            allow-list, False if it is a deny-list.
        remove_folders: Also remove empty folders and single-child chains above them.
        ignored_frontmatter: Frontmatter keys that alone do not count as content.
        excluded_folders: Path prefixes (glob patterns allowed) for the path filter.
        exclude_include: Whether ``excluded_folders`` excludes or includes.
        deletion_destination: Permanent deletion, system trash or vault trash.
        deletion_confirmation: Ask before deleting anything.
    """

    model_config = ConfigDict(extra="forbid")

    attachment_extensions: Annotated[
        list[str],
        Field(
            default_factory=lambda: [WILDCARD_EXTENSION],
            description="Extensions covered by attachment cleanup",
        ),
    ]
    attachments_exclude_include: Annotated[
        bool,
        Field(description="True: extensions are an allow-list; False: a deny-list"),
    ] = True
    remove_folders: Annotated[
        bool,
        Field(description="Remove empty folders"),
    ] = True
    ignored_frontmatter: Annotated[
        list[str],
        Field(default_factory=list, description="Frontmatter keys treated as empty"),
    ]
    excluded_folders: Annotated[
        list[str],
        Field(default_factory=list, description="Folder prefixes for the path filter"),
    ]
    exclude_include: Annotated[
        ExcludeInclude,
        Field(description="Exclude or include semantics for excluded_folders"),
    ] = ExcludeInclude.EXCLUDE
    deletion_destination: Annotated[
        DeletionDestination,
        Field(description="Where deleted files go"),
    ] = DeletionDestination.APP_TRASH
    deletion_confirmation: Annotated[
        bool,
        Field(description="Ask for confirmation before deleting"),
    ] = True

    @field_validator("attachment_extensions")
    @classmethod
    def normalize_extensions(cls, value: list[str]) -> list[str]:
        """Strip leading dots, lower-case and de-duplicate extensions."""
        result: list[str] = []
        for raw in value:
            ext = raw.strip().lstrip(".").lower()
            if ext and ext not in result:
                result.append(ext)
        return result

    @field_validator("excluded_folders")
    @classmethod
    def normalize_folders(cls, value: list[str]) -> list[str]:
        """Drop blank entries and leading slashes."""
        return [folder.strip().lstrip("/") for folder in value if folder.strip().lstrip("/")]

    @field_validator("ignored_frontmatter")
    @classmethod
    def normalize_frontmatter(cls, value: list[str]) -> list[str]:
        """Drop blank keys."""
        return [key.strip() for key in value if key.strip()]
