"""Pydantic models for the shipgui configuration file.

The configuration describes where the work directory lives and how the
built application tree is pruned before it is handed to packagers.
"""

from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from shipgui.models.platform import Platform, is_valid_platform


def normalize_platforms(value: Any) -> Any:
    """Normalize a ``platform`` field to a list of lowercase names.

    Accepts a single name or a list of names. Unknown names raise a
    ValueError naming the offending value; anything that is not a string
    is passed through for pydantic to reject.
    """
    if value is None:
        return None
    names = value if isinstance(value, list | tuple) else [value]
    normalized: list[Any] = []
    for name in names:
        if not isinstance(name, str):
            normalized.append(name)
            continue
        if not is_valid_platform(name):
            msg = (
                f"A pattern has an invalid platform value '{name}'. "
                "Valid options are 'macos', 'linux', or 'windows'."
            )
            raise ValueError(msg)
        normalized.append(name.lower())
    return normalized


class FilePattern(BaseModel):
    """One user-declared prune rule.

    Attributes:
        keep: Globs of files to keep.
        delete: Globs of files to reject even when matched by ``keep``.
        platform: Platforms the rule applies to. None means every platform.
    """

    model_config = ConfigDict(extra="forbid")

    keep: Annotated[list[str], Field(default_factory=list, description="Globs to keep")]
    delete: Annotated[list[str], Field(default_factory=list, description="Globs to reject")]
    platform: Annotated[
        list[Platform] | None,
        Field(description="Platforms this rule applies to"),
    ] = None

    @field_validator("platform", mode="before")
    @classmethod
    def validate_platform(cls, v: Any) -> Any:
        """Accept a single platform name or a list, in any letter case."""
        return normalize_platforms(v)

    def applies_to(self, platform: Platform) -> bool:
        """Check whether this rule is active on the given platform."""
        return self.platform is None or platform in self.platform


class CommandEntry(BaseModel):
    """A platform-restricted post-prune command.

    Attributes:
        command: Shell command line to execute.
        platform: Platforms the command runs on. None means every platform.
    """

    model_config = ConfigDict(extra="forbid")

    command: Annotated[str, Field(description="Shell command line")]
    platform: Annotated[
        list[Platform] | None,
        Field(description="Platforms this command runs on"),
    ] = None

    @field_validator("platform", mode="before")
    @classmethod
    def validate_platform(cls, v: Any) -> Any:
        """Accept a single platform name or a list, in any letter case."""
        return normalize_platforms(v)

    def applies_to(self, platform: Platform) -> bool:
        """Check whether this command runs on the given platform."""
        return self.platform is None or platform in self.platform


class PrepareConfig(BaseModel):
    """Work directory settings.

    Attributes:
        temp_directory: Base directory for temporary work files.
    """

    model_config = ConfigDict(extra="forbid")

    temp_directory: Annotated[
        str | None,
        Field(description="Base directory for temporary files"),
    ] = None


class PruneConfig(BaseModel):
    """The ``[prune]`` section.

    ``patterns`` is deliberately optional at the model level so that a
    missing field is reported by the prune preflight check with a precise
    message rather than as a generic schema error.

    Attributes:
        skip: Bypass pruning entirely.
        patterns: Ordered prune rules.
        post_prune: Commands run after a successful prune.
    """

    model_config = ConfigDict(extra="forbid")

    skip: Annotated[bool, Field(description="Skip the prune step")] = False
    patterns: Annotated[
        list[FilePattern] | None,
        Field(description="Ordered keep/delete rules"),
    ] = None
    post_prune: Annotated[
        list[str | CommandEntry],
        Field(default_factory=list, description="Commands run after pruning"),
    ]


class ShipConfig(BaseModel):
    """Complete shipgui configuration document.

    Attributes:
        prepare: Work directory settings.
        prune: Prune step settings.
    """

    model_config = ConfigDict(extra="forbid")

    prepare: Annotated[PrepareConfig, Field(default_factory=PrepareConfig)]
    prune: Annotated[PruneConfig, Field(default_factory=PruneConfig)]


def describe_validation_error(error: ValidationError) -> str:
    """Render a pydantic ValidationError as a single readable line.

    Args:
        error: Validation error raised by a config model.

    Returns:
        Messages of all errors, each prefixed with its dotted location.
    """
    messages: list[str] = []
    for item in error.errors():
        location = ".".join(str(part) for part in item["loc"])
        message = item["msg"].removeprefix("Value error, ")
        messages.append(f"{location}: {message}" if location else message)
    return "; ".join(messages)
