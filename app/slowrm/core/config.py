"""Removal configuration.

This module provides the validated, immutable configuration record that
the removal core consumes. The CLI builds it from command-line options;
nothing in the core mutates it afterwards.
"""

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from slowrm.core.errors import ConfigurationError

# Defaults mirror the command-line defaults
DEFAULT_CHUNK_MB = 128
DEFAULT_PAUSE_SECONDS = 0.1


def megabytes_to_bytes(megabytes: int) -> int:
    """Convert a whole number of megabytes to bytes.

    Args:
        megabytes: Size in megabytes. Zero is passed through unchanged.

    Returns:
        Size in bytes.
    """
    if megabytes:
        return megabytes << 20
    return 0


class RemovalConfig(BaseModel):
    """Parameters for one slowrm run.

    Attributes:
        recursive: Descend into directories below the given roots.
        chunk_bytes: Shredding step size and small-file burst threshold.
        pause_seconds: Length of every throttling pause.
        force: Report failures and keep going instead of aborting.
        one_file_system: Stay on the device each root lives on.
        roots: Paths to remove, in the order given.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    recursive: bool = False
    chunk_bytes: Annotated[
        int,
        Field(ge=0, description="Chunk threshold in bytes"),
    ] = megabytes_to_bytes(DEFAULT_CHUNK_MB)
    pause_seconds: Annotated[
        float,
        Field(ge=0.0, description="Pause length in seconds"),
    ] = DEFAULT_PAUSE_SECONDS
    force: bool = False
    one_file_system: bool = False
    roots: Annotated[
        tuple[str, ...],
        Field(min_length=1, description="Paths to remove"),
    ]

    @field_validator("roots")
    @classmethod
    def validate_roots(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        """Reject empty path strings."""
        if any(not root for root in v):
            msg = "Paths cannot be empty"
            raise ValueError(msg)
        return v

    @classmethod
    def from_options(
        cls,
        roots: list[str] | tuple[str, ...],
        *,
        recursive: bool = False,
        chunk_mb: int = DEFAULT_CHUNK_MB,
        pause_seconds: float = DEFAULT_PAUSE_SECONDS,
        force: bool = False,
        one_file_system: bool = False,
    ) -> "RemovalConfig":
        """Build a configuration from command-line style options.

        Args:
            roots: Paths to remove.
            recursive: Descend into directories.
            chunk_mb: Chunk size in whole megabytes.
            pause_seconds: Pause length in seconds.
            force: Continue on errors.
            one_file_system: Do not cross device boundaries.

        Returns:
            Validated RemovalConfig.

        Raises:
            ConfigurationError: If any option is out of range.
        """
        if chunk_mb < 0:
            raise ConfigurationError(f"Chunk size must not be negative, got {chunk_mb}")

        try:
            return cls(
                recursive=recursive,
                chunk_bytes=megabytes_to_bytes(chunk_mb),
                pause_seconds=pause_seconds,
                force=force,
                one_file_system=one_file_system,
                roots=tuple(roots),
            )
        except ValidationError as e:
            details = "; ".join(
                f"{'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}" for err in e.errors()
            )
            raise ConfigurationError(f"Invalid configuration: {details}") from e
