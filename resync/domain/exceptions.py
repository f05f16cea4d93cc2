"""Domain exceptions for resync.

These exceptions are raised by store and index adapters and by the record
source. The sync core converts the per-type ones into skip notices; only
UnknownSourceError is fatal to a run. All of them are caught at the
application boundary (CLI) and converted to user-facing messages.
"""


class ResyncDomainError(Exception):
    """Base exception for all domain errors.

    Attributes:
        message: User-facing error message.
        hint: Optional actionable suggestion.
    """

    def __init__(self, message: str, hint: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.hint = hint


class UnknownSourceError(ResyncDomainError):
    """Raised when the requested source kind is not recognized."""

    def __init__(self, source_kind: str, known: tuple[str, ...]) -> None:
        self.source_kind = source_kind
        super().__init__(
            f"Unknown source {source_kind}",
            hint=f"Use one of: {', '.join(known)}",
        )


class RepositoryNotFoundError(ResyncDomainError):
    """Raised when no repository exists for a type under the selected source."""

    def __init__(self, type_name: str, source_kind: str, reason: str = "") -> None:
        self.type_name = type_name
        self.source_kind = source_kind
        detail = f": {reason}" if reason else ""
        super().__init__(
            f'No repository found for "{type_name}" in {source_kind} source{detail}',
            hint="Check the entity name and the configured source",
        )


class NoIdentifierError(ResyncDomainError):
    """Raised when a type's store metadata exposes no identifier field."""

    def __init__(self, type_name: str) -> None:
        self.type_name = type_name
        super().__init__(f"No primary key found for entity {type_name}")


class MetadataNotFoundError(ResyncDomainError):
    """Raised when a type is not configured for indexing."""

    def __init__(self, type_name: str) -> None:
        self.type_name = type_name
        super().__init__(
            f"Entity {type_name} is not configured for indexing",
            hint=f"Add an [entities.{type_name}] section to the config",
        )
