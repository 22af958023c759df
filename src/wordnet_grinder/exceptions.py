"""Custom exception hierarchy for wordnet-grinder."""

from __future__ import annotations


class GrinderError(Exception):
    """Base exception for all wordnet-grinder errors."""


class CompatibilityError(GrinderError):
    """Value is legal in general but excluded by a legacy-compat flag.

    Recoverable: callers drop the affected relation or frame and count the
    ``cause``.
    """

    def __init__(self, cause: str, message: str | None = None) -> None:
        self.cause = cause
        super().__init__(message or f"Not legacy compatible: {cause}")


class UnsupportedRelationError(GrinderError):
    """Relation type is not defined for the category at all."""

    def __init__(self, relation_type: str, category: str) -> None:
        self.relation_type = relation_type
        self.category = category
        super().__init__(f"pos={category} relType={relation_type}")


class UnknownIdentifierError(GrinderError):
    """Identifier outside a closed vocabulary (frame, lexfile, entity)."""

    def __init__(self, kind: str, identifier: str) -> None:
        self.kind = kind
        self.identifier = identifier
        super().__init__(f"Unknown {kind}: {identifier!r}")


class ConsistencyError(GrinderError):
    """Fatal internal inconsistency; the run must abort."""


class OffsetMismatchError(ConsistencyError):
    """Offset resolved in pass 1 disagrees with the pass 2 byte position."""

    def __init__(
        self,
        synset_id: str,
        expected: int,
        actual: int,
        previous_then: str | None = None,
        previous_now: str | None = None,
    ) -> None:
        self.synset_id = synset_id
        self.expected = expected
        self.actual = actual
        self.previous_then = previous_then
        self.previous_now = previous_now
        message = (
            f"Miscomputed offset for {synset_id}: "
            f"resolved {expected}, written at {actual}"
        )
        if previous_then is not None or previous_now is not None:
            message += f"\n[then]={previous_then!r}\n[now ]={previous_now!r}"
        super().__init__(message)


class OrderingError(ConsistencyError):
    """Two distinct senses tie under the full sense order."""


class DataImportError(GrinderError):
    """Failed to build a model from a lexical resource."""


class ParseError(GrinderError):
    """Error parsing a grind configuration."""

    def __init__(self, message: str, line: int | None = None) -> None:
        self.line = line
        super().__init__(message)
