"""
Module: composer.errors

Purpose:
    Exceptions raised while composing a single document. Every error is
    terminal for that document only; the batch carries on.

Key Classes:
    - ComposerError: Base class
    - SourceLoadError: Input could not be parsed or opened
    - EmptyDocumentError: Input has no pages
    - CompositionError: Embedding or placing a page failed
    - SerializationError: Output bytes could not be produced
"""


class ComposerError(Exception):
    """Error while composing a document."""
    pass


class SourceLoadError(ComposerError):
    """Source document is malformed, unreadable or password protected."""
    pass


class EmptyDocumentError(ComposerError):
    """Source document has no pages."""
    pass


class CompositionError(ComposerError):
    """Failure while embedding or transforming source pages."""
    pass


class SerializationError(ComposerError):
    """Failure producing the final output bytes."""
    pass
