"""
Exceptions raised by the annotation core.

None of them is fatal to a session: each one describes a local failure
that the operator can recover from by retrying the same action.
"""


class AnnotationError(Exception):
    """Base class for annotation errors."""


class InvalidElement(AnnotationError):
    """A gesture or record produced a malformed element."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class UnknownElementType(AnnotationError):
    """A persisted record carries a type tag this version does not know."""

    def __init__(self, element_type):
        super().__init__(f"Unknown element type: {element_type!r}")
        self.element_type = element_type


class EmptyTextInput(AnnotationError):
    """A text element was placed while the text field was empty."""

    def __init__(self):
        super().__init__("Enter the label text before placing it")


class PersistFailure(AnnotationError):
    """Loading from or saving to the camera store failed."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message
