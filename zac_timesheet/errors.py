"""
Error taxonomy for the registration workflow.

Workflow steps raise these for the failures they recognise. ZacClient.register
captures diagnostics for any exception and re-raises it unchanged.
"""


class ZacError(Exception):
    """Base class for every failure raised by the registration workflow."""


class AuthenticationFailure(ZacError):
    """An expected login landmark never appeared."""


class FrameNotFound(ZacError):
    """The named embedded report document is absent from the page."""


class NavigationTimeout(ZacError):
    """A bounded wait for post-action navigation or a selector expired."""


class DialogRejection(ZacError):
    """The application rejected the submission through a dialog."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class UnknownFailure(ZacError):
    """Unexpected page structure, e.g. no calendar link for the target day."""
