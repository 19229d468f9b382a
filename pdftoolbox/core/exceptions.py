"""Exception hierarchy shared by the pdftoolbox components."""

from __future__ import annotations


class PdfToolboxError(Exception):
    """Base exception for all errors raised by :mod:`pdftoolbox`."""


class InputValidationError(PdfToolboxError):
    """Raised when a job receives the wrong number or kind of inputs."""


class DecodeError(PdfToolboxError):
    """Raised when source bytes cannot be decoded as a document or image."""

    def __init__(self, name: str, reason: object | None = None) -> None:
        self.name = name
        self.reason = reason
        message = f"Unable to decode {name}"
        if reason is not None:
            message = f"{message}: {reason}"
        super().__init__(message)


class EncodeError(PdfToolboxError):
    """Raised when an image or document cannot be written in the target encoding."""


class ComposeError(PdfToolboxError):
    """Raised when copying or appending pages to a destination document fails."""


class JobError(PdfToolboxError):
    """Base exception for job lifecycle violations."""


class JobInProgressError(JobError):
    """Raised when a job is triggered while another one is still running."""


class ArtifactReleasedError(JobError):
    """Raised when the outputs of a released job are accessed."""
