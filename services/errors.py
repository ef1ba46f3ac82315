# services/errors.py
"""Errors raised inside a single file's pipeline and caught at its boundary."""

from typing import Optional


class IntakeError(Exception):
    """Base class for per-file failures."""


class ExtractionFailed(IntakeError):
    """The uploaded document could not be turned into text."""


class UpstreamCallFailed(IntakeError):
    """The Brain or the Processor did not answer with a usable success response."""

    def __init__(self, service: str, message: str, status_code: Optional[int] = None, body: str = ""):
        self.service = service
        self.status_code = status_code
        self.body = body
        super().__init__(message)
