class ResumeAnalysisError(Exception):
    """Base class for errors raised by the resume analysis pipeline."""


class DecodeError(ResumeAnalysisError):
    """The uploaded bytes are not a readable PDF document."""
