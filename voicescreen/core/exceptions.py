"""
Domain errors raised by the interview core.

The HTTP layer maps these onto coarse status codes; none of them carry
upstream error text to the client.
"""


class InterviewError(Exception):
    """Base class for interview domain errors."""
    pass


class InvalidInput(InterviewError):
    """Bad start parameters or an empty answer."""
    pass


class InvalidState(InterviewError):
    """Operation invoked out of sequence."""
    pass


class NotStarted(InterviewError):
    """Operation requires a started interview."""
    pass


class NoData(InterviewError):
    """No interview history to work with."""
    pass


class UpstreamFailure(InterviewError):
    """The completion or speech collaborator failed."""
    pass


class TTSFailure(UpstreamFailure):
    """Speech synthesis failed."""
    pass


class ParseFailure(InterviewError):
    """A model reply did not match the expected schema."""
    pass
