"""
Errors raised while asking the model for updated files.

Every message is written to be shown to the user as-is.
"""


class CodeUpdateError(Exception):
    """Base class for failures of a code update request"""


class GenerationBlockedError(CodeUpdateError):
    """The model returned no content (safety block, token limit, ...)"""

    def __init__(self, finish_reason):
        self.finish_reason = finish_reason
        super().__init__(f"Generation returned no content. Reason: {finish_reason}")


class ResponseFormatError(CodeUpdateError):
    """The model answered, but not with the three files we asked for"""


class UpstreamError(CodeUpdateError):
    """The Gemini API call itself failed"""
