"""
Exception hierarchy for notion-uml-proxy.

Each pipeline stage raises its own family so the request handler can map a
failure to the right caller-facing response without inspecting messages.
"""


class NotionUMLError(Exception):
    """Base class for every error raised by this package."""

    pass


class ConfigError(NotionUMLError):
    """Raised when required settings are missing or invalid."""

    pass


class ValidationError(NotionUMLError):
    """Caller input is malformed (wrong method, missing or bad parameters)."""

    pass


class FetchError(NotionUMLError):
    """Reading the diagram source from Notion failed."""

    pass


class UpstreamUnavailable(FetchError):
    pass


class UpstreamStatusError(FetchError):
    def __init__(self, status_code: int, message: str = ""):
        self.status_code = status_code
        super().__init__(message or f"Notion HTTP status: got {status_code}, expected 200")


class MalformedUpstreamResponse(FetchError):
    pass


class CompressionFailure(NotionUMLError):
    """Compressing or encoding the diagram source failed."""

    pass


class RenderError(NotionUMLError):
    """Fetching the rendered image failed."""

    pass


class RenderUnavailable(RenderError):
    pass


class RenderReadError(RenderError):
    pass


class RenderStatusError(RenderError):
    def __init__(self, status_code: int, message: str = ""):
        self.status_code = status_code
        super().__init__(message or f"Render server HTTP status: got {status_code}")
