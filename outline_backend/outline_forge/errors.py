"""Error kinds raised along the outline pipeline.

Every kind is terminal for the request; the app turns them into a plain-text
response carrying ``str(exc)`` and ``status_code``.
"""


class OutlineForgeError(Exception):
    status_code = 500


class MalformedRequestError(OutlineForgeError):
    """Request body is not the expected multipart form."""


class MethodNotAllowedError(OutlineForgeError):
    status_code = 405

    def __init__(self, message: str = "Use POST"):
        super().__init__(message)


class ConfigurationError(OutlineForgeError):
    """A required credential is missing on the server."""


class ProviderCallError(OutlineForgeError):
    """Network or provider failure during a structured call."""


class SchemaParseError(OutlineForgeError):
    """Provider output is not JSON, or not the shape the schema promised."""
