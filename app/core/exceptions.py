# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Domain error taxonomy.
Controllers translate these into HTTP status codes; the reminder tick
absorbs them so the host process never crashes.
"""


class ValidationError(ValueError):
    """Malformed or missing required input (maps to 400)."""


class NotFoundError(KeyError):
    """No document matches the lookup (maps to 404)."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message for responses.
        return str(self.args[0]) if self.args else ""


class UpstreamFailure(RuntimeError):
    """A storage or webhook call failed."""
