"""Infrastructure utilities."""

from filmfinder.infrastructure.utils.log_format import format_kv, preview, redact_params  # noqa: F401

__all__ = [
    "format_kv",
    "preview",
    "redact_params",
]
