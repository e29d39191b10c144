r"""Helpers shared by the request builder, the interceptors and the
executor: argument validation, response buffering, error
classification and logging configuration."""

from __future__ import annotations

__all__ = [
    "buffer_response",
    "classify_request_error",
    "handle_missing_body_async",
    "set_log_level",
    "validate_timeout_seconds",
    "validate_url",
]

from fluenthttp.utils.exceptions import classify_request_error, handle_missing_body_async
from fluenthttp.utils.log_level import set_log_level
from fluenthttp.utils.response import buffer_response
from fluenthttp.utils.validation import validate_timeout_seconds, validate_url
