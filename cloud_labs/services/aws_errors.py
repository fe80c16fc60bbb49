from __future__ import annotations

from typing import Optional

from botocore.exceptions import ClientError


def error_code(exc: BaseException) -> Optional[str]:
    """Return the AWS error code carried by a botocore ClientError, if any."""

    if not isinstance(exc, ClientError):
        return None
    error = exc.response.get("Error") or {}
    code = error.get("Code")
    return str(code) if code else None


def is_error_code(exc: BaseException, *codes: str) -> bool:
    return error_code(exc) in codes
