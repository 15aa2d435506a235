"""
Payload validation.

validate_submission() is total over any input: non-dict bodies, missing
keys, nulls and wrong types all produce a reason instead of raising.
parse_submission() turns a payload into a typed SubmissionIn or raises.
"""

from __future__ import annotations

import re
from typing import Any, Optional

from .errors import SubmissionValidationError
from .models import SubmissionIn
from .rules import (
    EMAIL_PATTERN,
    INVALID_EMAIL_MESSAGE,
    INVALID_NAME_MESSAGE,
    NAME_MIN_LENGTH,
)

_EMAIL_RE = re.compile(EMAIL_PATTERN)


def _field(payload: Any, key: str) -> Any:
    if isinstance(payload, dict):
        return payload.get(key)
    return None


def _encodable(value: str) -> bool:
    # lone surrogates from JSON escapes cannot be written to the UTF-8 files
    try:
        value.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


def validate_submission(payload: Any) -> Optional[str]:
    """Return None if the payload is acceptable, otherwise the first failing reason."""
    name = _field(payload, "name")
    if (
        not isinstance(name, str)
        or len(name.strip()) < NAME_MIN_LENGTH
        or not _encodable(name)
    ):
        return INVALID_NAME_MESSAGE

    email = _field(payload, "email")
    if not isinstance(email, str) or not _EMAIL_RE.fullmatch(email) or not _encodable(email):
        return INVALID_EMAIL_MESSAGE

    return None


def parse_submission(payload: Any) -> SubmissionIn:
    reason = validate_submission(payload)
    if reason is not None:
        raise SubmissionValidationError(reason)
    return SubmissionIn(name=payload["name"], email=payload["email"])
