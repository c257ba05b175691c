from __future__ import annotations

import json
import math
from dataclasses import dataclass
from typing import Any, Union


@dataclass(frozen=True, slots=True)
class ParseOk:
    value: Any


@dataclass(frozen=True, slots=True)
class ParseFailure:
    reason: str


ParseResult = Union[ParseOk, ParseFailure]


def _reject_constant(token: str) -> Any:
    # Python's decoder accepts NaN/Infinity/-Infinity; strict JSON does not.
    raise ValueError(f"Non-standard JSON token: {token}")


def parse_json(raw: str | None) -> ParseResult:
    """Decode a stored string; absence and malformed JSON are failures."""

    if raw is None:
        return ParseFailure("absent")
    try:
        return ParseOk(json.loads(raw, parse_constant=_reject_constant))
    except (ValueError, TypeError) as e:
        return ParseFailure(str(e))


def parse_truthy_or_null(raw: str | None) -> Any | None:
    """Parse ``raw`` and coerce failures and falsy values (0, "", false, [], {}) to None."""

    result = parse_json(raw)
    if isinstance(result, ParseFailure):
        return None
    return result.value or None


def _finite(value: Any) -> Any:
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, dict):
        return {k: _finite(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_finite(v) for v in value]
    return value


def dump_json(value: Any) -> str:
    """Encode ``value`` as strict JSON; NaN and infinities are written as null."""

    return json.dumps(_finite(value), ensure_ascii=False, allow_nan=False)
