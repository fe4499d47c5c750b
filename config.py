from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass, field
from numbers import Real
from typing import Any, Optional

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "config.json"
CONFIG_ENV_VAR = "TAX_CONFIG"


class ConfigError(Exception):
    """Raised when the bracket configuration cannot be read or parsed."""


@dataclass(frozen=True)
class TaxBracket:
    rate: float                      # percentage, e.g. 22.0 for 22%
    up_to: Optional[float] = None    # None means no upper limit (last bracket)


@dataclass
class TaxConfig:
    # Marginal brackets sorted ascending by up_to; the open-ended one goes last.
    # Default: a small three-band schedule, 10% / 20% / 30%. Only used when a
    # TaxEngine is built without a config (library use); the CLI always loads a file.
    brackets: list[TaxBracket] = field(default_factory=lambda: [
        TaxBracket(rate=10.0, up_to=10_000.0),
        TaxBracket(rate=20.0, up_to=40_000.0),
        TaxBracket(rate=30.0, up_to=None),
    ])

    @classmethod
    def from_dict(cls, data: Any) -> "TaxConfig":
        """Build a sorted config from an already-decoded JSON document."""
        return cls(brackets=sort_brackets(parse_brackets(data)))


def sort_brackets(brackets: list[TaxBracket]) -> list[TaxBracket]:
    """Ascending by up_to, with brackets that have no upper limit after all others."""
    return sorted(
        brackets,
        key=lambda b: (b.up_to is None, b.up_to if b.up_to is not None else 0.0),
    )


def _number(value: Any, name: str, index: int) -> float:
    # bool is a subclass of int; a JSON true/false is never a valid amount
    if isinstance(value, bool) or not isinstance(value, Real):
        raise ConfigError(
            f"bracket {index}: '{name}' must be a number, got {value!r}"
        )
    try:
        number = float(value)
    except OverflowError:
        number = math.inf
    if not math.isfinite(number):
        raise ConfigError(
            f"bracket {index}: '{name}' must be finite, got {value!r}"
        )
    return number


def parse_brackets(data: Any) -> list[TaxBracket]:
    """
    Convert a decoded document of the form

        {"brackets": [{"rate": 10, "up_to": 1000}, {"rate": 20}]}

    into TaxBracket objects, in document order. ``up_to`` may be absent or
    null for the open-ended bracket.
    """
    if not isinstance(data, dict):
        raise ConfigError("config must be a JSON object with a 'brackets' list")
    raw = data.get("brackets")
    if not isinstance(raw, list):
        raise ConfigError("config is missing a 'brackets' list")

    brackets = []
    for i, entry in enumerate(raw):
        if not isinstance(entry, dict):
            raise ConfigError(f"bracket {i}: expected an object, got {entry!r}")
        if "rate" not in entry:
            raise ConfigError(f"bracket {i}: missing required field 'rate'")
        rate = _number(entry["rate"], "rate", i)
        up_to = entry.get("up_to")
        if up_to is not None:
            up_to = _number(up_to, "up_to", i)
        brackets.append(TaxBracket(rate=rate, up_to=up_to))
    return brackets


def validate_brackets(brackets: list[TaxBracket]) -> list[str]:
    """
    Return human-readable descriptions of semantic problems in a sorted
    bracket list. An empty list means nothing suspicious was found.

    These are not enforced by load_config unless strict=True.
    """
    if not brackets:
        return ["no brackets defined; every income is taxed at zero"]

    issues = []
    for i, b in enumerate(brackets):
        if b.rate < 0:
            issues.append(f"bracket {i}: negative rate {b.rate:g}%")
        elif b.rate > 100:
            issues.append(f"bracket {i}: rate {b.rate:g}% exceeds 100%")
        if b.up_to is not None and b.up_to <= 0:
            issues.append(f"bracket {i}: non-positive upper bound {b.up_to:g}")

    bounds = [b.up_to for b in brackets if b.up_to is not None]
    duplicates = sorted({x for x in bounds if bounds.count(x) > 1})
    for bound in duplicates:
        issues.append(f"duplicate upper bound {bound:g}")

    open_ended = sum(1 for b in brackets if b.up_to is None)
    if open_ended > 1:
        issues.append(f"{open_ended} brackets have no upper bound; only the first is applied")
    elif open_ended == 0:
        issues.append(
            f"no open-ended top bracket; income above {max(bounds):g} is not taxed"
        )
    return issues


def _reject_constant(token: str) -> float:
    # json accepts NaN, Infinity and -Infinity, which are not valid JSON
    raise ConfigError(f"non-standard JSON constant {token}")


def load_config(path: str = DEFAULT_CONFIG_PATH, strict: bool = False) -> TaxConfig:
    """
    Read a JSON bracket file and return a TaxConfig with sorted brackets.

    Raises ConfigError if the file cannot be read, is not valid JSON, or does
    not have the expected structure. Semantic problems are logged as
    warnings, or raised as ConfigError when ``strict`` is set.
    """
    try:
        with open(path, encoding="utf-8") as fh:
            data = json.load(fh, parse_constant=_reject_constant)
    except OSError as exc:
        raise ConfigError(f"cannot read {path}: {exc.strerror or exc}") from exc
    except json.JSONDecodeError as exc:
        raise ConfigError(f"invalid JSON in {path}: {exc}") from exc
    except ConfigError as exc:
        raise ConfigError(f"invalid JSON in {path}: {exc}") from exc

    config = TaxConfig.from_dict(data)
    logger.info("Loaded %d tax brackets from %s", len(config.brackets), path)

    for issue in validate_brackets(config.brackets):
        if strict:
            raise ConfigError(f"{path}: {issue}")
        logger.warning("%s: %s", path, issue)

    return config
