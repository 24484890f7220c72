"""Building blocks shared by the rule-based scorers."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence, Tuple


@dataclass(frozen=True)
class Finding:
    """One observation produced by a rule.

    ``kind`` says which list the message ends up in (``risk``, ``action``,
    ``warning`` and so on); ``adjustment`` is added to the baseline score.
    """

    kind: str
    message: str
    adjustment: int = 0


@dataclass(frozen=True)
class SubScore:
    value: int
    findings: Tuple[Finding, ...] = ()


def clamp(value: int, low: int = 0, high: int = 100) -> int:
    return max(low, min(high, value))


def label_for(score: int, breakpoints: Sequence[Tuple[int, str]], fallback: str) -> str:
    """Return the label of the first ``(threshold, label)`` pair with ``score >= threshold``."""
    for threshold, label in breakpoints:
        if score >= threshold:
            return label
    return fallback


def messages(findings: Iterable[Finding], kind: str) -> Tuple[str, ...]:
    return tuple(f.message for f in findings if f.kind == kind)


def total_adjustment(findings: Iterable[Finding]) -> int:
    return sum(f.adjustment for f in findings)


__all__ = ["Finding", "SubScore", "clamp", "label_for", "messages", "total_adjustment"]
