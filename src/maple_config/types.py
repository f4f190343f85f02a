"""Sort criteria used by the matcher to break ties between results."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar


class CriterionKind(Enum):
    """Attribute of a matched item that results can be ordered by."""

    SCORE = "score"
    BEGIN = "begin"  # start offset of the match
    END = "end"  # end offset of the match
    LENGTH = "length"  # length of the matched line


@dataclass(frozen=True)
class RankCriterion:
    """One tiebreak criterion, ascending or descending.

    The token form is the criterion name, prefixed with ``-`` for the
    descending order, e.g. ``-begin``.
    """

    kind: CriterionKind
    descending: bool = False

    SCORE: ClassVar[RankCriterion]
    BEGIN: ClassVar[RankCriterion]
    END: ClassVar[RankCriterion]
    LENGTH: ClassVar[RankCriterion]

    def __str__(self) -> str:
        prefix = "-" if self.descending else ""
        return f"{prefix}{self.kind.value}"

    def reversed(self) -> RankCriterion:
        """Return the same criterion with the opposite order."""
        return RankCriterion(self.kind, not self.descending)


RankCriterion.SCORE = RankCriterion(CriterionKind.SCORE)
RankCriterion.BEGIN = RankCriterion(CriterionKind.BEGIN)
RankCriterion.END = RankCriterion(CriterionKind.END)
RankCriterion.LENGTH = RankCriterion(CriterionKind.LENGTH)


def parse_criteria(token: str) -> RankCriterion | None:
    """Parse a single tiebreak token.

    Args:
        token: Criterion name, optionally prefixed with ``-``

    Returns:
        The parsed criterion, or None if the token is not recognized
    """
    descending = token.startswith("-")
    name = token[1:] if descending else token
    try:
        kind = CriterionKind(name)
    except ValueError:
        return None
    return RankCriterion(kind, descending)
