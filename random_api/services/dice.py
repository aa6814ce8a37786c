"""Dice rolling on top of the ``d20`` expression engine.

``d20`` does the parsing and evaluation. This module accepts the classic
notation on top of it::

    [N]dS[k|d][h|l]K        e.g. 1d6, d20, 3d6kh2, 4d10kl3, 4d6dl1
    [N]dF                   fudge dice, each die is -1, 0 or +1

combined with ``+``/``-`` modifiers (``4dF+10``, ``2d8+3-1``). Anything else
``d20`` understands (``4d6rr1``, ``2d20pl1``, ``(1d6+2)*3``) is passed
through unchanged. Whitespace is ignored and letters are case-insensitive.
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass, field

import d20

MAX_DICE = 1000
FUDGE_OFFSET = 2

_ROLL_TERM_RE = re.compile(
    r"(?P<count>[0-9]*)d(?P<sides>[0-9]+|f|%)"
    r"(?:(?P<op>[kd])(?P<category>[hl]?)(?P<amount>[0-9]+))?"
)


class DiceError(ValueError):
    """Raised when a dice notation is invalid."""


@dataclass(frozen=True)
class RollResult:
    """Outcome of a roll.

    ``kept`` and ``dropped`` preserve the order the dice were rolled in.
    """

    total: int
    kept: list[int]
    dropped: list[int] = field(default_factory=list)

    def breakdown(self) -> str:
        """Render ``"<total> [<kept>]"`` plus ``" ([<dropped>])"`` if any were dropped."""
        text = f"{self.total} [{' '.join(map(str, self.kept))}]"
        if self.dropped:
            text += f" ([{' '.join(map(str, self.dropped))}])"
        return text


@dataclass(frozen=True)
class _Translation:
    expression: str
    fudge: list[bool]


def _check_term(count: int, sides: str, op: str | None, amount: int | None) -> None:
    if count < 1:
        raise DiceError("Count must be 1 or more")
    if count > MAX_DICE:
        raise DiceError(f"Too many dice, must be {MAX_DICE} or fewer")
    if sides.isdigit() and int(sides) < 1:
        raise DiceError("Sides must be 1 or more")
    if op == "k":
        if amount < 1:
            raise DiceError("Keep count must be 1 or more")
        if amount > count:
            raise DiceError("Cannot keep more dice than rolled")
    elif op == "d" and amount > count:
        raise DiceError("Cannot drop more dice than rolled")


def translate(notation: str) -> _Translation:
    """Rewrite classic notation into a ``d20`` expression.

    ``k`` and ``d`` default to highest and lowest; ``d`` becomes ``d20``'s
    ``p`` (drop) operator. ``NdF`` rolls ``Nd3`` and subtracts 2 per kept
    die, so totals stay correct inside larger expressions.

    Raises:
        DiceError: If a roll term is out of range.
    """
    compact = "".join(notation.split()).lower()
    fudge: list[bool] = []

    def rewrite(match: re.Match) -> str:
        count = int(match["count"]) if match["count"] else 1
        sides = match["sides"]
        op = match["op"]
        amount = int(match["amount"]) if match["amount"] is not None else None
        _check_term(count, sides, op, amount)

        selector = ""
        kept = count
        if op == "k":
            selector = f"k{match['category'] or 'h'}{amount}"
            kept = amount
        elif op == "d":
            selector = f"p{match['category'] or 'l'}{amount}"
            kept = count - amount

        fudge.append(sides == "f")
        if sides == "f":
            return f"({count}d3{selector}-{FUDGE_OFFSET * kept})"
        return f"{count}d{sides}{selector}"

    return _Translation(_ROLL_TERM_RE.sub(rewrite, compact), fudge)


def _walk_dice(node: d20.Number, kept: bool = True) -> Iterator[tuple[d20.Dice, bool]]:
    kept = kept and node.kept
    if isinstance(node, d20.Dice):
        yield node, kept
        return
    for child in node.children:
        yield from _walk_dice(child, kept)


def _collect(expr: d20.Expression, fudge: list[bool]) -> tuple[list[int], list[int]]:
    kept: list[int] = []
    dropped: list[int] = []
    for index, (dice, dice_kept) in enumerate(_walk_dice(expr.roll)):
        offset = FUDGE_OFFSET if index < len(fudge) and fudge[index] else 0
        for die in dice.values:
            value = int(die.number) - offset
            (kept if dice_kept and die.kept else dropped).append(value)
    return kept, dropped


def roll(notation: str) -> RollResult:
    """Parse and roll ``notation``.

    Raises:
        DiceError: If the notation is invalid.
    """
    translation = translate(notation)
    try:
        result = d20.roll(translation.expression)
    except d20.RollSyntaxError as exc:
        raise DiceError("Bad roll format") from exc
    except d20.TooManyRolls as exc:
        raise DiceError(f"Too many dice, must be {MAX_DICE} or fewer") from exc
    except (d20.RollError, ZeroDivisionError) as exc:
        raise DiceError(str(exc) or "Bad roll format") from exc

    kept, dropped = _collect(result.expr, translation.fudge)
    return RollResult(total=int(result.total), kept=kept, dropped=dropped)
