"""Identifier normalization shared by the merger and the accessor generator.

Names are first folded to ASCII where Unicode allows it (NFKD decomposition
with combining marks dropped, so ``Café`` reads as ``Cafe`` and full-width
letters become plain ones). They are then split on every character outside
``[A-Za-z0-9]`` and re-joined as lowerCamelCase. A leading all-caps run is
folded the way acronyms usually are (``URLString`` -> ``urlString``, ``SRV``
-> ``srv``) and leading digits are dropped, so the result is safe as a symbol
in most target languages. A name made only of separators, digits or letters
without an ASCII decomposition (CJK, Cyrillic) normalizes to the empty string.
"""

from __future__ import annotations

import re
import unicodedata
from dataclasses import dataclass, field
from typing import Callable, Dict, Generic, Iterable, List, Tuple, TypeVar

from .errors import W_DUPLICATE_SYMBOL, W_EMPTY_SYMBOL

__all__ = [
    "normalize_identifier",
    "join_qualified",
    "IdentifierGroups",
    "group_by_identifier",
    "report_duplicates_and_empties",
]

T = TypeVar("T")

_SEPARATORS = re.compile(r"[^A-Za-z0-9]+")
_LEADING_UPPER = re.compile(r"[A-Z]+")


def _lower_leading(word: str) -> str:
    m = _LEADING_UPPER.match(word)
    if not m:
        return word
    run = m.group(0)
    if len(run) == len(word):
        return word.lower()
    # Keep the last capital of an acronym run when it starts the next word.
    if len(run) > 1 and word[len(run)].islower():
        return run[:-1].lower() + word[len(run) - 1 :]
    return run.lower() + word[len(run) :]


def _fold_to_ascii(name: str) -> str:
    decomposed = unicodedata.normalize("NFKD", name)
    return "".join(c for c in decomposed if not unicodedata.combining(c))


def normalize_identifier(name: str) -> str:
    words = [w for w in _SEPARATORS.split(_fold_to_ascii(name)) if w]
    if not words:
        return ""
    head = _lower_leading(words[0])
    tail = "".join(w[0].upper() + w[1:] for w in words[1:])
    return (head + tail).lstrip("0123456789")


def join_qualified(prefix: str, name: str, sep: str = ".") -> str:
    return f"{prefix}{sep}{name}" if prefix else name


@dataclass(slots=True)
class IdentifierGroups(Generic[T]):
    """Items grouped by normalized identifier, in first-seen order.

    ``uniques`` holds the first item of every non-empty identifier;
    ``duplicates`` maps an identifier to all of its items when there is more
    than one; ``empties`` are the items that normalized to nothing.
    """

    uniques: List[Tuple[str, T]] = field(default_factory=list)
    duplicates: Dict[str, List[T]] = field(default_factory=dict)
    empties: List[T] = field(default_factory=list)

    @property
    def identifiers(self) -> List[str]:
        return [ident for ident, _ in self.uniques]


def group_by_identifier(
    items: Iterable[T], key: Callable[[T], str] = str
) -> IdentifierGroups[T]:
    groups: Dict[str, List[T]] = {}
    empties: List[T] = []
    for item in items:
        ident = normalize_identifier(key(item))
        if not ident:
            empties.append(item)
            continue
        groups.setdefault(ident, []).append(item)
    result: IdentifierGroups[T] = IdentifierGroups(empties=empties)
    for ident, members in groups.items():
        result.uniques.append((ident, members[0]))
        if len(members) > 1:
            result.duplicates[ident] = members
    return result


def report_duplicates_and_empties(
    groups: IdentifierGroups,
    reporter,
    *,
    kind: str,
    scope: str,
    key: Callable[[object], str] = str,
) -> None:
    """Emit one warning per duplicated identifier and one for all empties."""
    for ident, members in groups.duplicates.items():
        names = [key(m) for m in members]
        reporter.warning(
            f"{len(names)} {kind}s in '{scope or '<root>'}' generate symbol "
            f"'{ident}'; keeping '{names[0]}', skipping: {', '.join(names[1:])}",
            code=W_DUPLICATE_SYMBOL,
            scope=scope,
            symbol=ident,
            names=names,
        )
    if groups.empties:
        names = sorted(key(m) for m in groups.empties)
        reporter.warning(
            f"Skipping {len(names)} {kind}s in '{scope or '<root>'}' because no "
            f"symbol can be generated for: {', '.join(repr(n) for n in names)}",
            code=W_EMPTY_SYMBOL,
            scope=scope,
            names=names,
        )
