# Calprint
# Copyright (C) 2016-2017 Jelmer Vernooĳ <jelmer@jelmer.uk>, et al.
#
# This program is free software; you can redistribute it and/or
# modify it under the terms of the GNU General Public License
# as published by the Free Software Foundation; version 3
# of the License or (at your option) any later version of
# the License.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program; if not, write to the Free Software
# Foundation, Inc., 51 Franklin Street, Fifth Floor, Boston,
# MA  02110-1301, USA.

"""Sets of category strings with a deterministic order."""

from collections.abc import Iterable
from typing import Callable, Optional

StringListOp = Callable[[Iterable[str], Iterable[str]], list[str]]


class StringSet(object):
    """Set of strings, iterated in lexicographic order."""

    def __init__(self, items: Optional[Iterable[str]] = None) -> None:
        self._items: dict[str, None] = {}
        if items is not None:
            self.add_all(items)

    def add(self, s: str) -> "StringSet":
        self._items[s] = None
        return self

    def add_all(self, items: Iterable[str]) -> "StringSet":
        for s in items:
            self.add(s)
        return self

    def remove(self, s: str) -> "StringSet":
        """Remove a string; removing an absent string is a no-op."""
        self._items.pop(s, None)
        return self

    def to_sorted_list(self) -> list[str]:
        return sorted(self._items)

    def __contains__(self, s) -> bool:
        return s in self._items

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self):
        return iter(self.to_sorted_list())

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.to_sorted_list()!r})"


def sorted_unique(items: Optional[Iterable[str]]) -> list[str]:
    """De-duplicate and sort a sequence of strings."""
    if items is None:
        return []
    return StringSet(items).to_sorted_list()


def union(a: Optional[Iterable[str]], b: Optional[Iterable[str]]) -> list[str]:
    """Return all strings that occur in either a or b."""
    return StringSet(a or ()).add_all(b or ()).to_sorted_list()


def subtract(a: Optional[Iterable[str]], b: Optional[Iterable[str]]) -> list[str]:
    """Return the strings of a that do not occur in b."""
    ret = StringSet(a or ())
    for s in b or ():
        ret.remove(s)
    return ret.to_sorted_list()


def intersect(a: Optional[Iterable[str]], b: Optional[Iterable[str]]) -> list[str]:
    """Return the strings of a that also occur in b.

    The candidates come from a; b is only used for membership tests. This
    is what limiting categories to an allow-list needs.
    """
    allowed = StringSet(b or ())
    return StringSet(s for s in a or () if s in allowed).to_sorted_list()


CATEGORY_OPERATIONS: dict[str, StringListOp] = {
    "+": union,
    "-": subtract,
    "=": intersect,
}
