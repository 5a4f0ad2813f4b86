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

"""Calendar events and their ordering."""

import functools
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Optional

from .stringset import sorted_unique


@dataclass
class Event:
    """A normalized calendar event.

    ``end`` is None for events without an end. For all-day events it holds
    the last day the event covers, not the day after.
    """

    start: datetime
    end: Optional[datetime] = None
    uid: str = ""
    description: str = ""
    location: str = ""
    summary: str = ""
    categories: list[str] = field(default_factory=list)
    all_day: bool = False

    def __post_init__(self) -> None:
        self.categories = sorted_unique(self.categories)
        if self.end is not None and self.end == self.start:
            self.end = None

    @property
    def has_end(self) -> bool:
        return self.end is not None


LessFunction = Callable[[Event, Event], bool]


def by_start(a: Event, b: Event) -> bool:
    return a.start < b.start


def by_end(a: Event, b: Event) -> bool:
    # Events without an end sort first.
    if a.end is None:
        return b.end is not None
    if b.end is None:
        return False
    return a.end < b.end


def by_uid(a: Event, b: Event) -> bool:
    return a.uid < b.uid


def by_summary(a: Event, b: Event) -> bool:
    return a.summary < b.summary


def by_description(a: Event, b: Event) -> bool:
    return a.description < b.description


def by_location(a: Event, b: Event) -> bool:
    return a.location < b.location


def by_categories(a: Event, b: Event) -> bool:
    """Compare category lists element by element; a prefix sorts first."""
    return a.categories < b.categories


DEFAULT_ORDER: tuple[LessFunction, ...] = (
    by_start,
    by_description,
    by_location,
    by_categories,
    by_summary,
    by_end,
    by_uid,
)


def chain(*less: LessFunction) -> LessFunction:
    """Combine comparators, later ones breaking ties of earlier ones.

    When every comparator but the last one ties, the result of the last
    comparator is returned unchanged. If that comparator is not a strict
    weak ordering, neither is the combination.

    Args:
      less: Comparators, most significant first
    Returns: a single comparator
    """

    def combined(a: Event, b: Event) -> bool:
        if not less:
            return False
        for fn in less[:-1]:
            if fn(a, b):
                return True
            if fn(b, a):
                return False
        return less[-1](a, b)

    return combined


def sort_events(events, *less: LessFunction) -> list[Event]:
    """Sort events.

    The sort is stable, so events that compare equal keep their relative
    order.

    Args:
      events: Iterable over events
      less: Comparators to sort by; defaults to DEFAULT_ORDER
    Returns: a new sorted list
    """
    combined = chain(*(less or DEFAULT_ORDER))

    def cmp(a, b):
        if combined(a, b):
            return -1
        if combined(b, a):
            return 1
        return 0

    return sorted(events, key=functools.cmp_to_key(cmp))
