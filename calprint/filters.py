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

"""Operations on lists of events."""

import dataclasses
import itertools
import logging
from datetime import date, datetime, time

from .event import sort_events
from .stringset import CATEGORY_OPERATIONS, StringSet

logger = logging.getLogger(__name__)


def filter_time(events, extractor, value):
    """Select events by a property of their start time.

    :param events: Iterable over events
    :param extractor: Function mapping a datetime to a value, e.g. the year
    :param value: Value to select
    :return: List of events for which extractor(start) == value
    """
    return [ev for ev in events if extractor(ev.start) == value]


def _asdatetime(dt):
    if dt is None or isinstance(dt, datetime):
        return dt
    if isinstance(dt, date):
        return datetime.combine(dt, time())
    raise TypeError(dt)


def filter_between(events, start=None, end=None):
    """Select events that overlap with the window [start, end).

    Events without an end are considered to take place at their start.
    The end of an all-day event is its last day and is inclusive; the end
    of a timed event is exclusive.

    :param events: Iterable over events
    :param start: Start of the window (inclusive), None for no lower bound
    :param end: End of the window (exclusive), None for no upper bound
    :return: List of events
    """
    start = _asdatetime(start)
    end = _asdatetime(end)
    ret = []
    for ev in events:
        if end is not None and ev.start >= end:
            continue
        if start is not None:
            if ev.end is None or ev.all_day:
                if (ev.end or ev.start) < start:
                    continue
            elif ev.end <= start:
                continue
        ret.append(ev)
    return ret


def year_window(year):
    return (datetime(year, 1, 1), datetime(year + 1, 1, 1))


def month_window(year, month):
    if month == 12:
        return (datetime(year, 12, 1), datetime(year + 1, 1, 1))
    return (datetime(year, month, 1), datetime(year, month + 1, 1))


def split_months(events):
    """Group events by the month they start in.

    :return: List of 12 lists, index 0 being January
    """
    ret = [[] for i in range(12)]
    for ev in events:
        ret[ev.start.month - 1].append(ev)
    return ret


def split_days(events):
    """Sort events and group them by the day they start on.

    :return: List of lists of events, one for each day with events
    """
    return [
        list(day)
        for (_, day) in itertools.groupby(
            sort_events(events), key=lambda ev: ev.start.date()
        )
    ]


def split_long_events(events, start_prefix, end_prefix):
    """Replace events spanning several days with one event for each end.

    :param events: Iterable over events
    :param start_prefix: Prefix for the summary of the event on the first day
    :param end_prefix: Prefix for the summary of the event on the last day
    :return: Sorted list of events
    """
    ret = []
    for ev in events:
        if ev.end is None or ev.end.date() == ev.start.date():
            ret.append(ev)
            continue
        ret.append(
            dataclasses.replace(
                ev,
                end=None,
                summary=start_prefix + ev.summary,
                categories=list(ev.categories),
            )
        )
        ret.append(
            dataclasses.replace(
                ev,
                start=ev.end,
                end=None,
                summary=end_prefix + ev.summary,
                categories=list(ev.categories),
            )
        )
    return sort_events(ret)


def op_categories(events, op, *tags):
    """Change the categories of events in place.

    :param events: List of events
    :param op: Set operation, e.g. stringset.union
    :param tags: Categories to pass to op
    :return: events
    """
    if not tags:
        return events
    for ev in events:
        ev.categories = op(ev.categories, tags)
    return events


def distinct_categories(events):
    """Return all categories used by events, sorted."""
    ret = StringSet()
    for ev in events:
        ret.add_all(ev.categories)
    return ret.to_sorted_list()


def parse_category_changes(text):
    """Parse a list of category changes.

    The format is a comma separated list of categories, each prefixed with
    + (add), - (remove) or = (limit to), e.g. "+work,-home".

    :param text: Category change string
    :return: List of (operation, category) tuples
    """
    ret = []
    for i, change in enumerate((text or "").split(",")):
        change = change.strip()
        if len(change) <= 1:
            logger.debug("Ignoring empty category change #%d", i)
            continue
        opchar, category = change[0], change[1:]
        try:
            op = CATEGORY_OPERATIONS[opchar]
        except KeyError:
            logger.warning("Unknown category operation %r in %r", opchar, change)
            continue
        ret.append((op, category))
    return ret


def apply_category_changes(events, changes):
    for op, category in changes:
        op_categories(events, op, category)
    return events


def process(events, config):
    """Apply the filters and category changes from a configuration.

    :param events: List of events
    :param config: A calprint.config.Config
    :return: Sorted list of events
    """
    if config.year is not None:
        events = filter_time(events, lambda dt: dt.year, config.year)
    if config.month is not None:
        events = filter_time(events, lambda dt: dt.month, config.month)
    apply_category_changes(events, parse_category_changes(config.category_changes))
    events = sort_events(events)
    logger.debug("Selected %d events", len(events))
    return events
