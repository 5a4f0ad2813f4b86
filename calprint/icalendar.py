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

"""Conversion of iCalendar VEVENT components to events."""

import logging
import re
from collections import namedtuple
from datetime import datetime, time, timedelta
from typing import Optional

from icalendar.cal import Calendar
from icalendar.prop import vDate, vDatetime, vDuration

from . import CalprintError
from .event import Event

logger = logging.getLogger(__name__)

# A property value as it appears in the iCalendar text, still escaped.
RawProperty = namedtuple("RawProperty", ["value", "params"], defaults=[None])

# properties maps upper case property names to RawProperty objects, or is
# None if the component carried no properties at all.
RawEvent = namedtuple("RawEvent", ["properties"])

_TEXT_ESCAPES = {"\\": "\\", ",": ",", ";": ";", "n": "\n", "N": "\n"}
_TEXT_ESCAPE_RE = re.compile(r"\\([\\,;nN])")


class MissingPropertiesError(CalprintError):
    """An event record does not have a property table."""

    def __init__(self, record) -> None:
        super().__init__(f"Event has no properties: {record!r}")
        self.record = record


class ParseError(CalprintError):
    """A property value could not be decoded."""


class DateParseError(ParseError):
    def __init__(self, field, value, uid) -> None:
        if value is None:
            reason = "property missing"
        else:
            reason = f"invalid value {value!r}"
        super().__init__(f"failed to get {field} of event {uid!r}: {reason}")
        self.field = field
        self.value = value
        self.uid = uid


class CalendarParseError(CalprintError):
    """The calendar data could not be parsed."""


def unescape_text(text: str) -> str:
    """Undo iCalendar TEXT escaping."""
    return _TEXT_ESCAPE_RE.sub(lambda m: _TEXT_ESCAPES[m.group(1)], text)


def split_text(text: str) -> list[str]:
    """Split a comma separated list of escaped text values.

    Escaped commas do not separate values. Values are unescaped and
    stripped of surrounding whitespace; empty values are dropped.
    """
    tokens = []
    token: list[str] = []
    chars = iter(text)
    for c in chars:
        if c == "\\":
            token.append(c)
            token.append(next(chars, ""))
        elif c == ",":
            tokens.append("".join(token))
            token = []
        else:
            token.append(c)
    tokens.append("".join(token))
    ret = []
    for t in tokens:
        t = unescape_text(t).strip()
        if t:
            ret.append(t)
    return ret


def decode_date(text: str) -> tuple[datetime, bool]:
    """Decode a DATE or DATE-TIME value.

    A trailing Z is ignored, so the result is always naive. Dates are
    returned as midnight of that day.

    Args:
      text: iCalendar value
    Returns: tuple with datetime and a boolean indicating whether the value
        was a plain date
    Raises:
      ValueError: if the value can not be decoded
    """
    text = text.strip().rstrip("Z")
    if len(text) == 8:
        return datetime.combine(vDate.from_ical(text), time()), True
    return vDatetime.from_ical(text), False


def _get_text(props, name: str) -> str:
    prop = props.get(name)
    if prop is None:
        return ""
    return unescape_text(prop.value)


def _get_date(props, name: str, uid: str) -> tuple[datetime, bool]:
    value = props[name].value
    try:
        return decode_date(value)
    except ValueError as e:
        raise DateParseError(name, value, uid) from e


def _get_end(props, start: datetime, all_day: bool, uid: str):
    if props.get("DTEND") is not None:
        return _get_date(props, "DTEND", uid)
    duration = props.get("DURATION")
    if duration is None:
        return None, False
    try:
        delta = vDuration.from_ical(duration.value.strip())
    except ValueError as e:
        raise DateParseError("DURATION", duration.value, uid) from e
    whole_days = delta % timedelta(days=1) == timedelta(0)
    return start + delta, all_day and whole_days


def normalize_event(raw: RawEvent) -> Event:
    """Create an event from a raw property record.

    Args:
      raw: A RawEvent
    Returns: an Event
    Raises:
      MissingPropertiesError: if the record has no property table
      DateParseError: if DTSTART is missing or a date can not be decoded
    """
    props = raw.properties
    if props is None:
        raise MissingPropertiesError(raw)
    uid = _get_text(props, "UID")
    if props.get("DTSTART") is None:
        raise DateParseError("DTSTART", None, uid)
    start, all_day = _get_date(props, "DTSTART", uid)
    end, end_is_date = _get_end(props, start, all_day, uid)
    if end is not None and end == start:
        end = None
    if end is not None and end_is_date:
        # DTEND of an all-day event is the first day after the event.
        end -= timedelta(days=1)
    categories = props.get("CATEGORIES")
    return Event(
        start=start,
        end=end,
        uid=uid,
        description=_get_text(props, "DESCRIPTION"),
        location=_get_text(props, "LOCATION"),
        summary=_get_text(props, "SUMMARY"),
        categories=split_text(categories.value) if categories is not None else [],
        all_day=all_day,
    )


def normalize_events(raws) -> list[Event]:
    """Normalize a batch of raw records.

    Either all records are converted, or the first error is raised.
    """
    ret = [normalize_event(raw) for raw in raws]
    logger.debug("Normalized %d events", len(ret))
    return ret


def _encode_value(value) -> str:
    if isinstance(value, list):
        return ",".join(_encode_value(v) for v in value)
    ical = value.to_ical()
    if isinstance(ical, bytes):
        ical = ical.decode("utf-8")
    return ical


def _get_params(value) -> Optional[dict]:
    if isinstance(value, list):
        value = value[0] if value else None
    params = getattr(value, "params", None)
    if params is None:
        return None
    return dict(params)


def raw_event_from_component(component) -> RawEvent:
    """Extract the raw properties of a VEVENT component."""
    if len(component) == 0:
        return RawEvent(None)
    props = {}
    for name, value in component.items():
        props[name.upper()] = RawProperty(_encode_value(value), _get_params(value))
    return RawEvent(props)


def read_raw_events(data) -> list[RawEvent]:
    """Read the raw events from iCalendar data.

    Args:
      data: iCalendar data as bytes or str; may hold several calendars
    Returns: list of RawEvent objects, one per VEVENT
    Raises:
      CalendarParseError: if the data can not be parsed
    """
    try:
        calendars = Calendar.from_ical(data, multiple=True)
    except ValueError as e:
        raise CalendarParseError(f"unable to parse calendar: {e}") from e
    if not calendars:
        raise CalendarParseError("no calendar found")
    ret = []
    for calendar in calendars:
        for component in calendar.walk("VEVENT"):
            ret.append(raw_event_from_component(component))
    return ret


def read_events(data) -> list[Event]:
    """Read and normalize all events in iCalendar data."""
    return normalize_events(read_raw_events(data))
