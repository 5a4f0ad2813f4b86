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

"""Output of events."""

import os

import jinja2

from . import CalprintError
from . import filters


class TemplateRenderError(CalprintError):
    """A template could not be loaded or rendered."""

    def __init__(self, template_name, error) -> None:
        super().__init__(f"Error executing {template_name!r}: {error}")
        self.template_name = template_name
        self.error = error


def format_month(dt):
    return dt.strftime("%b")


def format_daterange(start, end):
    """Format the days covered by an event, e.g. "3-5 Mar"."""
    if end is None:
        return "%d %s" % (start.day, format_month(start))
    if start.year == end.year and start.month == end.month:
        if start.day == end.day:
            return "%d %s" % (start.day, format_month(start))
        return "%d-%d %s" % (start.day, end.day, format_month(start))
    return "%d %s-%d %s" % (start.day, format_month(start), end.day, format_month(end))


def create_environment(searchpath=None):
    """Create a Jinja2 environment with the event operations as filters.

    :param searchpath: Directory to load templates from
    """
    loader = jinja2.FileSystemLoader(searchpath) if searchpath is not None else None
    env = jinja2.Environment(
        loader=loader,
        autoescape=jinja2.select_autoescape(default_for_string=False),
        keep_trailing_newline=True,
    )
    env.filters.update(
        {
            "split_days": filters.split_days,
            "split_months": filters.split_months,
            "split_long_events": filters.split_long_events,
            "distinct_categories": filters.distinct_categories,
            "daterange": lambda ev: format_daterange(ev.start, ev.end),
        }
    )
    env.globals["format_daterange"] = format_daterange
    return env


class Printer(object):
    """Writes a list of events to a file."""

    def print(self, f, events):
        raise NotImplementedError(self.print)


class DebugPrinter(Printer):
    """Prints the representation of every event."""

    def print(self, f, events):
        for ev in events:
            f.write("%r\n" % (ev,))


class TemplatePrinter(Printer):
    """Renders events through a Jinja2 template.

    The template gets the events as ``events`` and, when a configuration is
    available, the split prefixes as ``split_start_prefix`` and
    ``split_end_prefix``.
    """

    def __init__(self, template, config=None):
        self.template = template
        self.config = config

    @classmethod
    def from_string(cls, text, config=None):
        env = create_environment()
        try:
            template = env.from_string(text)
        except jinja2.TemplateError as e:
            raise TemplateRenderError("<string>", e) from e
        return cls(template, config)

    @classmethod
    def from_file(cls, path, config=None):
        env = create_environment(os.path.dirname(os.path.abspath(path)))
        try:
            template = env.get_template(os.path.basename(path))
        except (jinja2.TemplateError, OSError) as e:
            raise TemplateRenderError(path, e) from e
        return cls(template, config)

    def render(self, events):
        context = {"events": events}
        if self.config is not None:
            context["split_start_prefix"] = self.config.split_start_prefix
            context["split_end_prefix"] = self.config.split_end_prefix
        try:
            return self.template.render(**context)
        except Exception as e:
            # Filters called from the template raise their own errors.
            raise TemplateRenderError(self.template.name or "<string>", e) from e

    def print(self, f, events):
        f.write(self.render(events))
