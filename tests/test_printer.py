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

"""Tests for calprint.printer."""

import os
import tempfile
import unittest
from datetime import datetime
from io import StringIO

from calprint.config import Config
from calprint.event import Event
from calprint.printer import (
    DebugPrinter,
    TemplatePrinter,
    TemplateRenderError,
    format_daterange,
)


class FormatDateRangeTests(unittest.TestCase):
    def test_no_end(self):
        self.assertEqual("3 Mar", format_daterange(datetime(2024, 3, 3), None))

    def test_same_day(self):
        self.assertEqual(
            "3 Mar", format_daterange(datetime(2024, 3, 3), datetime(2024, 3, 3)))

    def test_same_month(self):
        self.assertEqual(
            "3-5 Mar",
            format_daterange(datetime(2024, 3, 3), datetime(2024, 3, 5)))

    def test_different_month(self):
        self.assertEqual(
            "30 Mar-2 Apr",
            format_daterange(datetime(2024, 3, 30), datetime(2024, 4, 2)))


class DebugPrinterTests(unittest.TestCase):
    def test_print(self):
        f = StringIO()
        DebugPrinter().print(f, [Event(datetime(2024, 1, 1), summary="x")])
        self.assertEqual(1, len(f.getvalue().splitlines()))
        self.assertIn("summary='x'", f.getvalue())


class TemplatePrinterTests(unittest.TestCase):
    def setUp(self):
        self.events = [
            Event(datetime(2024, 1, 1, 9), summary="A", categories=["x"]),
            Event(datetime(2024, 1, 1, 10), summary="B", categories=["y"]),
            Event(datetime(2024, 1, 2), datetime(2024, 1, 4), summary="C"),
        ]

    def test_events(self):
        printer = TemplatePrinter.from_string(
            "{% for ev in events %}{{ ev.summary }};{% endfor %}")
        self.assertEqual("A;B;C;", printer.render(self.events))

    def test_split_days(self):
        printer = TemplatePrinter.from_string(
            "{% for day in events|split_days %}"
            "{{ day|length }}{% endfor %}")
        self.assertEqual("21", printer.render(self.events))

    def test_split_long_events(self):
        printer = TemplatePrinter.from_string(
            "{% for ev in events|split_long_events(split_start_prefix, "
            "split_end_prefix) %}{{ ev.summary }};{% endfor %}",
            Config(split_start_prefix="[", split_end_prefix="]"))
        self.assertEqual("A;B;[C;]C;", printer.render(self.events))

    def test_distinct_categories(self):
        printer = TemplatePrinter.from_string(
            "{{ events|distinct_categories|join(',') }}")
        self.assertEqual("x,y", printer.render(self.events))

    def test_daterange(self):
        printer = TemplatePrinter.from_string("{{ events[2]|daterange }}")
        self.assertEqual("2-4 Jan", printer.render(self.events))

    def test_print(self):
        f = StringIO()
        TemplatePrinter.from_string("{{ events|length }}\n").print(f, self.events)
        self.assertEqual("3\n", f.getvalue())

    def test_syntax_error(self):
        self.assertRaises(
            TemplateRenderError, TemplatePrinter.from_string, "{% for %}")

    def test_render_error(self):
        printer = TemplatePrinter.from_string("{{ events|split_days(1, 2, 3) }}")
        with self.assertRaises(TemplateRenderError) as cm:
            printer.render(self.events)
        self.assertIsInstance(cm.exception.error, TypeError)

    def test_filter_error(self):
        printer = TemplatePrinter.from_string(
            "{% for ev in events|split_long_events(1, 2) %}{% endfor %}")
        with self.assertRaises(TemplateRenderError) as cm:
            printer.render(self.events)
        self.assertIsInstance(cm.exception.__cause__, TypeError)

    def test_undefined_error(self):
        printer = TemplatePrinter.from_string("{{ missing.attribute }}")
        self.assertRaises(TemplateRenderError, printer.render, self.events)

    def test_from_file(self):
        with tempfile.TemporaryDirectory() as d:
            path = os.path.join(d, "list.txt")
            with open(path, "w", encoding="utf-8") as f:
                f.write("{% for ev in events %}{{ ev.summary }}\n{% endfor %}")
            printer = TemplatePrinter.from_file(path)
            self.assertEqual("A\nB\nC\n", printer.render(self.events))

    def test_from_file_html_escaped(self):
        with tempfile.TemporaryDirectory() as d:
            path = os.path.join(d, "list.html")
            with open(path, "w", encoding="utf-8") as f:
                f.write("{{ events[0].summary }}")
            printer = TemplatePrinter.from_file(path)
            events = [Event(datetime(2024, 1, 1), summary="<b>")]
            self.assertEqual("&lt;b&gt;", printer.render(events))

    def test_from_file_missing(self):
        with tempfile.TemporaryDirectory() as d:
            self.assertRaises(
                TemplateRenderError,
                TemplatePrinter.from_file,
                os.path.join(d, "missing.txt"),
            )
