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

"""Calprint command-line handling."""

import argparse
import logging
import sys

from . import CalprintError, __version__
from .config import Config
from .filters import process
from .icalendar import read_events
from .printer import DebugPrinter, TemplatePrinter

logger = logging.getLogger("calprint")


def add_parser(parser):
    parser.add_argument(
        "--version",
        action="version",
        version="%(prog)s " + ".".join(map(str, __version__)),
    )
    parser.add_argument(
        "-d", "--debug", action="store_true", dest="debug",
        help="Print debug information.")
    parser.add_argument(
        "--config", dest="config", default=None,
        help="Configuration file to read settings from.")
    parser.add_argument(
        "-i", "--input", dest="inputs", action="append", default=[],
        help="iCalendar file to read; may be repeated. [stdin]")
    filter_group = parser.add_argument_group(title="Filter Options")
    filter_group.add_argument(
        "-y", "--year", dest="year", type=int, default=None,
        help="Limit output to events starting in this year.")
    filter_group.add_argument(
        "-m", "--month", dest="month", type=int, default=None,
        help="Limit output to events starting in this month.")
    filter_group.add_argument(
        "-c", "--categories", dest="categories", default=None,
        help=('Append (+), remove (-) or limit to (=) categories, '
              'e.g. "+cat1,-cat2,=cat3".'))
    split_group = parser.add_argument_group(title="Split Options")
    split_group.add_argument(
        "--split-start-prefix", dest="split_start_prefix", default=None,
        help="Summary prefix for the first day of a long event.")
    split_group.add_argument(
        "--split-end-prefix", dest="split_end_prefix", default=None,
        help="Summary prefix for the last day of a long event.")
    parser.add_argument(
        "templates", nargs="*", metavar="TEMPLATE",
        help="Jinja2 template to render the events with.")


def load_config(options):
    if options.config is not None:
        with open(options.config, encoding="utf-8") as f:
            config = Config.from_file(f)
    else:
        config = Config()
    config.update_from_options(options)
    return config


def read_inputs(paths):
    events = []
    if not paths:
        paths = ["-"]
    for path in paths:
        if path == "-":
            data = sys.stdin.buffer.read()
        else:
            with open(path, "rb") as f:
                data = f.read()
        logger.debug("Reading events from %s", path)
        events.extend(read_events(data))
    return events


def main(argv=None):
    parser = argparse.ArgumentParser(
        usage="%(prog)s [OPTIONS] [TEMPLATE...]", prog="calprint")
    add_parser(parser)
    options = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO, format="%(levelname)s: %(message)s")

    try:
        config = load_config(options)
        if config.debug:
            logging.getLogger().setLevel(logging.DEBUG)
        events = process(read_inputs(options.inputs), config)
        if config.debug:
            DebugPrinter().print(sys.stderr, events)
        for template in config.templates:
            TemplatePrinter.from_file(template, config).print(sys.stdout, events)
    except (CalprintError, OSError) as e:
        logger.error("%s", e)
        return 1
    return 0


def cli():
    sys.exit(main(sys.argv[1:]))


if __name__ == "__main__":
    cli()
