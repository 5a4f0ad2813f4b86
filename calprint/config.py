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

"""Calprint configuration.

Settings can be read from an INI file with a ``[calprint]`` section:

    [calprint]
    year = 2024
    categories = +work,-private
    split-start-prefix = >
    templates = month.html agenda.txt
"""

import configparser

from . import CalprintError

SECTION = "calprint"

DEFAULT_SPLIT_START_PREFIX = "» "
DEFAULT_SPLIT_END_PREFIX = "« "


class ConfigError(CalprintError):
    """Invalid configuration."""


def _parse_int(name, value, minimum=None, maximum=None):
    if value is None or value == "":
        return None
    try:
        ret = int(value)
    except ValueError as e:
        raise ConfigError(f"invalid value for {name}: {value!r}") from e
    if (minimum is not None and ret < minimum) or (
        maximum is not None and ret > maximum
    ):
        raise ConfigError(f"{name} out of range: {ret}")
    return ret


class Config(object):
    """Settings for a single calprint run."""

    def __init__(
        self,
        year=None,
        month=None,
        category_changes="",
        split_start_prefix=DEFAULT_SPLIT_START_PREFIX,
        split_end_prefix=DEFAULT_SPLIT_END_PREFIX,
        templates=None,
        debug=False,
    ):
        self.year = _parse_int("year", year)
        self.month = _parse_int("month", month, 1, 12)
        self.category_changes = category_changes
        self.split_start_prefix = split_start_prefix
        self.split_end_prefix = split_end_prefix
        self.templates = list(templates or [])
        self.debug = debug

    def __repr__(self):
        return "%s(year=%r, month=%r, category_changes=%r, templates=%r)" % (
            type(self).__name__,
            self.year,
            self.month,
            self.category_changes,
            self.templates,
        )

    @classmethod
    def from_file(cls, f):
        """Read a configuration file.

        :param f: File-like object
        :return: A Config
        """
        cp = configparser.ConfigParser(interpolation=None)
        try:
            cp.read_file(f)
        except configparser.Error as e:
            raise ConfigError(str(e)) from e
        if cp.has_section(SECTION):
            section = cp[SECTION]
        else:
            section = cp["DEFAULT"]
        try:
            debug = section.getboolean("debug", fallback=False)
        except ValueError as e:
            raise ConfigError(str(e)) from e
        return cls(
            year=section.get("year"),
            month=section.get("month"),
            category_changes=section.get("categories", ""),
            split_start_prefix=section.get(
                "split-start-prefix", DEFAULT_SPLIT_START_PREFIX
            ),
            split_end_prefix=section.get("split-end-prefix", DEFAULT_SPLIT_END_PREFIX),
            templates=section.get("templates", "").split(),
            debug=debug,
        )

    def update_from_options(self, options):
        """Override settings with command-line options that were given."""
        if getattr(options, "year", None) is not None:
            self.year = _parse_int("year", options.year)
        if getattr(options, "month", None) is not None:
            self.month = _parse_int("month", options.month, 1, 12)
        if getattr(options, "categories", None):
            if self.category_changes:
                self.category_changes += "," + options.categories
            else:
                self.category_changes = options.categories
        if getattr(options, "split_start_prefix", None) is not None:
            self.split_start_prefix = options.split_start_prefix
        if getattr(options, "split_end_prefix", None) is not None:
            self.split_end_prefix = options.split_end_prefix
        if getattr(options, "templates", None):
            self.templates = list(options.templates)
        if getattr(options, "debug", False):
            self.debug = True
