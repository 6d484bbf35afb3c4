# -*- coding: utf-8 -*-
#
# This file is part of `neuma`, a library for Gregorio and the `.gabc` format
#
# Copyright © 2024-2025 by the neuma authors
#
# This module is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This module is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.


"""
Positions and ranges in a source text.

The lexer and all helper modules work with plain string offsets. Editors
however talk about a *line* and a *character* on that line, where the
character is counted in UTF-16 code units. The :class:`PositionTracker`
converts between the two.

Example::

    >>> from neuma.position import PositionTracker
    >>> t = PositionTracker("name: x;\\n%%\\n(c4)")
    >>> t.position(13)
    Position(line=2, character=1)
    >>> t.offset(t.position(13))
    13

"""

import bisect
import collections
import re


_newline = re.compile(r"\n")


Position = collections.namedtuple("Position", "line character")
Position.__doc__ = "A zero-based line and character (in UTF-16 code units)."


class Range(collections.namedtuple("Range", "start end")):
    """A range between two :class:`Position` instances, ``start <= end``."""
    __slots__ = ()

    def __contains__(self, position):
        """Return True if the position is inside the range (end exclusive)."""
        return self.start <= position < self.end

    def overlaps(self, other):
        """Return True if the other range shares characters with this range."""
        return self.start < other.end and other.start < self.end


def utf16_length(text):
    """Return the length of ``text`` in UTF-16 code units."""
    return len(text) + sum(1 for c in text if ord(c) > 0xFFFF)


class PositionTracker:
    """Converts string offsets in a text to :class:`Position` values and back.

    Only the newline character ``\\n`` starts a new line.

    """
    def __init__(self, text):
        self.text = text
        self._line_starts = [0]
        self._line_starts.extend(m.end() for m in _newline.finditer(text))

    def line_count(self):
        """Return the number of lines in the text."""
        return len(self._line_starts)

    def position(self, offset):
        """Return the :class:`Position` of the string offset."""
        offset = max(0, min(offset, len(self.text)))
        line = bisect.bisect_right(self._line_starts, offset) - 1
        start = self._line_starts[line]
        return Position(line, utf16_length(self.text[start:offset]))

    def range(self, pos, end):
        """Return a :class:`Range` for the string offsets ``pos`` and ``end``."""
        return Range(self.position(pos), self.position(end))

    def offset(self, position):
        """Return the string offset of the :class:`Position`.

        A character beyond the end of the line is clamped to the end of the
        line; a line beyond the last line to the end of the text.

        """
        line, character = position
        if line >= len(self._line_starts):
            return len(self.text)
        start = self._line_starts[line]
        end = self._line_starts[line + 1] - 1 if line + 1 < len(self._line_starts) else len(self.text)
        units = 0
        for offset in range(start, end):
            if units >= character:
                return offset
            units += 2 if ord(self.text[offset]) > 0xFFFF else 1
        return end

