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
Recognize clefs and bar lines in the raw contents of a note bracket.

A clef is recognized at the very start of the contents: ``c`` or ``f``, an
optional ``b`` (flat) and a staff line number 1 to 4. A bar is only
recognized if the whole (stripped) contents equal one of the bar tokens in
:data:`BARS`.

Example::

    >>> from neuma import signs
    >>> signs.clef("cb3")
    ClefSpan(pos=0, end=3, type='c', line=3, has_flat=True)
    >>> signs.bar(" :: ")
    BarSpan(pos=1, end=3, type=<BarType.divisio_finalis: 'divisio_finalis'>)
    >>> signs.bar("::a") is None
    True

"""

import collections
import re

from .model import BarType


#: Bar tokens and the bar type they denote. ``BarType.dominican`` has no
#: token yet.
BARS = {
    '`': BarType.virgula,
    '`0': BarType.virgula,
    ',': BarType.divisio_minima,
    ',0': BarType.divisio_minima,
    ';': BarType.divisio_minor,
    ':': BarType.divisio_maior,
    '::': BarType.divisio_finalis,
}

_clef_re = re.compile(r'([cf])(b)?([1-4])')


ClefSpan = collections.namedtuple("ClefSpan", "pos end type line has_flat")
BarSpan = collections.namedtuple("BarSpan", "pos end type")


def clef(content, offset=0):
    """Return a :class:`ClefSpan` if the content starts with a clef, else None."""
    m = _clef_re.match(content)
    if m:
        return ClefSpan(m.start() + offset, m.end() + offset,
            m.group(1), int(m.group(3)), bool(m.group(2)))


def bar(content, offset=0):
    """Return a :class:`BarSpan` if the stripped content is a bar token, else None."""
    token = content.strip()
    try:
        bar_type = BARS[token]
    except KeyError:
        return None
    pos = content.index(token) + offset
    return BarSpan(pos, pos + len(token), bar_type)


def classify(content, offset=0):
    """Return a two-tuple (clef, bar) for the raw bracket content.

    Either value may be None. The ``offset`` is added to the spans.

    """
    return clef(content, offset), bar(content, offset)
