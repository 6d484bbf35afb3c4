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
Test clef and bar recognition.
"""

### find neuma
import sys
sys.path.insert(0, '.')

from neuma import signs
from neuma.model import BarType


def check_clefs():
    """Clefs at the start of the bracket contents."""
    c = signs.clef("c4")
    assert (c.type, c.line, c.has_flat) == ('c', 4, False)
    assert (c.pos, c.end) == (0, 2)

    c = signs.clef("cb4")
    assert (c.type, c.line, c.has_flat) == ('c', 4, True)
    assert (c.pos, c.end) == (0, 3)

    c = signs.clef("f3", 10)
    assert (c.type, c.line, c.pos, c.end) == ('f', 3, 10, 12)

    # only at the start, and only lines 1 to 4
    assert signs.clef(" c4") is None
    assert signs.clef("c5") is None
    assert signs.clef("g2") is None
    assert signs.clef("c") is None
    # a clef followed by notes is still a clef
    assert signs.clef("c4 f").line == 4


def check_bars():
    """Bars must equal the whole stripped content."""
    expected = {
        '`': BarType.virgula,
        '`0': BarType.virgula,
        ',': BarType.divisio_minima,
        ',0': BarType.divisio_minima,
        ';': BarType.divisio_minor,
        ':': BarType.divisio_maior,
        '::': BarType.divisio_finalis,
    }
    for token, bar_type in expected.items():
        assert signs.bar(token).type is bar_type
        assert signs.bar(" {} ".format(token)).type is bar_type

    b = signs.bar("  ::", 5)
    assert (b.pos, b.end) == (7, 9)

    for text in ("::f", ":;", "f", "", ";;", ",1"):
        assert signs.bar(text) is None

    # dominican is reserved, no token produces it
    assert BarType.dominican not in set(signs.BARS.values())


def check_classify():
    """Both at once."""
    clef, bar = signs.classify("c4")
    assert clef.type == 'c' and bar is None
    clef, bar = signs.classify(";")
    assert clef is None and bar.type is BarType.divisio_minor
    assert signs.classify("fgh") == (None, None)


def test_main():
    check_clefs()
    check_bars()
    check_classify()


if __name__ == "__main__" and 'test_main' in globals():
    test_main()
