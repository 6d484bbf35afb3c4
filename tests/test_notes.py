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
Test the note decomposer.
"""

### find neuma
import sys
sys.path.insert(0, '.')

from neuma.model import Modifier, ModifierType, Shape
from neuma.notes import decompose, is_pitch, read_notes
from neuma.position import Position, PositionTracker


def shapes(fragment):
    return [n.shape for n in decompose(fragment)]


def check_pitches():
    """All pitch letters, in both cases."""
    notes = decompose("abcdefghijklmn")
    assert len(notes) == 14
    assert ''.join(n.pitch for n in notes) == "abcdefghijklmn"
    assert all(n.shape is Shape.Punctum for n in notes)

    notes = decompose("ABCDEFG")
    assert len(notes) == 7
    assert ''.join(n.pitch for n in notes) == "abcdefg"
    assert all(n.shape is Shape.PunctumInclinatum for n in notes)

    assert [n.pitch for n in decompose("p")] == ['p']
    assert decompose("o") == ()
    assert decompose("") == ()
    assert is_pitch('P') and is_pitch('n') and not is_pitch('o') and not is_pitch('q')


def check_shapes():
    """Shape characters after the pitch letter."""
    assert shapes("fo") == [Shape.Oriscus]
    assert shapes("fw") == [Shape.Quilisma]
    assert shapes("fv") == [Shape.Virga]
    assert shapes("fV") == [Shape.VirgaReversa]
    assert shapes("fs") == [Shape.Stropha]
    assert shapes("fr") == [Shape.Cavum]
    assert shapes("f~") == [Shape.Liquescent]
    assert shapes("f<") == [Shape.Liquescent]
    assert shapes("f>") == [Shape.Liquescent]
    # the last shape character wins
    assert shapes("Gv") == [Shape.Virga]


def check_modifiers():
    """Modifier characters after the pitch letter."""
    notes = decompose("f.g_h'")
    assert len(notes) == 3
    assert notes[0].modifiers == (Modifier(ModifierType.PunctumMora),)
    assert notes[1].modifiers == (Modifier(ModifierType.HorizontalEpisema),)
    assert notes[2].modifiers == (Modifier(ModifierType.VerticalEpisema),)

    n, = decompose("e-~")
    assert n.shape is Shape.Liquescent
    assert [m.type for m in n.modifiers] == [ModifierType.InitioDebilis, ModifierType.Liquescent]
    assert all(m.value is None for m in n.modifiers)


def check_skipping():
    """Other characters end the modifier run and are skipped."""
    notes = decompose("ixh_i_H'GhvF'E")
    assert ''.join(n.pitch for n in notes) == "ihihghfe"
    assert [n.shape for n in notes][:3] == [Shape.Punctum] * 3
    assert notes[3].shape is Shape.PunctumInclinatum
    assert notes[6].shape is Shape.PunctumInclinatum

    # spacing and accidentals
    assert ''.join(n.pitch for n in decompose("f/g//h")) == "fgh"
    assert ''.join(n.pitch for n in decompose("fx")) == "f"
    assert ''.join(n.pitch for n in decompose("G0H1I2")) == "ghi"
    # a modifier without a note is ignored
    assert decompose(".__'") == ()
    # only ASCII pitch letters, not characters that lower-case to one
    assert decompose("\u212a") == ()
    assert not is_pitch("\u212a")


def check_ranges():
    """Note ranges span the pitch letter and its modifier run."""
    spans = list(read_notes("f.. gv", 10))
    assert [(s.pos, s.end) for s in spans] == [(10, 13), (14, 16)]

    notes = decompose("f.. gv")
    assert notes[0].range.start == Position(0, 0)
    assert notes[0].range.end == Position(0, 3)
    assert notes[1].range.start == Position(0, 4)

    text = "(c4)\n(fgh)"
    t = PositionTracker(text)
    notes = decompose("fgh", t, 6)
    assert [n.range.start for n in notes] == [Position(1, 1), Position(1, 2), Position(1, 3)]
    assert notes[2].range.end == Position(1, 4)


def test_main():
    check_pitches()
    check_shapes()
    check_modifiers()
    check_skipping()
    check_ranges()


if __name__ == "__main__" and 'test_main' in globals():
    test_main()
