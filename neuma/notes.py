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
Decompose a GABC note fragment into single notes.

A pitch letter (``a`` to ``n`` or ``p``) starts a note. A lowercase letter
makes a punctum, an uppercase letter a punctum inclinatum. The characters
directly following the pitch letter may change the shape of the note or add
modifiers to it. Other characters (spaces, accidentals, custos, spacing
signs, etcetera) are skipped.

Example::

    >>> from neuma.notes import decompose
    >>> [(n.pitch, n.shape.name) for n in decompose("gh_iv")]
    [('g', 'Punctum'), ('h', 'Punctum'), ('i', 'Virga')]

"""

import collections

from .model import Modifier, ModifierType, Note, Shape
from .position import PositionTracker


#: Characters that change the shape of the preceding note.
SHAPE_CHARS = {
    'o': Shape.Oriscus,
    'w': Shape.Quilisma,
    'v': Shape.Virga,
    'V': Shape.VirgaReversa,
    's': Shape.Stropha,
    'r': Shape.Cavum,
}

#: Characters that add a modifier to the preceding note.
MODIFIER_CHARS = {
    '.': ModifierType.PunctumMora,
    '_': ModifierType.HorizontalEpisema,
    "'": ModifierType.VerticalEpisema,
    '-': ModifierType.InitioDebilis,
}

#: Characters that make the preceding note liquescent.
LIQUESCENT_CHARS = '~<>'

#: The pitch letters, lowercase and uppercase.
PITCHES = 'abcdefghijklmnp'

_pitch_chars = PITCHES + PITCHES.upper()


NoteSpan = collections.namedtuple("NoteSpan", "pos end pitch shape modifiers")
NoteSpan.__doc__ = "A decomposed note with string offsets instead of a range."


def is_pitch(char):
    """Return True if the character is a pitch letter, in either case."""
    return len(char) == 1 and char in _pitch_chars


def read_notes(fragment, offset=0):
    """Yield a :class:`NoteSpan` for every note in the fragment.

    The ``pos`` and ``end`` of every span are the offsets of the pitch letter
    and the end of the modifier run, with ``offset`` added.

    """
    i = 0
    length = len(fragment)
    while i < length:
        char = fragment[i]
        if not is_pitch(char):
            i += 1
            continue
        start = i
        shape = Shape.PunctumInclinatum if char.isupper() else Shape.Punctum
        modifiers = []
        i += 1
        while i < length:
            mod = fragment[i]
            if mod in SHAPE_CHARS:
                shape = SHAPE_CHARS[mod]
            elif mod in LIQUESCENT_CHARS:
                shape = Shape.Liquescent
                modifiers.append(Modifier(ModifierType.Liquescent))
            elif mod in MODIFIER_CHARS:
                modifiers.append(Modifier(MODIFIER_CHARS[mod]))
            else:
                break
            i += 1
        yield NoteSpan(start + offset, i + offset, char.lower(), shape, tuple(modifiers))


def decompose(fragment, tracker=None, offset=0):
    """Return a tuple of :class:`~neuma.model.Note` objects from the fragment.

    If a :class:`~neuma.position.PositionTracker` is given, the ranges are
    computed with it, after adding ``offset`` to the fragment offsets.
    Otherwise the ranges are relative to the fragment itself.

    """
    if tracker is None:
        tracker = PositionTracker(fragment)
        offset = 0
    return tuple(
        Note(n.pitch, n.shape, n.modifiers, tracker.range(n.pos, n.end))
        for n in read_notes(fragment, offset))
