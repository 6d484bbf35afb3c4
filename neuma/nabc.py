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
Decode NABC glyph descriptors.

NABC is the notation Gregorio uses for adiastematic neumes (St. Gall and
Laon). Inside a GABC note bracket, NABC snippets follow a ``|``. This module
decodes one snippet into a glyph descriptor, which is one of three types:

:class:`BasicGlyph`
    a two-letter glyph code, e.g. ``vi`` (virga) or ``pe`` (pes), optionally
    followed by modifiers, variant numbers and a pitch descriptor (``h`` and a
    pitch letter);
:class:`Subpunctis` and :class:`Prepunctis`
    the ``su`` and ``pp`` descriptors, with an optional count and an optional
    modifier.

Example::

    >>> from neuma import nabc
    >>> nabc.decode("viha")
    BasicGlyph(code=<GlyphCode.Virga: 'vi'>, modifiers=(), pitch='a', variants=(), range=None)
    >>> nabc.decode("su2S")
    Subpunctis(count=2, modifier='S', range=None)
    >>> nabc.decode("xx") is None
    True

Use :func:`validate` to check a descriptor for combinations that do not make
sense.

"""

import collections
import enum
import re


class GlyphCode(enum.Enum):
    """The two-letter NABC basic glyph codes."""
    # single notes
    Virga = 'vi'
    Punctum = 'pu'
    Tractulus = 'ta'
    Gravis = 'gr'
    # two notes
    Clivis = 'cl'
    Pes = 'pe'
    # three notes
    Porrectus = 'po'
    Torculus = 'to'
    Climacus = 'ci'
    Scandicus = 'sc'
    # four notes
    PorrectusFlexus = 'pf'
    ScandicusFlexus = 'sf'
    TorculusResupinus = 'tr'
    # strophae
    Stropha = 'st'
    Distropha = 'ds'
    Tristropha = 'ts'
    # others
    Trigonus = 'tg'
    Bivirga = 'bv'
    Trivirga = 'tv'
    PressusMajor = 'pr'
    PressusMinor = 'pi'
    VirgaStrata = 'vs'
    Oriscus = 'or'
    Salicus = 'sa'
    PesQuassus = 'pq'
    Quilisma3Loops = 'ql'
    Quilisma2Loops = 'qi'
    PesStratus = 'pt'
    Nihil = 'ni'
    Uncinus = 'un'
    OriscusClivis = 'oc'

    @classmethod
    def from_code(cls, code):
        """Return the GlyphCode for the two-letter code, or None."""
        return _codes.get(code)


_codes = {g.value: g for g in GlyphCode}


class GlyphModifier(enum.Enum):
    """Modifiers that can follow a basic glyph code."""
    MarkModification = 'S'
    GroupingModification = 'G'
    MelodicModification = 'M'
    Episema = '-'
    AugmentiveLiquescence = '>'
    DiminutiveLiquescence = '~'


_modifiers = {m.value: m for m in GlyphModifier}

#: The modifier letters allowed after ``su`` and ``pp``.
PUNCTIS_MODIFIERS = 'SGM'

#: The pitch letters allowed after ``h``.
PITCHES = 'abcdefghijklmnp'


BasicGlyph = collections.namedtuple("BasicGlyph", "code modifiers pitch variants range",
    defaults=((), None, (), None))
BasicGlyph.__doc__ = """A basic glyph.

``code`` is a :class:`GlyphCode`, ``modifiers`` a tuple of
:class:`GlyphModifier`, ``pitch`` a pitch letter or None and ``variants`` a
tuple of the variant numbers (1-9) in the order they appeared.
"""

Subpunctis = collections.namedtuple("Subpunctis", "count modifier range",
    defaults=(None, None, None))
Subpunctis.__doc__ = "Subpunctis (``su``): an optional count (1-9) and modifier ('S', 'G' or 'M')."

Prepunctis = collections.namedtuple("Prepunctis", "count modifier range",
    defaults=(None, None, None))
Prepunctis.__doc__ = "Prepunctis (``pp``): an optional count (1-9) and modifier ('S', 'G' or 'M')."


_whitespace_re = re.compile(r'\s+')


def decode(snippet):
    """Decode a NABC snippet and return a glyph descriptor.

    All whitespace is removed first. Returns None if the snippet is empty or
    does not start with a known glyph code. Characters after the recognized
    descriptor are ignored.

    """
    text = _whitespace_re.sub('', snippet)
    if not text:
        return None
    if text.startswith(('su', 'pp')):
        return _punctis(text)

    code = GlyphCode.from_code(text[:2])
    if code is None:
        return None
    pos = 2
    modifiers = []
    variants = []
    while pos < len(text):
        char = text[pos]
        if char in _modifiers:
            modifiers.append(_modifiers[char])
        elif '1' <= char <= '9':
            variants.append(int(char))
        else:
            break
        pos += 1

    pitch = None
    if text[pos:pos+1] == 'h':
        pos += 1
        if text[pos:pos+1] and text[pos] in PITCHES:
            pitch = text[pos]
    return BasicGlyph(code, tuple(modifiers), pitch, tuple(variants))


def _punctis(text):
    """Decode a ``su`` or ``pp`` descriptor."""
    cls = Subpunctis if text.startswith('su') else Prepunctis
    pos = 2
    count = modifier = None
    if text[pos:pos+1] and '1' <= text[pos] <= '9':
        count = int(text[pos])
        pos += 1
    if text[pos:pos+1] and text[pos] in PUNCTIS_MODIFIERS:
        modifier = text[pos]
    return cls(count, modifier)


def decode_all(snippets):
    """Return a list of glyph descriptors for the snippets that can be decoded."""
    return [d for d in map(decode, snippets) if d is not None]


def glyph_code(snippet):
    """Return the two-letter code a snippet starts with (after removing whitespace).

    This is the code :func:`decode` looks up, useful for reporting unknown codes.

    """
    return _whitespace_re.sub('', snippet)[:2]


def validate(descriptor):
    """Return a list of error messages for the descriptor.

    An empty list means the descriptor is valid.

    """
    errors = []
    if isinstance(descriptor, (Subpunctis, Prepunctis)):
        return errors
    if not isinstance(descriptor, BasicGlyph) or descriptor.code is None:
        errors.append("NABC descriptor must have a basic glyph, subpunctis, or prepunctis")
        return errors
    if descriptor.pitch is not None and (len(descriptor.pitch) != 1 or descriptor.pitch not in PITCHES):
        errors.append("Invalid NABC pitch descriptor: {}".format(descriptor.pitch))
    if (GlyphModifier.AugmentiveLiquescence in descriptor.modifiers
            and GlyphModifier.DiminutiveLiquescence in descriptor.modifiers):
        errors.append("NABC descriptor cannot have both augmentive and diminutive liquescence")
    return errors


def glyph_codes():
    """Return a list of all valid two-letter glyph codes."""
    return [g.value for g in GlyphCode]


def is_valid_glyph(code):
    """Return True if ``code`` is a known two-letter glyph code."""
    return code in _codes
