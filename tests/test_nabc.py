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
Test the NABC glyph decoder.
"""

import pytest

### find neuma
import sys
sys.path.insert(0, '.')

from neuma import nabc
from neuma.nabc import (
    BasicGlyph, GlyphCode, GlyphModifier, Prepunctis, Subpunctis, decode, validate)


def check_basic_glyphs():
    """Two-letter codes."""
    assert decode("vi") == BasicGlyph(GlyphCode.Virga)
    assert decode("pe").code is GlyphCode.Pes
    assert decode("pr").code is GlyphCode.PressusMajor
    assert decode("oc").code is GlyphCode.OriscusClivis
    assert len(nabc.glyph_codes()) == 31
    for code in nabc.glyph_codes():
        assert nabc.is_valid_glyph(code)
        assert decode(code).code.value == code
    assert not nabc.is_valid_glyph("xx")
    assert GlyphCode.from_code("ql") is GlyphCode.Quilisma3Loops
    assert GlyphCode.from_code("VI") is None


def check_unknown():
    """Unknown codes and empty snippets decode to None."""
    assert decode("xx") is None
    assert decode("v") is None
    assert decode("") is None
    assert decode("   ") is None
    assert nabc.glyph_code(" x y z") == "xy"


def check_modifiers():
    """Modifiers, variant numbers and the pitch descriptor."""
    g = decode("viSGM->~")
    assert g.modifiers == (
        GlyphModifier.MarkModification,
        GlyphModifier.GroupingModification,
        GlyphModifier.MelodicModification,
        GlyphModifier.Episema,
        GlyphModifier.AugmentiveLiquescence,
        GlyphModifier.DiminutiveLiquescence,
    )

    g = decode("cl1S2")
    assert g.code is GlyphCode.Clivis
    assert g.modifiers == (GlyphModifier.MarkModification,)
    assert g.variants == (1, 2)

    g = decode("viha")
    assert g == BasicGlyph(GlyphCode.Virga, pitch='a')
    assert decode("pe-hk").pitch == 'k'
    assert decode("pehp").pitch == 'p'
    # h without a valid pitch letter
    assert decode("vih").pitch is None
    assert decode("vihz").pitch is None
    assert decode("vihA").pitch is None
    # whitespace is removed first
    assert decode(" v i h g ") == BasicGlyph(GlyphCode.Virga, pitch='g')
    # the run stops at the first unknown character
    g = decode("tox-")
    assert g.code is GlyphCode.Torculus and g.modifiers == ()


def check_punctis():
    """Subpunctis and prepunctis."""
    assert decode("su2S") == Subpunctis(2, 'S')
    assert decode("su") == Subpunctis()
    assert decode("suG") == Subpunctis(None, 'G')
    assert decode("pp3") == Prepunctis(3)
    assert decode("pp9M") == Prepunctis(9, 'M')
    assert decode("su0") == Subpunctis()
    assert decode("ppX") == Prepunctis()
    # no basic glyph is read
    assert not isinstance(decode("suvi"), BasicGlyph)


def check_validate():
    """Validation rules."""
    assert validate(decode("vi")) == []
    assert validate(decode("su2S")) == []
    assert validate(decode("pp")) == []

    errors = validate(decode("vi>~"))
    assert len(errors) == 1
    assert "liquescence" in errors[0]
    assert len(validate(decode("vi>~>~"))) == 1

    errors = validate(BasicGlyph(GlyphCode.Virga, pitch='z'))
    assert errors == ["Invalid NABC pitch descriptor: z"]

    assert len(validate(BasicGlyph(None))) == 1
    assert len(validate(None)) == 1


def check_decode_all():
    """Decoding a list of snippets skips the ones that can't be decoded."""
    glyphs = nabc.decode_all(["vi", "xx", "", "su2"])
    assert glyphs == [BasicGlyph(GlyphCode.Virga), Subpunctis(2)]


def test_main():
    check_basic_glyphs()
    check_unknown()
    check_modifiers()
    check_punctis()
    check_validate()
    check_decode_all()


@pytest.mark.parametrize("snippet, code", [
    ("vi", GlyphCode.Virga),
    ("ta", GlyphCode.Tractulus),
    ("sf", GlyphCode.ScandicusFlexus),
    ("qi", GlyphCode.Quilisma2Loops),
    ("un", GlyphCode.Uncinus),
])
def test_codes(snippet, code):
    assert decode(snippet).code is code


if __name__ == "__main__" and 'test_main' in globals():
    test_main()
