"""Unit tests for PDO classification and RDO reference codes."""

from __future__ import annotations

import pytest

from pdocodec.codec.classify import (
    PdoVariant,
    RdoReference,
    check_word,
    classify_pdo,
    rdo_reference_from_code,
    variant_from_leaf_name,
)
from pdocodec.exceptions import PdoCodecError, ReferenceCodeError, WordRangeError


class TestClassifyPdo:
    """Test selector-bit classification."""

    @pytest.mark.parametrize(
        "word,variant",
        [
            (0x00000000, PdoVariant.NULL),
            (0x0001912C, PdoVariant.FIXED),
            (0x00000001, PdoVariant.FIXED),
            (0x5A419190, PdoVariant.BATTERY),
            (0x8F02D096, PdoVariant.VARIABLE),
            (0xC9A4213C, PdoVariant.PPS),
            (0xD3C0968C, PdoVariant.EPR_AVS),
            (0xE404B0E1, PdoVariant.SPR_AVS),
            (0xF0000000, PdoVariant.NULL),
            (0xFFFFFFFF, PdoVariant.NULL),
        ],
    )
    def test_classify(self, word: int, variant: PdoVariant) -> None:
        """Test each selector pattern."""
        assert classify_pdo(word) is variant

    @pytest.mark.parametrize("word", [-1, 1 << 32, True, "0x1", 1.0])
    def test_rejects_non_words(self, word: object) -> None:
        """Test only 32-bit unsigned ints are accepted."""
        with pytest.raises(WordRangeError):
            classify_pdo(word)  # type: ignore[arg-type]

    def test_check_word_passthrough(self) -> None:
        """Test check_word returns its argument."""
        assert check_word(0xFFFFFFFF) == 0xFFFFFFFF

    def test_variant_metadata(self) -> None:
        """Test descriptions and the augmented flag."""
        assert PdoVariant.FIXED.description == "fixed supply"
        assert PdoVariant.PPS.description == "programmable supply"
        assert PdoVariant.NULL.description == ""
        assert PdoVariant.SPR_AVS.is_augmented
        assert not PdoVariant.VARIABLE.is_augmented


class TestReferenceCodes:
    """Test RDO reference code mapping."""

    @pytest.mark.parametrize(
        "code,reference",
        [
            ("F", RdoReference.FIXED_OR_VARIABLE),
            ("V", RdoReference.FIXED_OR_VARIABLE),
            ("B", RdoReference.BATTERY),
            ("P", RdoReference.PPS),
            ("A", RdoReference.AVS),
            ("E", RdoReference.AVS),
            ("S", RdoReference.AVS),
            ("f", RdoReference.FIXED_OR_VARIABLE),
            (" p ", RdoReference.PPS),
        ],
    )
    def test_known_codes(self, code: str, reference: RdoReference) -> None:
        """Test every accepted code."""
        assert rdo_reference_from_code(code) is reference

    @pytest.mark.parametrize("code", ["", "X", "FV", "pps"])
    def test_unknown_codes(self, code: str) -> None:
        """Test unknown codes raise a codec error."""
        with pytest.raises(ReferenceCodeError, match="unknown RDO reference code"):
            rdo_reference_from_code(code)

    def test_error_hierarchy(self) -> None:
        """Test codec errors are also ValueErrors."""
        assert issubclass(ReferenceCodeError, PdoCodecError)
        assert issubclass(ReferenceCodeError, ValueError)
        assert issubclass(WordRangeError, ValueError)


class TestLeafNames:
    """Test capability leaf name parsing."""

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("1:fixed_supply", (1, PdoVariant.FIXED)),
            ("2:battery", (2, PdoVariant.BATTERY)),
            ("3:variable_supply", (3, PdoVariant.VARIABLE)),
            ("4:programmable_supply", (4, PdoVariant.PPS)),
            ("5:spr_adjustable_supply", (5, PdoVariant.SPR_AVS)),
            ("6:epr_adjustable_supply", (6, PdoVariant.EPR_AVS)),
            ("7:something_else", (7, PdoVariant.NULL)),
        ],
    )
    def test_leaf_names(self, name: str, expected: tuple) -> None:
        """Test leaf kinds map to variants."""
        assert variant_from_leaf_name(name) == expected

    def test_adjustable_supply_follows_configuration(self) -> None:
        """Test the ambiguous AVS leaf resolves to the configured range."""
        assert variant_from_leaf_name("8:adjustable_supply") == (8, PdoVariant.EPR_AVS)
        assert variant_from_leaf_name("8:adjustable_supply", PdoVariant.SPR_AVS) == (
            8,
            PdoVariant.SPR_AVS,
        )

    @pytest.mark.parametrize("name", ["fixed_supply", ":fixed_supply", "x:battery", ""])
    def test_malformed_names(self, name: str) -> None:
        """Test names without an index are rejected."""
        assert variant_from_leaf_name(name) is None
