"""Unit tests for the PDO/RDO decoder."""

from __future__ import annotations

import logging

import pytest

from pdocodec.codec.classify import PdoVariant, RdoReference
from pdocodec.codec.decoder import decode_pdo, decode_rdo
from pdocodec.codec.fields import FieldName
from pdocodec.exceptions import WordRangeError


def values(decoded) -> dict:
    return {field.name.value: field.display_value for field in decoded.fields}


class TestDecodePdo:
    """Test PDO decoding."""

    def test_fixed_source(self) -> None:
        """Test a Fixed PDO away from position 1."""
        decoded = decode_pdo(0x0001912C)

        assert decoded.kind == "pdo"
        assert decoded.variant == "fixed"
        assert decoded.names() == ["peak_current", "voltage", "maximum_current"]
        assert decoded.as_text() == "peak_current=0\nvoltage=5.00\nmaximum_current=3.00\n"

    def test_fixed_first_source(self, fixed_first_source_word: int) -> None:
        """Test the capability bits of the first source PDO."""
        decoded = decode_pdo(fixed_first_source_word, object_index_is_one=True)

        assert values(decoded) == {
            "dual_role_power": "1",
            "usb_suspend_supported": "1",
            "unconstrained_power": "1",
            "usb_communication_capable": "1",
            "dual_role_data": "1",
            "unchunked_extended_messages_supported": "1",
            "epr_mode_capable": "1",
            "peak_current": "0",
            "voltage": "5.00",
            "maximum_current": "3.00",
        }

    def test_fixed_first_sink(self, fixed_first_source_word: int) -> None:
        """Test the same bits read as a sink capability."""
        decoded = decode_pdo(
            fixed_first_source_word, object_index_is_one=True, is_source_capability=False
        )

        assert decoded.names() == [
            "voltage",
            "operational_current",
            "dual_role_power",
            "higher_capability",
            "unconstrained_power",
            "usb_communication_capable",
            "dual_role_data",
            "fast_role_swap_current",
        ]
        assert decoded.get(FieldName.FAST_ROLE_SWAP_CURRENT).raw_bits == 3
        assert decoded.get("operational_current").display_value == "3.00"

    @pytest.mark.parametrize("source", [True, False])
    def test_first_position_appends_extension(
        self, fixed_first_source_word: int, source: bool
    ) -> None:
        """Test position 1 lists the common Fixed fields before the extension bits."""
        first = decode_pdo(
            fixed_first_source_word, object_index_is_one=True, is_source_capability=source
        )
        other = decode_pdo(
            fixed_first_source_word, object_index_is_one=False, is_source_capability=source
        )

        names = first.names()
        assert names.index("voltage") < names.index("dual_role_power")
        assert names[: len(other.fields)] == other.names()
        assert first.fields[: len(other.fields)] == other.fields

    @pytest.mark.parametrize("source", [True, False])
    def test_first_position_reports_bit_27(self, source: bool) -> None:
        """Test unconstrained power is reported for either role at position 1."""
        word = 0x08000000 | 0x0001912C
        first = decode_pdo(word, object_index_is_one=True, is_source_capability=source)
        other = decode_pdo(word, object_index_is_one=False, is_source_capability=source)

        assert first.get("unconstrained_power").raw_bits == 1
        assert other.get("unconstrained_power") is None
        names = first.names()
        if source:
            assert "usb_suspend_supported" in names and "higher_capability" not in names
        else:
            assert "higher_capability" in names and "usb_suspend_supported" not in names

    def test_battery_source(self) -> None:
        """Test a battery PDO."""
        assert values(decode_pdo(0x5A419190)) == {
            "maximum_voltage": "21.00",
            "minimum_voltage": "5.00",
            "maximum_allowable_power": "100.00",
        }

    def test_variable_sink(self) -> None:
        """Test a variable sink PDO."""
        decoded = decode_pdo(0x8F02D096, is_source_capability=False)
        assert values(decoded) == {
            "maximum_voltage": "12.00",
            "minimum_voltage": "9.00",
            "operational_current": "1.50",
        }

    def test_pps_source(self) -> None:
        """Test a PPS APDO."""
        decoded = decode_pdo(0xC9A4213C)
        assert decoded.variant == "pps"
        assert values(decoded) == {
            "pps_power_limited": "1",
            "maximum_voltage": "21.00",
            "minimum_voltage": "3.30",
            "maximum_current": "3.00",
        }

    def test_epr_avs_source(self) -> None:
        """Test an EPR AVS APDO."""
        assert values(decode_pdo(0xD3C0968C)) == {
            "peak_current": "0",
            "maximum_voltage": "48.00",
            "minimum_voltage": "15.00",
            "pdp": "140.00",
        }

    def test_spr_avs_source(self) -> None:
        """Test an SPR AVS APDO."""
        assert values(decode_pdo(0xE404B0E1)) == {
            "peak_current": "1",
            "maximum_current_9V_to_15V": "3.00",
            "maximum_current_15V_to_20V": "2.25",
        }

    def test_variant_override(self) -> None:
        """Test decoding with a caller-supplied variant."""
        decoded = decode_pdo(0xE404B0E1, variant=PdoVariant.EPR_AVS)
        assert decoded.variant == "epr_avs"
        assert "pdp" in decoded.names()

    @pytest.mark.parametrize("word", [0x00000000, 0xF0000000, 0xFFFFFFFF])
    def test_undecodable_is_empty(self, word: int, caplog: pytest.LogCaptureFixture) -> None:
        """Test NULL and reserved words decode to no fields."""
        with caplog.at_level(logging.DEBUG, logger="pdocodec"):
            decoded = decode_pdo(word, object_index_is_one=True)

        assert decoded.is_empty
        assert decoded.variant == "null"
        assert decoded.as_text() == ""
        assert "no field block" in caplog.text

    @pytest.mark.parametrize("word", [-1, 1 << 32])
    def test_out_of_range(self, word: int) -> None:
        """Test words outside 32 bits are rejected."""
        with pytest.raises(WordRangeError):
            decode_pdo(word)


class TestDecodeRdo:
    """Test RDO decoding."""

    def test_fixed_request(self) -> None:
        """Test a fixed supply request without giveback."""
        decoded = decode_rdo(0x1304B12C, RdoReference.FIXED_OR_VARIABLE)

        assert decoded.kind == "rdo"
        assert decoded.variant == "fixed_or_variable"
        assert values(decoded) == {
            "object_position": "1",
            "giveback_flag": "0",
            "capability_mismatch": "0",
            "usb_communication_capable": "1",
            "no_usb_suspend": "1",
            "unchunked_extended_messages_supported": "0",
            "epr_mode_capable": "0",
            "operating_current": "3.00",
            "maximum_operating_current": "3.00",
        }

    def test_fixed_request_with_giveback(self) -> None:
        """Test giveback swaps in the minimum operating current."""
        decoded = decode_rdo(0x1B04B064, RdoReference.FIXED_OR_VARIABLE)

        assert decoded.get("giveback_flag").raw_bits == 1
        assert decoded.get("minimum_operating_current").display_value == "1.00"
        assert decoded.get("maximum_operating_current") is None

    def test_battery_request(self) -> None:
        """Test a battery request."""
        decoded = decode_rdo(0x2000F050, RdoReference.BATTERY)
        assert decoded.get("object_position").raw_bits == 2
        assert decoded.get("operating_power").display_value == "15.00"
        assert decoded.get("maximum_operating_power").display_value == "20.00"

    def test_pps_request(self) -> None:
        """Test a PPS request."""
        decoded = decode_rdo(0x40038428, RdoReference.PPS)
        assert decoded.names() == [
            "object_position",
            "capability_mismatch",
            "usb_communication_capable",
            "no_usb_suspend",
            "unchunked_extended_messages_supported",
            "epr_mode_capable",
            "output_voltage",
            "operating_current",
        ]
        assert decoded.get("output_voltage").display_value == "9.00"
        assert decoded.get("operating_current").display_value == "2.00"

    def test_avs_request(self) -> None:
        """Test the AVS output voltage rule."""
        decoded = decode_rdo(0x50005014, RdoReference.AVS)
        assert decoded.get("object_position").raw_bits == 5
        assert decoded.get("output_voltage").raw_bits == 40
        assert decoded.get("output_voltage").display_value == "5.00"
        assert decoded.get("operating_current").display_value == "1.00"

    def test_avs_request_ignores_bit_27(self) -> None:
        """Test AVS requests have no giveback field even with bit 27 set."""
        decoded = decode_rdo(0x58005014, RdoReference.AVS)
        assert "giveback_flag" not in decoded.names()
        assert len(decoded.fields) == 8

    def test_as_dict(self) -> None:
        """Test the JSON-ready form."""
        data = decode_rdo(0x40038428, RdoReference.PPS).as_dict()
        assert data["kind"] == "rdo"
        assert data["raw"] == "0x40038428"
        assert data["variant"] == "pps"
        assert data["fields"]["output_voltage"] == "9.00"
