"""Tests for contribution-record boundary decoding."""

from __future__ import annotations

from decimal import Decimal

import pytest

from medaid.models.enums import MsaType, PricingModel
from medaid.pricing.decoding import (
    MalformedEncodingError,
    decode_json_field,
    decode_msa_structure,
    decode_pricing_matrix,
    decode_threshold_structure,
)
from medaid.schemas.pricing import BandedMatrix, FixedMatrix


class TestDecodeJsonField:
    def test_native_object_passes_through(self) -> None:
        value = {"main": 1}
        assert decode_json_field(value, "pricing_matrix") is value

    def test_json_text(self) -> None:
        assert decode_json_field('{"main": 1}', "pricing_matrix") == {"main": 1}

    def test_json_null(self) -> None:
        assert decode_json_field("null", "msa_structure") is None

    def test_malformed_text(self) -> None:
        with pytest.raises(MalformedEncodingError) as exc_info:
            decode_json_field("{main: 1", "threshold_structure")
        assert exc_info.value.field == "threshold_structure"
        assert exc_info.value.raw == "{main: 1"

    def test_deeply_nested_text(self) -> None:
        with pytest.raises(MalformedEncodingError) as exc_info:
            decode_json_field("[" * 200_000 + "]" * 200_000, "pricing_matrix")
        assert exc_info.value.field == "pricing_matrix"

    def test_error_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            decode_json_field("", "pricing_matrix")


class TestDecodePricingMatrix:
    def test_fixed(self) -> None:
        matrix = decode_pricing_matrix(PricingModel.STANDARD, {"main": "2000", "child": 450})
        assert isinstance(matrix, FixedMatrix)
        assert matrix.rates.main == Decimal("2000")
        assert matrix.rates.adult == Decimal("0")

    def test_banded(self) -> None:
        matrix = decode_pricing_matrix(
            PricingModel.INCOME_BANDED,
            '[{"min": 0, "max": 7500, "main": 1200}, {"min": 7501, "main": 2500}]',
        )
        assert isinstance(matrix, BandedMatrix)
        assert len(matrix.bands) == 2
        assert matrix.bands[0].upper == Decimal("7500")
        assert matrix.bands[1].upper is None

    def test_banded_skips_non_object_entries(self) -> None:
        matrix = decode_pricing_matrix(PricingModel.INCOME_BANDED, [{"main": 1}, 42, "x"])
        assert isinstance(matrix, BandedMatrix)
        assert len(matrix.bands) == 1

    def test_banded_tuple(self) -> None:
        bands = ({"min": 0, "max": 7500, "main": 1200}, {"min": 7501, "main": 2500})
        matrix = decode_pricing_matrix(PricingModel.INCOME_BANDED, bands)
        assert isinstance(matrix, BandedMatrix)
        assert [band.main for band in matrix.bands] == [Decimal("1200"), Decimal("2500")]

    def test_banded_json_string_is_not_a_sequence(self) -> None:
        assert decode_pricing_matrix(PricingModel.INCOME_BANDED, '"bands"') is None

    def test_standard_tuple_uses_first_entry(self) -> None:
        matrix = decode_pricing_matrix(PricingModel.STANDARD, ({"main": 900}, {"main": 1900}))
        assert isinstance(matrix, FixedMatrix)
        assert matrix.rates.main == Decimal("900")

    def test_standard_list_uses_first_entry(self) -> None:
        matrix = decode_pricing_matrix(PricingModel.STANDARD, [{"main": 900}, {"main": 1900}])
        assert isinstance(matrix, FixedMatrix)
        assert matrix.rates.main == Decimal("900")

    def test_missing_matrix(self) -> None:
        assert decode_pricing_matrix(PricingModel.STANDARD, None) is None
        assert decode_pricing_matrix(PricingModel.INCOME_BANDED, None) is None

    def test_nan_rate_is_zero(self) -> None:
        matrix = decode_pricing_matrix(PricingModel.STANDARD, {"main": float("nan"), "adult": True})
        assert matrix.rates.main == Decimal("0")
        assert matrix.rates.adult == Decimal("0")


class TestDecodeStructures:
    def test_msa_unknown_type_is_none(self) -> None:
        msa = decode_msa_structure({"type": "Bonus", "value": 10})
        assert msa.type is MsaType.NONE

    def test_msa_from_json(self) -> None:
        msa = decode_msa_structure('{"type": "Fixed", "value": "1200"}')
        assert msa.type is MsaType.FIXED
        assert msa.value == Decimal("1200")

    def test_threshold_non_object(self) -> None:
        assert decode_threshold_structure("[1, 2]") is None

    def test_threshold_non_numeric_field_is_absent(self) -> None:
        structure = decode_threshold_structure({"msa_allocation_main": "tbc", "annual_threshold": 3000})
        assert structure.msa_allocation_main is None
        assert structure.annual_threshold == Decimal("3000")
