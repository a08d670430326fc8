"""Boundary decoding for contribution records.

Storage hands the structured columns over either as native objects or as JSON
text. Everything here turns them into the typed schemas once, so the
calculators never sniff types.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping, Sequence
from typing import Any

from medaid.models.enums import PricingModel
from medaid.schemas.pricing import (
    BandedMatrix,
    FixedMatrix,
    IncomeBand,
    MsaStructure,
    PricingMatrix,
    RateCard,
    ThresholdStructure,
)

logger = logging.getLogger(__name__)


class MalformedEncodingError(ValueError):
    """Raised when a JSON-encoded column cannot be decoded."""

    def __init__(self, message: str, field: str, raw: str) -> None:
        super().__init__(message)
        self.field = field
        self.raw = raw


def decode_json_field(value: Any, field: str) -> Any:
    """Decode `value` if it is JSON text; native objects pass through unchanged.

    Raises:
        MalformedEncodingError: If the text is not valid JSON or nests too
            deeply to parse.
    """
    if not isinstance(value, str):
        return value
    try:
        return json.loads(value)
    except (json.JSONDecodeError, RecursionError) as exc:
        raise MalformedEncodingError(
            f"Invalid JSON in {field}: {exc}",
            field=field,
            raw=value,
        ) from exc


def _is_sequence(data: Any) -> bool:
    return isinstance(data, Sequence) and not isinstance(data, (str, bytes))


def decode_pricing_matrix(model: PricingModel, raw: Any) -> PricingMatrix | None:
    """Decode a pricing matrix into the tagged union for its pricing model.

    Income-banded matrices must be a sequence of bands; any other shape is
    unusable and yields None. A Standard matrix stored as a sequence uses its
    first entry.
    """
    data = decode_json_field(raw, "pricing_matrix")

    if model is PricingModel.INCOME_BANDED:
        if not _is_sequence(data):
            logger.warning("Income-banded pricing matrix is not a sequence (got %s)", type(data).__name__)
            return None
        bands = tuple(IncomeBand.model_validate(dict(band)) for band in data if isinstance(band, Mapping))
        return BandedMatrix(bands=bands)

    if _is_sequence(data):
        data = data[0] if data else None
    if not isinstance(data, Mapping):
        return None
    return FixedMatrix(rates=RateCard.model_validate(dict(data)))


def decode_msa_structure(raw: Any) -> MsaStructure | None:
    data = decode_json_field(raw, "msa_structure")
    if not isinstance(data, Mapping):
        return None
    return MsaStructure.model_validate(dict(data))


def decode_threshold_structure(raw: Any) -> ThresholdStructure | None:
    data = decode_json_field(raw, "threshold_structure")
    if not isinstance(data, Mapping):
        return None
    return ThresholdStructure.model_validate(dict(data))
