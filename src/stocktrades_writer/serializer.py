"""JSON serializer for stock trades."""

import json
import logging
from decimal import Decimal
from typing import Any, Dict, Optional

from .models import TradeEvent

logger = logging.getLogger(__name__)

PRICE_PRECISION = Decimal("0.01")


def _encode_value(value: Any) -> str:
    # Decimals are written as plain JSON numbers with exactly two places
    if isinstance(value, Decimal):
        if not value.is_finite():
            raise ValueError(f"Out of range decimal value: {value}")
        return f"{value.quantize(PRICE_PRECISION):f}"
    return json.dumps(value)


class TradeSerializer:
    """Encodes trades as compact UTF-8 JSON records for Kinesis."""

    def serialize(self, trade: TradeEvent) -> Optional[bytes]:
        """
        Serialize a trade to JSON bytes.

        Returns:
            The encoded record, or None if the trade could not be encoded
        """
        try:
            fields = [
                f"{json.dumps(key)}:{_encode_value(value)}"
                for key, value in trade.to_dict().items()
            ]
        except (TypeError, ValueError) as e:
            logger.warning(f"Failed to serialize trade {trade.id}: {e}")
            return None

        return ("{" + ",".join(fields) + "}").encode('utf-8')

    def deserialize(self, data: bytes) -> Dict[str, Any]:
        """Parse a record produced by serialize(). Prices come back as Decimal."""
        record = json.loads(data.decode('utf-8'), parse_float=Decimal)
        record['price'] = Decimal(record['price']).quantize(PRICE_PRECISION)
        return record
