"""Stock trade data model."""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any, Dict


class TradeType(str, Enum):
    """Side of a trade."""
    BUY = "BUY"
    SELL = "SELL"


@dataclass(frozen=True)
class ReferenceSymbol:
    """A tradeable symbol and the price random trades are centred on."""
    symbol: str
    base_price: Decimal


@dataclass(frozen=True)
class TradeEvent:
    """A single synthetic stock trade."""
    id: int
    ticker_symbol: str
    trade_type: TradeType
    price: Decimal
    quantity: int

    def to_dict(self) -> Dict[str, Any]:
        """Wire representation with the field names downstream consumers expect."""
        return {
            'id': self.id,
            'tickerSymbol': self.ticker_symbol,
            'tradeType': self.trade_type.value,
            'price': self.price,
            'quantity': self.quantity,
        }

    def __str__(self) -> str:
        return (
            f"ID {self.id}: {self.trade_type.value} {self.quantity} shares "
            f"of {self.ticker_symbol} for ${self.price:.2f}"
        )


# Approximate prices of large-cap US equities
REFERENCE_SYMBOLS = (
    ReferenceSymbol("AAPL", Decimal("119.72")),
    ReferenceSymbol("XOM", Decimal("91.56")),
    ReferenceSymbol("GOOG", Decimal("527.83")),
    ReferenceSymbol("BRK.A", Decimal("223999.88")),
    ReferenceSymbol("MSFT", Decimal("42.36")),
    ReferenceSymbol("WFC", Decimal("54.21")),
    ReferenceSymbol("JNJ", Decimal("99.78")),
    ReferenceSymbol("WMT", Decimal("85.91")),
    ReferenceSymbol("CHL", Decimal("66.96")),
    ReferenceSymbol("GE", Decimal("24.64")),
    ReferenceSymbol("NVS", Decimal("102.46")),
    ReferenceSymbol("PG", Decimal("85.05")),
    ReferenceSymbol("JPM", Decimal("57.82")),
    ReferenceSymbol("RDS.A", Decimal("66.72")),
    ReferenceSymbol("CVX", Decimal("110.43")),
    ReferenceSymbol("PFE", Decimal("33.07")),
    ReferenceSymbol("FB", Decimal("74.44")),
    ReferenceSymbol("VZ", Decimal("49.09")),
    ReferenceSymbol("PTR", Decimal("111.08")),
    ReferenceSymbol("BUD", Decimal("120.39")),
    ReferenceSymbol("ORCL", Decimal("43.40")),
    ReferenceSymbol("KO", Decimal("41.23")),
    ReferenceSymbol("T", Decimal("34.64")),
    ReferenceSymbol("DIS", Decimal("101.73")),
    ReferenceSymbol("AMZN", Decimal("370.56")),
)
