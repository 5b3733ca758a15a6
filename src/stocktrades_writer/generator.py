"""Random stock trade generator."""

import itertools
import logging
import random
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterator, Optional, Sequence

from .models import REFERENCE_SYMBOLS, ReferenceSymbol, TradeEvent, TradeType

logger = logging.getLogger(__name__)

PRICE_PRECISION = Decimal("0.01")
MIN_PRICE = PRICE_PRECISION


class TradeGenerator:
    """
    Generates random, well-formed stock trades.

    Each trade picks a symbol uniformly from the reference table, a uniformly
    random side, a price within ``max_price_deviation`` of the symbol's base
    price and a quantity in ``[1, max_quantity]``.

    The random source and the id counter belong to the instance, so two
    generators built with the same seed produce the same sequence of trades.
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        seed: Optional[int] = None,
        reference_symbols: Sequence[ReferenceSymbol] = REFERENCE_SYMBOLS,
        max_price_deviation: float = 0.05,
        max_quantity: int = 2000
    ):
        if not reference_symbols:
            raise ValueError("reference_symbols must not be empty")
        if not 0 <= max_price_deviation < 1:
            raise ValueError("max_price_deviation must be in [0, 1)")
        if max_quantity < 1:
            raise ValueError("max_quantity must be at least 1")

        self.rng = rng if rng is not None else random.Random(seed)
        self.reference_symbols = tuple(reference_symbols)
        self.max_price_deviation = max_price_deviation
        self.max_quantity = max_quantity
        self._ids = itertools.count(1)

        logger.debug(
            f"TradeGenerator initialized with {len(self.reference_symbols)} symbols, "
            f"deviation={max_price_deviation}, max_quantity={max_quantity}"
        )

    def next_trade(self) -> TradeEvent:
        """Return a new random trade with the next id."""
        reference = self.rng.choice(self.reference_symbols)
        trade_type = self.rng.choice((TradeType.BUY, TradeType.SELL))

        offset = self.rng.uniform(-self.max_price_deviation, self.max_price_deviation)
        price = reference.base_price * (1 + Decimal(str(offset)))
        price = max(price.quantize(PRICE_PRECISION, rounding=ROUND_HALF_UP), MIN_PRICE)

        quantity = self.rng.randint(1, self.max_quantity)

        return TradeEvent(
            id=next(self._ids),
            ticker_symbol=reference.symbol,
            trade_type=trade_type,
            price=price,
            quantity=quantity
        )

    def __iter__(self) -> Iterator[TradeEvent]:
        return self

    def __next__(self) -> TradeEvent:
        return self.next_trade()
