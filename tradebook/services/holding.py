"""
tradebook/services/holding.py

Derives current holdings from the caller's trades.

For each (ticker, asset_type, currency):
  quantity      = sum(buy quantities) - sum(sell quantities)
  average_price = sum(buy quantity * buy price) / sum(buy quantities)

Positions whose net quantity is zero (fully sold) are left out. Sells do not
change the average buy price.
"""

from collections import defaultdict
from decimal import Decimal, ROUND_HALF_UP

from tradebook.models.trade import TradeType
from tradebook.schemas.holding import HoldingRead
from tradebook.services.guard import ResourceGuard

PRICE_QUANT = Decimal("0.00000001")


def get_holdings(guard: ResourceGuard) -> list[HoldingRead]:
    bought_qty = defaultdict(Decimal)
    bought_cost = defaultdict(Decimal)
    net_qty = defaultdict(Decimal)

    for trade in guard.trades().all():
        key = (trade.ticker, trade.asset_type, trade.currency)
        quantity = Decimal(trade.quantity)
        if trade.type == TradeType.BUY.value:
            bought_qty[key] += quantity
            bought_cost[key] += quantity * Decimal(trade.price)
            net_qty[key] += quantity
        else:
            net_qty[key] -= quantity

    holdings = []
    for key in sorted(net_qty):
        quantity = net_qty[key]
        if quantity == 0:
            continue
        ticker, asset_type, currency = key
        if bought_qty[key]:
            average = (bought_cost[key] / bought_qty[key]).quantize(PRICE_QUANT, rounding=ROUND_HALF_UP)
        else:
            average = Decimal("0")
        holdings.append(HoldingRead(
            ticker=ticker,
            asset_type=asset_type,
            currency=currency,
            quantity=quantity,
            average_price=average,
        ))
    return holdings
