from models.market_update import DailyMarketUpdate
from models.pricing_run import PricingRun

__all__ = [
    "DailyMarketUpdate",
    "PricingRun",
]
