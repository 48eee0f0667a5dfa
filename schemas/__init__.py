from schemas.market_update import DailyMarketUpdateResponse, ScenarioRate
from schemas.pricing_run import (
    DispatchReport,
    PricingCallback,
    PricingRunCreate,
    PricingRunResponse,
)

__all__ = [
    "DailyMarketUpdateResponse",
    "DispatchReport",
    "PricingCallback",
    "PricingRunCreate",
    "PricingRunResponse",
    "ScenarioRate",
]
