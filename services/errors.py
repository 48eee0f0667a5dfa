class PricingQueueError(Exception):
    """Base class for pricing queue errors."""


class InvalidCallbackError(PricingQueueError):
    """Callback payload cannot be applied (e.g. missing run_id)."""


class RunNotFoundError(PricingQueueError):
    def __init__(self, run_id: str):
        super().__init__(f"Pricing run not found: {run_id}")
        self.run_id = run_id


class ExecutorError(PricingQueueError):
    """The pricing executor could not be triggered."""
