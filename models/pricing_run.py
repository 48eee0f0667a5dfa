from sqlalchemy import JSON, Column, DateTime, Index, Integer, String, Text, func, text

from database import Base

RUN_STATUSES = ("queued", "running", "completed", "failed")
TERMINAL_STATUSES = ("completed", "failed")
DISPATCHABLE_STATUSES = ("queued", "failed")


class PricingRun(Base):
    __tablename__ = "pricing_runs"

    id = Column(String(64), primary_key=True, index=True)
    status = Column(String(32), nullable=False, default="queued", index=True)
    scenario_type = Column(String(64), nullable=True, index=True)
    # Request parameters handed to the pricing executor
    scenario_json = Column(JSON, nullable=False, default=dict)
    retry_count = Column(Integer, nullable=False, default=0)
    # {rate, discount_points, screenshot_1, screenshot_2} as reported by the executor callback
    results_json = Column(JSON, nullable=True)
    error_message = Column(Text, nullable=True)
    queued_at = Column(DateTime(timezone=True), nullable=True)
    started_at = Column(DateTime(timezone=True), nullable=True)
    completed_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    __table_args__ = (
        # At most one row may hold the running slot.
        Index(
            "uq_pricing_runs_single_running",
            "status",
            unique=True,
            sqlite_where=text("status = 'running'"),
            postgresql_where=text("status = 'running'"),
        ),
    )
