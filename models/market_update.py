from sqlalchemy import Column, Date, DateTime, Numeric, func

from database import Base


class DailyMarketUpdate(Base):
    """One row per calendar day; one rate/points pair per known scenario (see services.scenarios)."""

    __tablename__ = "daily_market_updates"

    date = Column(Date, primary_key=True)
    rate_30yr_fixed = Column(Numeric(10, 4), nullable=True)
    points_30yr_fixed = Column(Numeric(10, 4), nullable=True)
    rate_15yr_fixed = Column(Numeric(10, 4), nullable=True)
    points_15yr_fixed = Column(Numeric(10, 4), nullable=True)
    rate_30yr_fha = Column(Numeric(10, 4), nullable=True)
    points_30yr_fha = Column(Numeric(10, 4), nullable=True)
    rate_bank_statement = Column(Numeric(10, 4), nullable=True)
    points_bank_statement = Column(Numeric(10, 4), nullable=True)
    rate_dscr = Column(Numeric(10, 4), nullable=True)
    points_dscr = Column(Numeric(10, 4), nullable=True)
    rate_30yr_fixed_70ltv = Column(Numeric(10, 4), nullable=True)
    points_30yr_fixed_70ltv = Column(Numeric(10, 4), nullable=True)
    rate_30yr_fha_70ltv = Column(Numeric(10, 4), nullable=True)
    points_30yr_fha_70ltv = Column(Numeric(10, 4), nullable=True)
    rate_bank_statement_70ltv = Column(Numeric(10, 4), nullable=True)
    points_bank_statement_70ltv = Column(Numeric(10, 4), nullable=True)
    rate_dscr_70ltv = Column(Numeric(10, 4), nullable=True)
    points_dscr_70ltv = Column(Numeric(10, 4), nullable=True)
    rate_dscr_75ltv = Column(Numeric(10, 4), nullable=True)
    points_dscr_75ltv = Column(Numeric(10, 4), nullable=True)
    rate_bank_statement_85ltv = Column(Numeric(10, 4), nullable=True)
    points_bank_statement_85ltv = Column(Numeric(10, 4), nullable=True)
    rate_15yr_fixed_90ltv = Column(Numeric(10, 4), nullable=True)
    points_15yr_fixed_90ltv = Column(Numeric(10, 4), nullable=True)
    rate_bank_statement_90ltv = Column(Numeric(10, 4), nullable=True)
    points_bank_statement_90ltv = Column(Numeric(10, 4), nullable=True)
    rate_30yr_fixed_95ltv = Column(Numeric(10, 4), nullable=True)
    points_30yr_fixed_95ltv = Column(Numeric(10, 4), nullable=True)
    rate_15yr_fixed_95ltv = Column(Numeric(10, 4), nullable=True)
    points_15yr_fixed_95ltv = Column(Numeric(10, 4), nullable=True)
    rate_30yr_fha_95ltv = Column(Numeric(10, 4), nullable=True)
    points_30yr_fha_95ltv = Column(Numeric(10, 4), nullable=True)
    rate_30yr_fha_965ltv = Column(Numeric(10, 4), nullable=True)
    points_30yr_fha_965ltv = Column(Numeric(10, 4), nullable=True)
    rate_30yr_fixed_97ltv = Column(Numeric(10, 4), nullable=True)
    points_30yr_fixed_97ltv = Column(Numeric(10, 4), nullable=True)
    rate_15yr_fixed_97ltv = Column(Numeric(10, 4), nullable=True)
    points_15yr_fixed_97ltv = Column(Numeric(10, 4), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
