"""Pydantic schemas for DayBoard data validation.

All schemas use extra='forbid' to reject unknown fields, ensuring
typos in profile and data files cause clear errors rather than silent ignoring.
Money is integer cents throughout.
"""

import uuid
from datetime import date
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


Frequency = Literal["weekly", "monthly", "quarterly", "yearly", "unknown"]
SubscriptionSource = Literal["manual", "detected"]


def new_id() -> str:
    return uuid.uuid4().hex


# =============================================================================
# Tax estimation
# =============================================================================


class TaxProfile(BaseModel):
    """Inputs to a tax estimate.

    filing_status and pay_frequency are free strings; the estimator
    validates them and raises its own error types.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    annual_income_cents: int = Field(..., ge=0, description="Gross annual income")
    state: str = Field("", description="Two-letter state code, empty for none")
    filing_status: str = Field("single", description="single or married")
    pay_frequency: str = Field("biweekly", description="weekly, biweekly, monthly; anything else counts as biweekly")
    term_weeks: int = Field(0, ge=0, description="Length of the pay term in weeks")

    @field_validator("state")
    @classmethod
    def normalize_state(cls, value: str) -> str:
        return value.upper().strip()


class TaxResult(BaseModel):
    """Computed taxes and take-home pay. Immutable."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    federal_cents: int
    state_cents: int
    fica_cents: int
    per_paycheck_net_cents: int
    term_net_cents: int = Field(..., description="Net annual income after all three taxes")
    taxable_income_cents: int = Field(0, ge=0, description="Gross minus standard deduction, floored at 0")
    paychecks: int = Field(0, ge=0, description="Paychecks in the term")

    @property
    def total_tax_cents(self) -> int:
        return self.federal_cents + self.state_cents + self.fica_cents


class StateTaxComparison(BaseModel):
    """One state's take-home pay for the same income and pay schedule."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    state: str
    state_cents: int
    effective_rate_bps: int = Field(..., description="State tax as a share of gross income, truncated")
    net_annual_cents: int
    per_paycheck_net_cents: int


# =============================================================================
# Transactions and subscriptions
# =============================================================================


class Transaction(BaseModel):
    """A settled or pending bank transaction. Positive amounts are spend."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    id: str
    account_id: str = ""
    amount_cents: float
    date: date
    merchant_name: str = ""
    pending: bool = False
    category: List[str] = Field(default_factory=list)


class RecurringSubscription(BaseModel):
    """A subscription inferred from transaction history."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    merchant_name: str
    amount_cents: float
    frequency: Frequency
    last_charge_date: date
    next_due_date: date
    category: List[str] = Field(default_factory=list)


class Subscription(BaseModel):
    """A stored subscription, entered manually or synced from detection."""

    model_config = ConfigDict(extra="forbid")

    id: str = Field(default_factory=new_id)
    merchant: str
    amount_cents: int
    cadence_days: int
    next_due: Optional[date] = None
    source: SubscriptionSource = "manual"
    is_active: bool = True


# =============================================================================
# Profile, commute, daily burn
# =============================================================================


class UserProfile(BaseModel):
    """User settings used for tax and cost estimation (profile.yaml)."""

    model_config = ConfigDict(extra="forbid")

    state: str = ""
    filing_status: str = "single"
    pay_frequency: str = "biweekly"
    term_weeks: int = Field(12, ge=0)
    annual_income_cents: Optional[int] = Field(None, ge=0)
    hourly_cents: Optional[int] = Field(None, ge=0)
    hours_per_week: Optional[int] = Field(None, ge=0)
    stipend_cents: Optional[int] = Field(None, ge=0)
    start_date: Optional[date] = None
    home_addr: str = ""
    office_addr: str = ""
    city: str = ""
    in_office_days: int = Field(3, ge=0, le=7)
    food_cost_cents: int = Field(1200, ge=0)

    def annual_income(self) -> int:
        """Annual gross income in cents.

        Explicit annual_income_cents wins; otherwise hourly pay is
        annualized over 52 weeks and any stipend is added.
        """
        if self.annual_income_cents is not None:
            return self.annual_income_cents
        hourly = (self.hourly_cents or 0) * (self.hours_per_week or 0) * 52
        return hourly + (self.stipend_cents or 0)

    def to_tax_profile(self) -> TaxProfile:
        return TaxProfile(
            annual_income_cents=self.annual_income(),
            state=self.state,
            filing_status=self.filing_status,
            pay_frequency=self.pay_frequency,
            term_weeks=self.term_weeks,
        )


class CommuteEntry(BaseModel):
    """A logged commute trip and what it cost."""

    model_config = ConfigDict(extra="forbid")

    id: str = Field(default_factory=new_id)
    date: date
    origin: str = ""
    destination: str = ""
    cost_cents: int = Field(..., ge=0)
    method: str = ""


class CityCostModel(BaseModel):
    """Ride-hail pricing for a city."""

    model_config = ConfigDict(extra="forbid")

    city: str
    base_fare_cents: int = Field(..., ge=0)
    per_mile_cents: int = Field(..., ge=0)
    per_minute_cents: int = Field(..., ge=0)


class CommuteEstimate(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    distance_miles: float
    duration_minutes: float
    est_cost_low_cents: int
    est_cost_high_cents: int


class DailyBurn(BaseModel):
    """Money spent on a given day, with the items that make it up."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    date: date
    total_cents: int
    subscriptions: List[Subscription] = Field(default_factory=list)
    commutes: List[CommuteEntry] = Field(default_factory=list)
    food_cents: int = 0
