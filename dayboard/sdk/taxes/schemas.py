"""Pydantic schemas for tax-rules validation.

These schemas validate the tax-rules/*.yaml files and provide typed access
to bracket tables and standard deductions. All money is integer cents and
all rates are basis points, so no float ever enters the tax arithmetic.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class Bracket(BaseModel):
    """Single tax bracket entry."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    low: int = Field(..., ge=0, description="Lower bound in cents (inclusive)")
    high: int = Field(..., ge=0, description="Upper bound in cents, 0 for the unbounded top bracket")
    rate_bps: int = Field(..., ge=0, le=10000, description="Marginal rate in basis points")

    @property
    def is_top(self) -> bool:
        return self.high == 0


def check_bracket_coverage(brackets: list[Bracket]) -> list[str]:
    """Check that sorted brackets cover [0, inf) with no gaps or overlaps.

    Returns:
        List of problems (empty when the table is well formed). An empty
        table is well formed and means the jurisdiction taxes nothing.
    """
    if not brackets:
        return []

    errors = []
    ordered = sorted(brackets, key=lambda b: b.low)

    if ordered[0].low != 0:
        errors.append(f"first bracket starts at {ordered[0].low}, expected 0")

    for index, bracket in enumerate(ordered):
        is_last = index == len(ordered) - 1
        if bracket.is_top and not is_last:
            errors.append(f"unbounded bracket at {bracket.low} is not the last bracket")
            continue
        if not bracket.is_top and bracket.high <= bracket.low:
            errors.append(f"bracket {bracket.low}-{bracket.high} is empty or inverted")
        if is_last and not bracket.is_top:
            errors.append(f"last bracket ends at {bracket.high}; top bracket must have high: 0")
        if not is_last:
            next_low = ordered[index + 1].low
            if bracket.high != next_low:
                kind = "gap" if bracket.high < next_low else "overlap"
                errors.append(f"{kind} between {bracket.high} and {next_low}")

    return errors


class JurisdictionRules(BaseModel):
    """Bracket table for one jurisdiction (a state)."""
    model_config = ConfigDict(extra="forbid")

    brackets: list[Bracket] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_coverage(self) -> "JurisdictionRules":
        errors = check_bracket_coverage(self.brackets)
        if errors:
            raise ValueError("; ".join(errors))
        self.brackets.sort(key=lambda b: b.low)
        return self


class StandardDeduction(BaseModel):
    """Standard deduction per filing status, in cents."""
    model_config = ConfigDict(extra="forbid")

    single: int = Field(..., ge=0)
    married: int = Field(..., ge=0)


class FederalRules(JurisdictionRules):
    """Federal bracket table plus standard deductions."""

    standard_deduction: StandardDeduction


class TaxRules(BaseModel):
    """Complete tax tables for a year."""
    model_config = ConfigDict(extra="ignore")  # Allow unknown fields for forward compat

    year: int
    federal: FederalRules
    states: dict[str, JurisdictionRules] = Field(default_factory=dict)

    @field_validator("states")
    @classmethod
    def normalize_state_codes(cls, value: dict[str, JurisdictionRules]) -> dict[str, JurisdictionRules]:
        return {code.upper().strip(): rules for code, rules in value.items()}

    def state_brackets(self, state: str) -> Optional[list[Bracket]]:
        """Bracket table for a state.

        Returns:
            The brackets (empty for a no-income-tax state), or None if the
            state has no table for this year.
        """
        rules = self.states.get(state.upper().strip())
        if rules is None:
            return None
        return rules.brackets

    def standard_deduction(self, filing_status: str) -> int:
        return getattr(self.federal.standard_deduction, filing_status)
