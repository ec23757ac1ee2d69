"""DayBoard MCP Server - FastMCP implementation for tax and subscription tools."""

import logging
from datetime import date
from typing import Any

from mcp.server.fastmcp import FastMCP
from pydantic import Field

from dayboard.sdk import (
    TaxProfile,
    compare_states as sdk_compare_states,
    daily_burn as sdk_daily_burn,
    detect_recurring as sdk_detect_recurring,
    estimate_taxes_for_year,
    load_tax_rules,
    open_store,
    parse_transactions,
)

logger = logging.getLogger(__name__)

mcp = FastMCP("dayboard")


def _load_rules(year: int | None):
    """Tables for year, or for the current year falling back to the newest earlier one."""
    if year is None:
        return load_tax_rules(date.today().year, fallback=True)
    return load_tax_rules(year)


# --- Tools ---

@mcp.tool()
async def estimate_taxes(
    annual_income_cents: int = Field(description="Gross annual income in cents"),
    state: str = Field(default="", description="Two-letter state code (e.g., 'IN'); empty for no state tax"),
    filing_status: str = Field(default="single", description="Filing status (only 'single' is supported)"),
    pay_frequency: str = Field(default="biweekly", description="'weekly', 'biweekly' or 'monthly'"),
    term_weeks: int = Field(default=12, description="Length of the work term in weeks"),
    year: int | None = Field(default=None, description="Tax year (default: current year, else the newest earlier table)"),
) -> dict[str, Any]:
    """Estimate federal, state and FICA tax plus net pay per paycheck. All amounts are integer cents."""
    try:
        profile = TaxProfile(
            annual_income_cents=annual_income_cents,
            state=state,
            filing_status=filing_status,
            pay_frequency=pay_frequency,
            term_weeks=term_weeks,
        )
        rules = _load_rules(year)
        result = estimate_taxes_for_year(profile, rules.year, rules=rules)

        return {
            "year": rules.year,
            "result": result.model_dump(),
            "total_tax_cents": result.total_tax_cents,
        }

    except Exception as e:
        logger.error(f"Error estimating taxes: {e}")
        return {"error": str(e), "result": None}


@mcp.tool()
async def compare_states(
    annual_income_cents: int = Field(description="Gross annual income in cents"),
    states: list[str] | None = Field(default=None, description="State codes to compare (default: every state with a table)"),
    filing_status: str = Field(default="single", description="Filing status (only 'single' is supported)"),
    pay_frequency: str = Field(default="biweekly", description="'weekly', 'biweekly' or 'monthly'"),
    term_weeks: int = Field(default=12, description="Length of the work term in weeks"),
    year: int | None = Field(default=None, description="Tax year (default: current year, else the newest earlier table)"),
) -> dict[str, Any]:
    """Compare state tax and take-home pay for one income across states, highest net pay first."""
    try:
        profile = TaxProfile(
            annual_income_cents=annual_income_cents,
            filing_status=filing_status,
            pay_frequency=pay_frequency,
            term_weeks=term_weeks,
        )
        rules = _load_rules(year)
        comparisons = sdk_compare_states(profile, rules, states)

        return {
            "year": rules.year,
            "states": [c.model_dump() for c in comparisons],
        }

    except Exception as e:
        logger.error(f"Error comparing states: {e}")
        return {"error": str(e), "states": []}


@mcp.tool()
async def detect_recurring(
    transactions: list[dict[str, Any]] | None = Field(
        default=None,
        description="Transactions to scan (id, account_id, amount_cents, date, merchant_name, pending). "
                    "Omit to scan the transactions stored locally.",
    ),
) -> dict[str, Any]:
    """Find recurring charges (same merchant and amount at regular intervals) with predicted next due dates."""
    try:
        if transactions is None:
            txns = open_store().list_transactions()
        else:
            txns = parse_transactions(transactions)

        detected = sdk_detect_recurring(txns)
        return {
            "subscriptions": [d.model_dump(mode="json") for d in detected],
            "count": len(detected),
        }

    except Exception as e:
        logger.error(f"Error detecting recurring charges: {e}")
        return {"error": str(e), "subscriptions": [], "count": 0}


@mcp.tool()
async def list_subscriptions(
    include_inactive: bool = Field(default=False, description="Include inactive subscriptions"),
) -> dict[str, Any]:
    """List tracked subscriptions, soonest due first."""
    try:
        subs = open_store().list_subscriptions(active_only=not include_inactive)
        return {
            "subscriptions": [s.model_dump(mode="json") for s in subs],
            "count": len(subs),
        }

    except Exception as e:
        logger.error(f"Error listing subscriptions: {e}")
        return {"error": str(e), "subscriptions": [], "count": 0}


@mcp.tool()
async def daily_burn(
    day: str | None = Field(default=None, description="Day to total (YYYY-MM-DD, default today)"),
) -> dict[str, Any]:
    """Total what a day costs: subscriptions due that day, logged commutes and food."""
    try:
        target = date.fromisoformat(day) if day else date.today()
        store = open_store()
        profile = store.get_profile()
        food = profile.food_cost_cents if profile else 0

        burn = sdk_daily_burn(store.list_subscriptions(), store.list_commutes(), food, target)
        return {"burn": burn.model_dump(mode="json")}

    except Exception as e:
        logger.error(f"Error computing daily burn: {e}")
        return {"error": str(e), "burn": None}


# --- Server Entry Point ---

def run_server():
    """Run the MCP server in stdio mode."""
    mcp.run(transport="stdio")


if __name__ == "__main__":
    run_server()
