"""Amortizing fixed-rate bonds and the sinking-fund generators behind them."""

from jamort.instruments.bond import (
    AmortizingFixedRateBond,
    build_amortizing_bond,
    build_sinking_fund_bond,
)
from jamort.instruments.legs import (
    NotionalProfile,
    RedeemedLeg,
    add_redemptions,
    fixed_rate_leg,
    notional_profile,
)
from jamort.instruments.sinking import (
    sinking_notionals,
    sinking_periods,
    sinking_redemptions,
    sinking_schedule,
)
from jamort.instruments.terms import SinkingFundTerms

__all__ = [
    # Bonds
    "AmortizingFixedRateBond",
    "build_amortizing_bond",
    "build_sinking_fund_bond",
    "SinkingFundTerms",
    # Sinking fund
    "sinking_periods",
    "sinking_schedule",
    "sinking_notionals",
    "sinking_redemptions",
    # Legs
    "NotionalProfile",
    "RedeemedLeg",
    "fixed_rate_leg",
    "notional_profile",
    "add_redemptions",
]
