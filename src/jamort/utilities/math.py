"""Financial mathematics utilities for level-payment amortization.

This module provides the annuity (level payment) formula and JAX versions of
the sinking-fund balance curve, for evaluating many bonds at once or
differentiating the curve with respect to the coupon rate.

A sinking-fund balance after k of n periods at per-period rate c is

    B_k = F * ((1+c)^k - ((1+c)^k - 1) / (1 - (1+c)^-n))

which is the outstanding principal of a loan repaid by n level payments of
``annuity_amount(F, c, n)``.
"""

from __future__ import annotations

from functools import partial

import jax
import jax.numpy as jnp


def annuity_amount(notional: float, rate: float, n_periods: int) -> float:
    """Calculate the level payment that amortizes a notional.

    Uses the formula: A = N * r / (1 - (1 + r)^(-n))

    Args:
        notional: Notional principal amount
        rate: Periodic interest rate (e.g., 0.05 for 5% per period)
        n_periods: Number of payment periods

    Returns:
        Payment amount per period (interest plus principal)

    Example:
        >>> round(annuity_amount(1000.0, 0.05, 5), 4)
        230.9748
    """
    if n_periods == 0:
        return 0.0

    if abs(rate) < 1e-10:
        return notional / n_periods

    denominator = 1.0 - (1.0 + rate) ** (-n_periods)
    return notional * rate / denominator


@partial(jax.jit, static_argnames=("n_periods",))
def sinking_fund_balance_vectorized(
    coupon_rate: jnp.ndarray,
    face_amount: jnp.ndarray,
    n_periods: int,
) -> jnp.ndarray:
    """Sinking-fund balance curve as a JAX array of length ``n_periods + 1``.

    The first entry is the face amount and the last entry is exactly zero.
    Unlike :func:`jamort.instruments.sinking.sinking_notionals` no guard is
    applied: a zero rate yields NaNs.

    Args:
        coupon_rate: Per-period coupon rate
        face_amount: Initial face amount
        n_periods: Number of sinking periods (static)

    Example:
        >>> curve = sinking_fund_balance_vectorized(0.05, 1000.0, n_periods=5)
        >>> curve.shape
        (6,)
    """
    growth = jnp.power(1.0 + coupon_rate, jnp.arange(n_periods + 1))
    total_value = jnp.power(1.0 + coupon_rate, n_periods)
    balances = face_amount * (growth - (growth - 1.0) / (1.0 - 1.0 / total_value))
    return balances.at[-1].set(0.0)


def sinking_fund_balances(
    coupon_rates: jnp.ndarray,
    face_amounts: jnp.ndarray,
    n_periods: int,
) -> jnp.ndarray:
    """Balance curves for a batch of bonds sharing the number of periods.

    Returns:
        Array of shape ``(len(coupon_rates), n_periods + 1)``
    """
    return jax.vmap(lambda c, f: sinking_fund_balance_vectorized(c, f, n_periods))(
        jnp.asarray(coupon_rates), jnp.asarray(face_amounts)
    )
