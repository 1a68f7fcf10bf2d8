"""Nominal to real rate conversion."""

import math

ERR_INVALID_INFLATION = "invalid_inflation"
ERR_INVALID_GROWTH_RATE = "invalid_growth_rate"
ERR_NON_FINITE_RATE = "non_finite_rate"


class RateError(ValueError):
    """Rate assumptions that cannot be converted to a finite real rate."""

    def __init__(self, code: str, message: str):
        super().__init__(message)
        self.code = code


def real_annual_rate(nominal_rate: float, inflation_rate: float) -> float:
    """Return the inflation-adjusted annual rate: (1+nominal)/(1+inflation) - 1.

    Raises RateError for non-finite rates, inflation <= -100% or
    nominal <= -100% (a fractional power of a non-positive base).
    """
    if not (math.isfinite(nominal_rate) and math.isfinite(inflation_rate)):
        raise RateError(
            ERR_NON_FINITE_RATE,
            f"rates must be finite (nominal={nominal_rate}, inflation={inflation_rate})",
        )
    if inflation_rate <= -1:
        raise RateError(
            ERR_INVALID_INFLATION,
            f"inflation {inflation_rate:.2%} must be above -100%",
        )
    if nominal_rate <= -1:
        raise RateError(
            ERR_INVALID_GROWTH_RATE,
            f"growth rate {nominal_rate:.2%} must be above -100%",
        )
    real = (1 + nominal_rate) / (1 + inflation_rate) - 1
    if not math.isfinite(real):
        raise RateError(
            ERR_NON_FINITE_RATE,
            f"real rate is not finite (nominal={nominal_rate}, inflation={inflation_rate})",
        )
    return real


def real_monthly_rate(nominal_rate: float, inflation_rate: float) -> float:
    """Return the real monthly rate: (1+real_annual)^(1/12) - 1."""
    real_annual = real_annual_rate(nominal_rate, inflation_rate)
    monthly = (1 + real_annual) ** (1 / 12) - 1
    if not math.isfinite(monthly):
        raise RateError(
            ERR_NON_FINITE_RATE,
            f"real monthly rate is not finite (nominal={nominal_rate}, inflation={inflation_rate})",
        )
    return monthly
