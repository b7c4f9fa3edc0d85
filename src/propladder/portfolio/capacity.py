# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Borrowing capacity estimate from an affordable repayment.

Uses the present value of an annuity: the largest loan whose scheduled
repayments (net of fees) equal the repayment the investor can afford.

    LoanAmount = (R - F) x [(1 - (1 + r)^-n) / r]

Where R is the affordable repayment per period, F the fees per repayment
period, r the periodic interest rate and n the total number of repayments.
"""

from __future__ import annotations

from pydantic import Field

from ..core.primitives import FloatBetween0And1, Model, PositiveFloat, RepaymentFrequencyEnum


class BorrowingCapacityResult(Model):
    """Outcome of a borrowing capacity estimate."""

    borrowing_capacity: PositiveFloat
    total_repayments: PositiveFloat
    total_interest: PositiveFloat
    total_fees: PositiveFloat


def convert_fees(
    fees: float,
    fees_frequency: RepaymentFrequencyEnum,
    repayment_frequency: RepaymentFrequencyEnum,
) -> float:
    """Express a fee charged at one frequency per period of another."""
    fees_per_year = fees * fees_frequency.periods_per_year
    return fees_per_year / repayment_frequency.periods_per_year


class BorrowingCapacityInput(Model):
    """
    Inputs to the borrowing capacity estimate.

    Attributes:
        affordable_repayment: Repayment the investor can afford per period
        interest_rate: Annual interest rate as a decimal
        loan_term_years: Loan term in years
        repayment_frequency: How often repayments are made
        fees_per_period: Fees charged per fee period
        fees_frequency: How often fees are charged
    """

    affordable_repayment: PositiveFloat
    interest_rate: FloatBetween0And1
    loan_term_years: int = Field(default=30, ge=1, le=50)
    repayment_frequency: RepaymentFrequencyEnum = RepaymentFrequencyEnum.MONTHLY
    fees_per_period: PositiveFloat = 0.0
    fees_frequency: RepaymentFrequencyEnum = RepaymentFrequencyEnum.MONTHLY


def calculate_borrowing_capacity(inputs: BorrowingCapacityInput) -> BorrowingCapacityResult:
    """
    Maximum loan supported by an affordable repayment.

    Returns a zero capacity when fees consume the whole repayment.
    """
    periods_per_year = inputs.repayment_frequency.periods_per_year
    total_periods = inputs.loan_term_years * periods_per_year
    adjusted_fees = convert_fees(
        inputs.fees_per_period, inputs.fees_frequency, inputs.repayment_frequency
    )
    net_repayment = inputs.affordable_repayment - adjusted_fees

    if net_repayment <= 0:
        return BorrowingCapacityResult(
            borrowing_capacity=0.0,
            total_repayments=0.0,
            total_interest=0.0,
            total_fees=0.0,
        )

    period_rate = inputs.interest_rate / periods_per_year
    if period_rate == 0:
        capacity = net_repayment * total_periods
    else:
        capacity = net_repayment * (1 - (1 + period_rate) ** -total_periods) / period_rate

    total_repayments = net_repayment * total_periods
    return BorrowingCapacityResult(
        borrowing_capacity=capacity,
        total_repayments=total_repayments,
        total_interest=max(0.0, total_repayments - capacity),
        total_fees=adjusted_fees * total_periods,
    )
