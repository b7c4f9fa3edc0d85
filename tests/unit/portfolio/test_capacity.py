# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""Unit tests for the present-value borrowing capacity calculator."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from propladder.core.primitives import RepaymentFrequencyEnum
from propladder.portfolio import (
    BorrowingCapacityInput,
    calculate_borrowing_capacity,
    convert_fees,
)


class TestBorrowingCapacity:
    def test_standard_monthly_loan(self):
        """$2,000/month at 6% over 30 years supports roughly $333.6k."""
        result = calculate_borrowing_capacity(
            BorrowingCapacityInput(affordable_repayment=2_000, interest_rate=0.06)
        )
        assert result.borrowing_capacity == pytest.approx(333_583, rel=1e-4)
        assert result.total_repayments == pytest.approx(720_000)
        assert result.total_interest == pytest.approx(720_000 - result.borrowing_capacity)
        assert result.total_fees == 0

    def test_zero_rate(self):
        result = calculate_borrowing_capacity(
            BorrowingCapacityInput(affordable_repayment=1_000, interest_rate=0.0)
        )
        assert result.borrowing_capacity == pytest.approx(360_000)
        assert result.total_interest == 0

    def test_fees_reduce_capacity(self):
        without_fees = calculate_borrowing_capacity(
            BorrowingCapacityInput(affordable_repayment=2_000, interest_rate=0.06)
        )
        with_fees = calculate_borrowing_capacity(
            BorrowingCapacityInput(
                affordable_repayment=2_000, interest_rate=0.06, fees_per_period=10
            )
        )
        assert with_fees.borrowing_capacity < without_fees.borrowing_capacity
        assert with_fees.total_fees == pytest.approx(10 * 360)

    def test_fees_exceeding_repayment_give_zero(self):
        result = calculate_borrowing_capacity(
            BorrowingCapacityInput(
                affordable_repayment=100, interest_rate=0.06, fees_per_period=150
            )
        )
        assert result.borrowing_capacity == 0
        assert result.total_repayments == 0

    def test_convert_fees(self):
        weekly_as_monthly = convert_fees(
            10, RepaymentFrequencyEnum.WEEKLY, RepaymentFrequencyEnum.MONTHLY
        )
        assert weekly_as_monthly == pytest.approx(520 / 12)
        assert convert_fees(
            26, RepaymentFrequencyEnum.FORTNIGHTLY, RepaymentFrequencyEnum.FORTNIGHTLY
        ) == pytest.approx(26)

    def test_rejects_invalid_term(self):
        with pytest.raises(ValidationError):
            BorrowingCapacityInput(affordable_repayment=1_000, interest_rate=0.06, loan_term_years=0)
