# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from enum import Enum


class SimulatorStatusEnum(str, Enum):
    """Lifecycle of a TimelineSimulator run."""

    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"


class PurchaseStatusEnum(str, Enum):
    """
    Outcome of an acquisition slot or of a single simulated period.

    - PURCHASED: the slot was committed (or a purchase happened in the period)
    - WAITING: only the deposit test failed; accruing savings can close the gap
    - BLOCKED: a hard cap failed (borrowing capacity or serviceability)
    """

    PURCHASED = "purchased"
    BLOCKED = "blocked"
    WAITING = "waiting"


class AffordabilityTestEnum(str, Enum):
    """The three lender-style feasibility tests applied to a candidate."""

    DEPOSIT = "deposit"
    BORROWING = "borrowing"
    SERVICEABILITY = "serviceability"


class BottleneckTypeEnum(str, Enum):
    """Constraint types reported by the feasibility analyzer."""

    DEPOSIT = "deposit"
    BORROWING = "borrowing"
    SERVICEABILITY = "serviceability"
    TIMELINE = "timeline"  # Only the planning horizon binds


class SeverityEnum(str, Enum):
    """Overall severity of a plan's infeasibility."""

    NONE = "none"
    MINOR = "minor"
    MODERATE = "moderate"
    MAJOR = "major"


class PriorityEnum(str, Enum):
    """Suggestion priority, ordered high to low by `rank`."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def rank(self) -> int:
        return {"high": 0, "medium": 1, "low": 2}[self.value]


class RepaymentFrequencyEnum(str, Enum):
    """Loan repayment (and fee) frequencies with their periods per year."""

    WEEKLY = "weekly"
    FORTNIGHTLY = "fortnightly"
    MONTHLY = "monthly"

    @property
    def periods_per_year(self) -> int:
        return {"weekly": 52, "fortnightly": 26, "monthly": 12}[self.value]


class RiskLevelEnum(str, Enum):
    """Leverage-based risk classification used in scenario comparison."""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class AustralianStateEnum(str, Enum):
    """State or territory whose transfer duty schedule applies to a purchase."""

    VIC = "VIC"
    NSW = "NSW"
    QLD = "QLD"
    SA = "SA"
    WA = "WA"
    TAS = "TAS"
    NT = "NT"
    ACT = "ACT"
