"""OpenFare lock model.

The lock is treated as an opaque funding declaration: plan conditions and
payee details are kept as plain JSON objects and never interpreted here.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

FILE_NAME = "OpenFare.lock"


@dataclass(frozen=True)
class Payments:
    """Payment amounts attached to a plan."""

    total: str | None = None
    shares: dict[str, int] | None = None

    def to_dict(self) -> dict[str, object]:
        data: dict[str, object] = {}
        if self.total is not None:
            data["total"] = self.total
        if self.shares is not None:
            data["shares"] = dict(self.shares)
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Payments:
        shares = data.get("shares")
        return cls(
            total=data.get("total"),
            shares=dict(shares) if shares is not None else None,
        )


@dataclass(frozen=True)
class Plan:
    """A single payment plan declared by a lock."""

    type: str
    conditions: dict[str, Any] = field(default_factory=dict)
    payments: Payments = field(default_factory=Payments)

    def to_dict(self) -> dict[str, object]:
        return {
            "type": self.type,
            "conditions": dict(self.conditions),
            "payments": self.payments.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Plan:
        return cls(
            type=data["type"],
            conditions=dict(data.get("conditions") or {}),
            payments=Payments.from_dict(data.get("payments") or {}),
        )


@dataclass(frozen=True)
class Lock:
    """Funding declaration read from a package's ``OpenFare.lock`` file."""

    scheme_version: str
    plans: dict[str, Plan] = field(default_factory=dict)
    payees: dict[str, dict[str, Any]] = field(default_factory=dict)

    def to_dict(self) -> dict[str, object]:
        return {
            "scheme-version": self.scheme_version,
            "plans": {plan_id: plan.to_dict() for plan_id, plan in self.plans.items()},
            "payees": {name: dict(payee) for name, payee in self.payees.items()},
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Lock:
        """Build a lock from an already schema-validated mapping."""
        return cls(
            scheme_version=data["scheme-version"],
            plans={
                str(plan_id): Plan.from_dict(plan)
                for plan_id, plan in (data.get("plans") or {}).items()
            },
            payees={str(name): dict(payee) for name, payee in (data.get("payees") or {}).items()},
        )
