from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from ..common.validators import require_money
from ..core.constants import DEFAULT_BONUS_PER_DAY, DEFAULT_INSURANCE_RATE_PERCENT, DEFAULT_TAX_RATE_PERCENT


@dataclass(frozen=True)
class RateConfiguration:
    """Tunable parameters of the payroll formula.

    Immutable: replacing the configuration only affects payrolls computed
    afterwards, never lines already stored.
    """

    tax_rate_percent: Decimal = DEFAULT_TAX_RATE_PERCENT
    insurance_rate_percent: Decimal = DEFAULT_INSURANCE_RATE_PERCENT
    bonus_per_day: Decimal = DEFAULT_BONUS_PER_DAY

    @classmethod
    def from_values(cls, *, tax_rate_percent: Any, insurance_rate_percent: Any, bonus_per_day: Any) -> "RateConfiguration":
        return cls(
            tax_rate_percent=require_money(tax_rate_percent, "tax_rate_percent", places=None),
            insurance_rate_percent=require_money(insurance_rate_percent, "insurance_rate_percent", places=None),
            bonus_per_day=require_money(bonus_per_day, "bonus_per_day", places=None),
        )

    @classmethod
    def from_settings(cls, settings: Any) -> "RateConfiguration":
        """Build from a settings module, falling back to the defaults."""

        return cls.from_values(
            tax_rate_percent=getattr(settings, "PAYROLL_TAX_RATE_PERCENT", DEFAULT_TAX_RATE_PERCENT),
            insurance_rate_percent=getattr(settings, "PAYROLL_INSURANCE_RATE_PERCENT", DEFAULT_INSURANCE_RATE_PERCENT),
            bonus_per_day=getattr(settings, "PAYROLL_BONUS_PER_DAY", DEFAULT_BONUS_PER_DAY),
        )

    def to_dict(self) -> dict:
        return {
            "tax_rate_percent": str(self.tax_rate_percent),
            "insurance_rate_percent": str(self.insurance_rate_percent),
            "bonus_per_day": str(self.bonus_per_day),
        }
