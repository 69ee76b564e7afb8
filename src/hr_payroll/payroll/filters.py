from __future__ import annotations

from typing import Iterable, Optional, Sequence

from ..core.enums import FilterMode
from ..core.exceptions import ValidationError
from .model import PayrollRecord, Period


class PayrollFilterView:
    """Display subset of the ledger: one period, or everything.

    ``visible`` is re-derived whenever records, mode or period are replaced.
    """

    def __init__(
        self,
        records: Iterable[PayrollRecord] = (),
        *,
        mode: FilterMode | str = FilterMode.ALL,
        period: Optional[Period] = None,
    ):
        self._records: tuple[PayrollRecord, ...] = tuple(records)
        self._mode = self._parse_mode(mode)
        self._period = period
        self._visible: list[PayrollRecord] = []
        self._refresh()

    @staticmethod
    def apply(
        records: Iterable[PayrollRecord],
        mode: FilterMode | str,
        period: Optional[Period] = None,
    ) -> list[PayrollRecord]:
        mode = PayrollFilterView._parse_mode(mode)
        if mode is FilterMode.ALL:
            return list(records)
        if period is None:
            raise ValidationError("period is required when filtering by period", field="period")
        return [r for r in records if r.month == period.month and r.year == period.year]

    @staticmethod
    def _parse_mode(mode: FilterMode | str) -> FilterMode:
        try:
            return FilterMode(mode)
        except ValueError:
            raise ValidationError(f"Unknown filter mode: {mode}", field="mode")

    @property
    def records(self) -> Sequence[PayrollRecord]:
        return self._records

    @records.setter
    def records(self, records: Iterable[PayrollRecord]) -> None:
        self._records = tuple(records)
        self._refresh()

    @property
    def mode(self) -> FilterMode:
        return self._mode

    @mode.setter
    def mode(self, mode: FilterMode | str) -> None:
        self._mode = self._parse_mode(mode)
        self._refresh()

    @property
    def period(self) -> Optional[Period]:
        return self._period

    @period.setter
    def period(self, period: Optional[Period]) -> None:
        self._period = period
        self._refresh()

    @property
    def visible(self) -> Sequence[PayrollRecord]:
        return self._visible

    def _refresh(self) -> None:
        # Nothing selected yet: show an empty period rather than failing.
        if self._mode is FilterMode.BY_PERIOD and self._period is None:
            self._visible = []
            return
        self._visible = self.apply(self._records, self._mode, self._period)
