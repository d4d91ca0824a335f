from __future__ import annotations

from datetime import date
from typing import Any

from .base import BaseClient

REPORT_PERIODS = ("week", "month", "quarter", "year")


def _day(value: date | str, name: str) -> date:
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise ValueError(f"{name} must be YYYY-MM-DD, got {value!r}") from exc


def _date_range(start_date: date | str, end_date: date | str) -> dict[str, str]:
    start = _day(start_date, "start_date")
    end = _day(end_date, "end_date")
    if start > end:
        raise ValueError(f"start_date {start} is after end_date {end}")
    return {"start_date": start.isoformat(), "end_date": end.isoformat()}


class ReportsClient(BaseClient):
    """Management reports behind the ``/reports`` screen.

    Ranged reports take inclusive ``start_date``/``end_date`` days. Bodies
    differ per report and are returned as plain dicts.
    """

    module = "reports"

    async def sales(self, start_date: date | str, end_date: date | str) -> dict[str, Any]:
        return await self._report("sales", params=_date_range(start_date, end_date))

    async def purchases(self, start_date: date | str, end_date: date | str) -> dict[str, Any]:
        return await self._report("purchases", params=_date_range(start_date, end_date))

    async def profit_loss(self, start_date: date | str, end_date: date | str) -> dict[str, Any]:
        return await self._report("profit-loss", params=_date_range(start_date, end_date))

    async def work_orders(self, start_date: date | str, end_date: date | str) -> dict[str, Any]:
        return await self._report("work-orders", params=_date_range(start_date, end_date))

    async def inventory(self) -> dict[str, Any]:
        return await self._report("inventory")

    async def vehicles(self) -> dict[str, Any]:
        return await self._report("vehicles")

    async def daily(self, day: date | str) -> dict[str, Any]:
        return await self._report("daily", params={"date": _day(day, "date").isoformat()})

    async def overview(self, period: str = "month") -> dict[str, Any]:
        if period not in REPORT_PERIODS:
            raise ValueError(f"period must be one of {REPORT_PERIODS}, got {period!r}")
        return await self._report("overview", params={"period": period})

    async def _report(self, name: str, params: dict[str, str] | None = None) -> dict[str, Any]:
        data = await self._request("GET", f"/reports/{name}", params=params, operation=name.replace("-", "_"))
        return dict(data) if isinstance(data, dict) else {"value": data}
