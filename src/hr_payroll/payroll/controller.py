from __future__ import annotations

import csv
import io
import logging
from functools import wraps

from flask import Flask, jsonify, request

from ..common.datetime_utils import current_period
from ..common.validators import require_month, require_year
from ..container import Container
from ..core.enums import ErrorCategory, FilterMode
from ..core.exceptions import DuplicatePeriodError, NotFoundError, StoreError, ValidationError
from .filters import PayrollFilterView
from .model import PayrollRecord, Period
from .rates import RateConfiguration

logger = logging.getLogger(__name__)

CSV_FIELDS = [
    "payroll_id",
    "employee_id",
    "employee_name",
    "month",
    "year",
    "base_salary",
    "deductions",
    "bonuses",
    "net_salary",
]


def _money(value) -> str:
    return f"{value:.2f}"


def register(app: Flask, container: Container) -> None:
    ledger = container.payroll_ledger

    def _fail(category: ErrorCategory, message: str, status: int):
        return jsonify({"success": False, "error": category.value, "message": message}), status

    def json_errors(view):
        """Map each domain error kind to its own response category."""

        @wraps(view)
        def wrapper(*args, **kwargs):
            try:
                return view(*args, **kwargs)
            except ValidationError as e:
                return _fail(ErrorCategory.VALIDATION, str(e), 400)
            except NotFoundError as e:
                return _fail(ErrorCategory.NOT_FOUND, str(e), 404)
            except DuplicatePeriodError as e:
                return _fail(ErrorCategory.DUPLICATE, str(e), 409)
            except StoreError as e:
                logger.error("Payroll store failure in %s: %s", request.path, e)
                return _fail(ErrorCategory.STORE, f"Storage error: {e}", 500)

        return wrapper

    def _employee_names(records) -> dict[int, str]:
        found = container.employees_repo.get_many(r.employee_id for r in records)
        return {employee_id: e.full_name for employee_id, e in found.items()}

    def _to_json(record: PayrollRecord, names: dict[int, str] | None = None) -> dict:
        return {
            "payroll_id": record.payroll_id,
            "employee_id": record.employee_id,
            "employee_name": (names or {}).get(record.employee_id, "-"),
            "month": record.month,
            "year": record.year,
            "base_salary": _money(record.base_salary),
            "deductions": _money(record.deductions),
            "bonuses": _money(record.bonuses),
            "net_salary": _money(record.net_salary),
        }

    def _body() -> dict:
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            raise ValidationError("Request body must be a JSON object")
        return data

    def _selected_period() -> Period:
        month_default, year_default = current_period()
        return Period(
            month=require_month(request.args.get("month", month_default)),
            year=require_year(request.args.get("year", year_default)),
        )

    def _filtered_records():
        mode = request.args.get("mode", FilterMode.ALL.value)
        period = _selected_period() if mode == FilterMode.BY_PERIOD.value else None
        return PayrollFilterView.apply(ledger.list(), mode, period)

    def _record_from_body(data: dict, *, payroll_id: int | None = None) -> PayrollRecord:
        # Client-sent net_salary is dropped; the ledger recomputes it.
        return PayrollRecord(
            payroll_id=payroll_id,
            employee_id=data.get("employee_id"),
            month=data.get("month"),
            year=data.get("year"),
            base_salary=data.get("base_salary"),
            deductions=data.get("deductions", "0"),
            bonuses=data.get("bonuses", "0"),
        )

    @app.route("/api/payrolls", methods=["GET"], endpoint="payroll_list")
    @json_errors
    def payroll_list():
        records = _filtered_records()
        names = _employee_names(records)
        return jsonify({"success": True, "payrolls": [_to_json(r, names) for r in records]})

    @app.route("/api/payrolls/export.csv", methods=["GET"], endpoint="payroll_export_csv")
    @json_errors
    def payroll_export_csv():
        records = _filtered_records()
        names = _employee_names(records)

        out = io.StringIO()
        writer = csv.DictWriter(out, fieldnames=CSV_FIELDS)
        writer.writeheader()
        for r in records:
            writer.writerow(_to_json(r, names))

        csv_bytes = out.getvalue().encode("utf-8-sig")
        return app.response_class(
            csv_bytes,
            mimetype="text/csv",
            headers={"Content-Disposition": "attachment; filename=payrolls.csv"},
        )

    @app.route("/api/payrolls/draft", methods=["GET"], endpoint="payroll_draft")
    @json_errors
    def payroll_draft():
        period = _selected_period()
        return jsonify({"success": True, "payroll": _to_json(ledger.new_draft(period.month, period.year))})

    @app.route("/api/payrolls/preview", methods=["GET"], endpoint="payroll_preview")
    @json_errors
    def payroll_preview():
        period = _selected_period()
        breakdown = ledger.preview(request.args.get("employee_id"), period.year, period.month)
        return jsonify(
            {
                "success": True,
                "deductions": _money(breakdown.deductions),
                "bonuses": _money(breakdown.bonuses),
                "net_salary": _money(breakdown.net_salary),
            }
        )

    @app.route("/api/payrolls/calculate", methods=["POST"], endpoint="payroll_calculate")
    @json_errors
    def payroll_calculate():
        data = _body()
        record = ledger.calculate(data.get("employee_id"), data.get("year"), data.get("month"))
        return jsonify({"success": True, "payroll": _to_json(record, _employee_names([record]))}), 201

    @app.route("/api/payrolls/<int:payroll_id>/recalculate", methods=["POST"], endpoint="payroll_recalculate")
    @json_errors
    def payroll_recalculate(payroll_id: int):
        record = ledger.recalculate(payroll_id)
        return jsonify({"success": True, "payroll": _to_json(record, _employee_names([record]))})

    @app.route("/api/payrolls", methods=["POST"], endpoint="payroll_create")
    @json_errors
    def payroll_create():
        record = ledger.save(_record_from_body(_body()))
        return jsonify({"success": True, "payroll": _to_json(record, _employee_names([record]))}), 201

    @app.route("/api/payrolls/<int:payroll_id>", methods=["PUT"], endpoint="payroll_update")
    @json_errors
    def payroll_update(payroll_id: int):
        record = ledger.save(_record_from_body(_body(), payroll_id=payroll_id))
        return jsonify({"success": True, "payroll": _to_json(record, _employee_names([record]))})

    @app.route("/api/payrolls/<int:payroll_id>", methods=["DELETE"], endpoint="payroll_delete")
    @json_errors
    def payroll_delete(payroll_id: int):
        ledger.delete(payroll_id)
        return jsonify({"success": True, "message": f"Payroll #{payroll_id} deleted"})

    @app.route("/api/payroll/rates", methods=["GET"], endpoint="payroll_rates")
    @json_errors
    def payroll_rates():
        return jsonify({"success": True, "rates": ledger.rates.to_dict()})

    @app.route("/api/payroll/rates", methods=["PUT"], endpoint="payroll_rates_update")
    @json_errors
    def payroll_rates_update():
        data = _body()
        current = ledger.rates
        rates = RateConfiguration.from_values(
            tax_rate_percent=data.get("tax_rate_percent", current.tax_rate_percent),
            insurance_rate_percent=data.get("insurance_rate_percent", current.insurance_rate_percent),
            bonus_per_day=data.get("bonus_per_day", current.bonus_per_day),
        )
        ledger.update_rates(rates)
        return jsonify({"success": True, "rates": rates.to_dict()})
