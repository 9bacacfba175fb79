from __future__ import annotations

from datetime import timedelta

from flask import Flask, request

from ..common.datetime_utils import now_local, parse_api_date
from ..common.http import ok, roles_required
from ..common.validators import require_positive_id
from ..core.enums import Role
from ..container import Container
from .export import sheet_csv, summary_csv


def register(app: Flask, container: Container) -> None:
    def _today():
        return now_local(container.tz_name).date()

    def _date_arg(name: str):
        value = request.args.get(name)
        return parse_api_date(value) if value else _today()

    def _csv_response(text: str, filename: str):
        return app.response_class(
            text.encode("utf-8-sig"),
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )

    @app.route("/api/reports/summary", methods=["GET"], endpoint="report_summary")
    @roles_required(Role.SUPERVISOR, Role.HANDLER)
    def report_summary():
        return ok(container.report_service.attendance_summary(_date_arg("date")))

    @app.route("/api/reports/status", methods=["GET"], endpoint="report_status")
    @roles_required(Role.SUPERVISOR, Role.HANDLER)
    def report_status():
        return ok(container.report_service.status_filter(request.args.get("status", ""), _date_arg("date")))

    @app.route("/api/reports/weekly-late", methods=["GET"], endpoint="report_weekly_late")
    @roles_required(Role.SUPERVISOR, Role.HANDLER)
    def report_weekly_late():
        return ok(container.report_service.weekly_late(_date_arg("week_start")))

    @app.route("/api/reports/monthly", methods=["GET"], endpoint="report_monthly")
    @roles_required(Role.SUPERVISOR, Role.HANDLER)
    def report_monthly():
        today = _today()
        year = require_positive_id(request.args.get("year", today.year), "Year")
        month = require_positive_id(request.args.get("month", today.month), "Month")
        return ok(container.report_service.monthly_breakdown(year, month))

    @app.route("/api/reports/schools", methods=["GET"], endpoint="report_schools")
    @roles_required(Role.SUPERVISOR, Role.HANDLER)
    def report_schools():
        return ok(list(container.report_service.school_counts()))

    @app.route("/api/reports/dtr/<int:intern_id>.csv", methods=["GET"], endpoint="report_dtr_csv")
    @roles_required(Role.SUPERVISOR, Role.HANDLER)
    def report_dtr_csv(intern_id: int):
        end = _date_arg("end")
        start = parse_api_date(request.args["start"]) if request.args.get("start") else end - timedelta(days=30)
        rows = container.report_service.sheet(intern_id=intern_id, start=start, end=end)
        filename = f"dtr_{intern_id}_{start.strftime('%Y%m%d')}_{end.strftime('%Y%m%d')}.csv"
        return _csv_response(sheet_csv(rows), filename)

    @app.route("/api/reports/summary.csv", methods=["GET"], endpoint="report_summary_csv")
    @roles_required(Role.SUPERVISOR, Role.HANDLER)
    def report_summary_csv():
        work_date = _date_arg("date")
        summary = container.report_service.attendance_summary(work_date)
        return _csv_response(summary_csv(summary), f"attendance_summary_{work_date.strftime('%Y%m%d')}.csv")
