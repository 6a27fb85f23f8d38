from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.api import api_view, body, date_arg, int_arg, jsonable, require_employee
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/lateness/daily", methods=["GET"], endpoint="lateness_daily")
    @api_view
    def daily_report():
        report = container.report_aggregator.get_daily_report(
            int_arg(request.args, "company_id"),
            date_arg(request.args, "date"),
        )
        return jsonify({"success": True, "report": jsonable(report)})

    @app.route("/api/lateness/employees/<int:user_id>/summary", methods=["GET"], endpoint="lateness_employee_summary")
    @api_view
    def employee_summary(user_id: int):
        company_id = int_arg(request.args, "company_id")
        require_employee(container.users_repo, company_id, user_id)
        summary = container.report_aggregator.get_employee_lateness_summary(
            company_id,
            user_id,
            date_arg(request.args, "start"),
            date_arg(request.args, "end"),
        )
        return jsonify({"success": True, "summary": jsonable(summary)})

    @app.route("/api/lateness/employees/<int:user_id>/monthly-summary", methods=["POST"], endpoint="lateness_monthly_summary")
    @api_view
    def monthly_summary(user_id: int):
        data = body()
        company_id = int_arg(data, "company_id")
        require_employee(container.users_repo, company_id, user_id)
        summary = container.report_aggregator.generate_monthly_summary(
            company_id,
            user_id,
            int_arg(data, "year"),
            int_arg(data, "month"),
        )
        return jsonify({"success": True, "summary": jsonable(summary)})
