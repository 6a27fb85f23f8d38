from __future__ import annotations

from flask import Flask, jsonify

from ..common.api import api_view, body, date_arg, datetime_arg, int_arg, jsonable, require_employee
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/lateness/check-ins", methods=["POST"], endpoint="lateness_check_in")
    @api_view
    def check_in():
        data = body()
        company_id = int_arg(data, "company_id")
        user_id = int_arg(data, "user_id")
        require_employee(container.users_repo, company_id, user_id)
        record = container.lateness_service.process_attendance_check_in(
            int_arg(data, "attendance_id", required=False),
            company_id,
            user_id,
            datetime_arg(data, "check_in_time"),
            date_arg(data, "date"),
        )
        return jsonify({"success": True, "record": jsonable(record)}), 201
