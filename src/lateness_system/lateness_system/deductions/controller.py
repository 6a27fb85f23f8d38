from __future__ import annotations

from flask import Flask, jsonify

from ..common.api import api_view, body, date_arg, int_arg, jsonable
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/lateness/jobs/missing-attendance", methods=["POST"], endpoint="lateness_missing_attendance")
    @api_view
    def missing_attendance():
        data = body()
        deductions = container.deduction_issuer.detect_missing_attendance(
            int_arg(data, "company_id"),
            date_arg(data, "date"),
        )
        return jsonify({"success": True, "count": len(deductions), "deductions": jsonable(deductions)})
