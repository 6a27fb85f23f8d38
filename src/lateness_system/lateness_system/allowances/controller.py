from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.api import api_view, body, int_arg, jsonable, require_employee
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/lateness/employees/<int:user_id>/allowance", methods=["GET"], endpoint="lateness_current_allowance")
    @api_view
    def current_allowance(user_id: int):
        company_id = int_arg(request.args, "company_id")
        require_employee(container.users_repo, company_id, user_id)
        allowance = container.allowance_ledger.get_current_allowance(company_id, user_id)
        return jsonify({"success": True, "allowance": jsonable(allowance)})

    @app.route("/api/lateness/jobs/reset-allowances", methods=["POST"], endpoint="lateness_reset_allowances")
    @api_view
    def reset_allowances():
        result = container.allowance_ledger.reset_monthly_allowances(int_arg(body(), "company_id", required=False))
        return jsonify({"success": True, "result": jsonable(result)})
