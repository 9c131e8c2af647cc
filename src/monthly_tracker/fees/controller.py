from __future__ import annotations

from flask import Flask, flash, redirect, render_template, request, url_for

from ..common.datetime_utils import add_months
from ..common.validators import parse_member_id
from ..common.web import admin_required, current_capability, flash_error, month_arg
from ..container import Container
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    def _loaded_grid():
        vm = container.fee_grid(capability=current_capability(), month=month_arg())
        vm.load()
        return vm

    @app.route("/fees", endpoint="fees")
    def fees():
        vm = _loaded_grid()
        flash_error(vm.error)
        return render_template(
            "fees/grid.html",
            vm=vm,
            rows=[(member, vm.status_of(member.id)) for member in vm.members],
            prev_month=add_months(vm.month, -1).strftime("%Y-%m") if vm.can_go_previous else None,
            next_month=add_months(vm.month, 1).strftime("%Y-%m"),
            active_page="fees",
        )

    @app.route("/fees/toggle", methods=["POST"], endpoint="fees_toggle")
    @admin_required
    def fees_toggle():
        vm = _loaded_grid()
        try:
            vm.toggle_fee_status(parse_member_id(request.form.get("member_id")))
        except ValidationError as e:
            flash(str(e), "warning")
        flash_error(vm.error)
        return redirect(url_for("fees", month=vm.month.strftime("%Y-%m")))
