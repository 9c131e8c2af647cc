from __future__ import annotations

from flask import Flask, flash, redirect, render_template, request, url_for

from ..common.datetime_utils import add_months
from ..common.validators import parse_date_field, parse_member_id
from ..common.web import admin_required, current_capability, flash_error, month_arg
from ..container import Container
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    def _loaded_grid():
        vm = container.attendance_grid(capability=current_capability(), month=month_arg())
        vm.load()
        return vm

    def _back(vm):
        return redirect(url_for("attendance", month=vm.month.strftime("%Y-%m")))

    @app.route("/", endpoint="home")
    def home():
        return redirect(url_for("attendance"))

    @app.route("/attendance", endpoint="attendance")
    def attendance():
        vm = _loaded_grid()
        flash_error(vm.error)

        edit_id = request.args.get("edit", type=int)
        if edit_id is not None:
            vm.start_edit(edit_id)

        return render_template(
            "attendance/grid.html",
            vm=vm,
            rows=[
                (member, [vm.status_of(member.id, key) for key in vm.visible_date_keys])
                for member in vm.members
            ],
            prev_month=add_months(vm.month, -1).strftime("%Y-%m"),
            next_month=add_months(vm.month, 1).strftime("%Y-%m"),
            active_page="attendance",
        )

    @app.route("/attendance/toggle", methods=["POST"], endpoint="attendance_toggle")
    @admin_required
    def attendance_toggle():
        vm = _loaded_grid()
        try:
            member_id = parse_member_id(request.form.get("member_id"))
            vm.toggle_attendance(member_id, parse_date_field(request.form.get("date")))
        except ValidationError as e:
            flash(str(e), "warning")
        flash_error(vm.error)
        return _back(vm)

    @app.route("/attendance/members", methods=["POST"], endpoint="attendance_add_member")
    @admin_required
    def attendance_add_member():
        vm = _loaded_grid()
        created = vm.add_member(request.form.get("name", ""))
        if created:
            flash(f"Added {created.name}.", "success")
        flash_error(vm.error)
        return _back(vm)

    @app.route("/attendance/members/<int:member_id>/rename", methods=["POST"], endpoint="attendance_rename_member")
    @admin_required
    def attendance_rename_member(member_id: int):
        vm = _loaded_grid()
        vm.rename_member(member_id, request.form.get("name", ""))
        flash_error(vm.error)
        return _back(vm)

    @app.route("/attendance/members/<int:member_id>/delete", methods=["GET", "POST"], endpoint="attendance_delete_member")
    @admin_required
    def attendance_delete_member(member_id: int):
        vm = _loaded_grid()
        if not vm.request_delete(member_id):
            flash_error(vm.error or "Member not found.")
            return _back(vm)

        if request.method == "GET":
            return render_template(
                "attendance/confirm_delete.html",
                vm=vm,
                member=vm.find_member(member_id),
                active_page="attendance",
            )

        if request.form.get("confirm") != "yes":
            vm.cancel_delete()
            return _back(vm)

        if vm.confirm_delete():
            flash("Member deleted.", "success")
        flash_error(vm.error)
        return _back(vm)
