from __future__ import annotations

from datetime import date
from functools import wraps
from typing import Optional

from flask import flash, redirect, render_template, request, session, url_for

from ..core.enums import Capability
from ..core.exceptions import ValidationError
from .datetime_utils import parse_month


def current_capability() -> Capability:
    """Capability stored at sign-in; anonymous visitors are guests."""
    try:
        return Capability(session.get("capability", Capability.GUEST.value))
    except ValueError:
        return Capability.GUEST


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            flash("Please sign in to continue.", "warning")
            return redirect(url_for("login"))

        if not current_capability().can_edit:
            return render_template("403.html", email=session.get("email")), 403

        return view(*args, **kwargs)

    return wrapper


def month_arg(name: str = "month") -> Optional[date]:
    """Month cursor from the query string or form; invalid values are flashed and ignored."""
    raw = request.values.get(name)
    if not raw:
        return None
    try:
        return parse_month(raw)
    except ValidationError as e:
        flash(str(e), "warning")
        return None


def flash_error(error: Optional[str]) -> None:
    if error:
        flash(error, "danger")
