from __future__ import annotations

import logging

from flask import Flask, flash, redirect, render_template, request, session, url_for

from ..container import Container
from ..core.exceptions import AuthenticationError, DataProviderError

_LOGGER = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/login", methods=["GET", "POST"], endpoint="login")
    def login():
        if "user_id" in session:
            return redirect(url_for("attendance"))

        if request.method == "POST":
            email = request.form.get("email", "")
            password = request.form.get("password", "")

            try:
                s_user = container.auth_service.authenticate(email, password)

                session.clear()
                session["user_id"] = s_user.user_id
                session["email"] = s_user.email
                session["capability"] = s_user.capability.value

                flash("Signed in.", "success")
                return redirect(url_for("attendance"))
            except AuthenticationError as e:
                flash(str(e), "danger")
            except DataProviderError as e:
                _LOGGER.error("Sign-in failed: %s", e)
                if bool(app.config.get("DEBUG", False)):
                    flash(f"System error while signing in: {e}", "danger")
                else:
                    flash("System error while signing in", "danger")

        return render_template("auth/login.html")

    @app.route("/logout", endpoint="logout")
    def logout():
        session.clear()
        flash("Signed out.", "info")
        return redirect(url_for("attendance"))
