from flask import Blueprint, flash, redirect, render_template, request, session, url_for

from ..auth_mw import api_client, current_claims, drop_workspace, session_store, superadmin_required
from ..errors import ConsoleError, user_message

bp_auth = Blueprint("auth", __name__)


@bp_auth.route("/login", methods=["GET", "POST"], endpoint="login_page")
def login_page():
    if request.method == "GET" and current_claims() is not None:
        return redirect(url_for("dashboard.dashboard"))

    if request.method == "POST":
        email = request.form.get("email", "").strip()
        password = request.form.get("password", "")
        if not email or not password:
            flash("Please enter your email and password.", "error")
            return render_template("login.html", email=email), 400
        try:
            body = api_client().post("/auth/login", json={"email": email, "password": password})
        except ConsoleError as e:
            flash(user_message(e, "Login failed"), "error")
            return render_template("login.html", email=email), 401

        token = ((body or {}).get("data") or {}).get("token")
        state = session_store().update(token)
        if not state.authenticated:
            flash("The server did not return a usable token.", "error")
            return render_template("login.html", email=email), 401
        if not state.claims.is_admin:
            session_store().clear()
            flash("This account is not an administrator.", "error")
            return render_template("login.html", email=email), 403

        flash("Login successful!", "success")
        next_url = session.pop("next_after_login", None)
        return redirect(next_url or url_for("dashboard.dashboard"))

    return render_template("login.html")


@bp_auth.get("/logout", endpoint="logout")
def logout():
    drop_workspace()
    session_store().clear()
    session.clear()
    flash("Logged out.", "success")
    return redirect(url_for("auth.login_page"))


SIGNUP_FIELDS = ("firstName", "lastName", "email", "phone")


@bp_auth.route("/admin/signup", methods=["GET", "POST"], endpoint="signup")
@superadmin_required
def signup():
    if request.method == "POST":
        form = {k: request.form.get(k, "").strip() for k in SIGNUP_FIELDS}
        password = request.form.get("password", "")
        confirm = request.form.get("confirm_password", "")
        if not form["email"] or not password:
            flash("Email and password are required.", "error")
            return render_template("signup.html", form=form), 400
        if password != confirm:
            flash("Passwords do not match", "error")
            return render_template("signup.html", form=form), 400
        try:
            api_client().post("/auth/register", json={
                **form, "password": password, "isVendor": False, "role": "ADMIN",
            })
        except ConsoleError as e:
            flash(user_message(e, "Signup failed"), "error")
            return render_template("signup.html", form=form), 400
        flash("Admin account created successfully!", "success")
        return redirect(url_for("dashboard.dashboard"))

    return render_template("signup.html", form={})
