import logging
import os
from datetime import datetime

import requests
from flask import Flask, g, redirect, url_for

from .actions import InFlightGuard
from .auth_mw import current_claims, load_session_store, write_token_cookie
from .config import Config
from .workspace import WorkspaceRegistry


def _dig(record, path, default=None):
    cur = record
    for part in path.split("."):
        if not isinstance(cur, dict):
            return default
        cur = cur.get(part)
    return default if cur is None else cur


def _money(v):
    try:
        return f"₦{float(v):,.2f}"
    except (TypeError, ValueError):
        return "-"


def _date(v, fmt="%Y-%m-%d"):
    if not v:
        return "-"
    try:
        return datetime.fromisoformat(str(v).replace("Z", "+00:00")).strftime(fmt)
    except ValueError:
        return str(v)


def create_app(config=None, http=None) -> Flask:
    app = Flask(__name__, template_folder="templates")
    app.config.from_object(Config)
    if config:
        app.config.update(config)

    logging.basicConfig(level=app.config["LOG_LEVEL"])

    app.extensions["admin_console"] = {
        "http": http or requests.Session(),
        "guard": InFlightGuard(),
        "workspaces": WorkspaceRegistry(page_size=app.config["PAGE_SIZE"]),
    }

    app.before_request(load_session_store)
    app.after_request(write_token_cookie)

    app.add_template_filter(_dig, "dig")
    app.add_template_filter(_money, "money")
    app.add_template_filter(_date, "date")

    @app.context_processor
    def inject_user():
        return {"claims": current_claims() if hasattr(g, "session_store") else None}

    from .routes.auth import bp_auth
    from .routes.dashboard import bp_dashboard
    from .routes.users import bp_users
    from .routes.vendors import bp_vendors
    from .routes.products import bp_products
    from .routes.orders import bp_orders
    from .routes.payments import bp_payments
    from .routes.reviews import bp_reviews
    from .routes.categories import bp_categories
    from .routes.withdrawals import bp_withdrawals
    from .routes.deletions import bp_deletions

    for bp in (bp_auth, bp_dashboard, bp_users, bp_vendors, bp_products, bp_orders,
               bp_payments, bp_reviews, bp_categories, bp_withdrawals, bp_deletions):
        app.register_blueprint(bp)

    @app.get("/health")
    def health():
        return {"service": "admin-console", "status": "ok"}, 200

    @app.get("/")
    def root():
        if current_claims():
            return redirect(url_for("dashboard.dashboard"))
        return redirect(url_for("auth.login_page"))

    return app


if __name__ == "__main__":
    port = int(os.getenv("PORT", "8000"))
    create_app().run(host="0.0.0.0", port=port, debug=False)
