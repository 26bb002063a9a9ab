import logging
from flask import Blueprint, flash, render_template

from ..auth_mw import api_client, login_required
from ..errors import ConsoleError, user_message

log = logging.getLogger(__name__)

bp_dashboard = Blueprint("dashboard", __name__, url_prefix="/admin")

SECTIONS = ("users", "vendors", "products", "orders", "payments", "reviews", "categories")


def summarize_stats(data) -> dict:
    """Turn /admin/dashboard/stats into {section: [(label, value), ...]}."""
    if not isinstance(data, dict):
        return {}
    out = {}
    for section in SECTIONS:
        block = data.get(section)
        if not isinstance(block, dict):
            continue
        rows = []
        for k, v in block.items():
            if isinstance(v, dict):
                rows.extend((f"{k} · {sk}", sv) for sk, sv in v.items())
            elif not isinstance(v, list):
                rows.append((k, v))
        out[section] = rows
    return out


@bp_dashboard.get("/dashboard", endpoint="dashboard")
@login_required()
def dashboard():
    stats = {}
    try:
        body = api_client().get("/admin/dashboard/stats")
        stats = summarize_stats((body or {}).get("data"))
    except ConsoleError as e:
        log.warning("dashboard stats failed: %s", e)
        flash(user_message(e, "Failed to load dashboard data."), "error")
    return render_template("dashboard.html", stats=stats)
