from flask import Blueprint

from ..auth_mw import superadmin_required
from ..views import render_list, run_action

bp_deletions = Blueprint("deletions", __name__, url_prefix="/admin/deletion-requests")

COLUMNS = [
    ("Account", "accountId", "text"),
    ("Type", "accountType", "text"),
    ("Reason", "reason", "text"),
    ("Status", "status", "status"),
    ("Decision reason", "decisionReason", "text"),
    ("Requested", "createdAt", "date"),
]


@bp_deletions.get("", endpoint="list_deletions")
@superadmin_required
def list_deletions():
    return render_list("deletions", "deletions.list_deletions", COLUMNS, "Deletion requests",
                       action_endpoint="deletions.deletion_action")


@bp_deletions.post("/<string:rid>/<string:action>", endpoint="deletion_action")
@superadmin_required
def deletion_action(rid: str, action: str):
    return run_action("deletions", rid, action, "deletions.list_deletions")
