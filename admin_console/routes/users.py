from flask import Blueprint

from ..auth_mw import login_required
from ..views import render_detail, render_list, run_action

bp_users = Blueprint("users", __name__, url_prefix="/admin/users")

COLUMNS = [
    ("Name", "firstName", "name"),
    ("Email", "email", "text"),
    ("Phone", "phone", "text"),
    ("Country", "country", "text"),
    ("Role", "role", "text"),
    ("Status", "status", "status"),
    ("Email ✓", "isEmailVerified", "bool"),
    ("Phone ✓", "isPhoneVerified", "bool"),
    ("Joined", "createdAt", "date"),
    ("Last Login", "lastLoginAt", "date"),
]

DETAIL_FIELDS = COLUMNS[1:]


@bp_users.get("", endpoint="list_users")
@login_required()
def list_users():
    return render_list("users", "users.list_users", COLUMNS, "Users",
                       detail_endpoint="users.user_detail", action_endpoint="users.user_action")


@bp_users.get("/<string:rid>", endpoint="user_detail")
@login_required()
def user_detail(rid: str):
    return render_detail("users", rid, "detail.html", title="User", fields=DETAIL_FIELDS,
                         title_keys=("firstName", "lastName"), list_endpoint="users.list_users",
                         action_endpoint="users.user_action")


@bp_users.post("/<string:rid>/<string:action>", endpoint="user_action")
@login_required()
def user_action(rid: str, action: str):
    return run_action("users", rid, action, "users.list_users", "users.user_detail")
