from flask import Blueprint

from ..auth_mw import superadmin_required
from ..views import render_list, run_action

bp_withdrawals = Blueprint("withdrawals", __name__, url_prefix="/admin/withdrawals")

COLUMNS = [
    ("Vendor", "vendorId.businessName", "text"),
    ("Amount", "amount", "money"),
    ("Bank", "withdrawalDetails.bankName", "text"),
    ("Account name", "withdrawalDetails.accountName", "text"),
    ("Account", "withdrawalDetails.bankAccount", "text"),
    ("Status", "status", "status"),
    ("Requested", "createdAt", "date"),
]


@bp_withdrawals.get("", endpoint="list_withdrawals")
@superadmin_required
def list_withdrawals():
    return render_list("withdrawals", "withdrawals.list_withdrawals", COLUMNS, "Withdrawals",
                       action_endpoint="withdrawals.withdrawal_action")


@bp_withdrawals.post("/<string:rid>/<string:action>", endpoint="withdrawal_action")
@superadmin_required
def withdrawal_action(rid: str, action: str):
    return run_action("withdrawals", rid, action, "withdrawals.list_withdrawals")
