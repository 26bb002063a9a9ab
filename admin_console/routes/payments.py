from flask import Blueprint

from ..auth_mw import login_required
from ..views import render_detail, render_list, run_action

bp_payments = Blueprint("payments", __name__, url_prefix="/admin/payments")

COLUMNS = [
    ("Reference", "reference", "link"),
    ("Order", "orderId", "text"),
    ("User", "userId", "text"),
    ("Gateway", "gateway", "text"),
    ("Amount", "amount", "money"),
    ("Status", "status", "status"),
    ("Date", "createdAt", "date"),
]

DETAIL_FIELDS = [
    ("Order", "orderId", "text"),
    ("Order #", "metadata.orderNumber", "text"),
    ("User", "userId", "text"),
    ("Gateway", "gateway", "text"),
    ("Amount", "amount", "money"),
    ("Currency", "currency", "text"),
    ("Status", "status", "status"),
    ("Date", "createdAt", "date"),
]


@bp_payments.get("", endpoint="list_payments")
@login_required()
def list_payments():
    return render_list("payments", "payments.list_payments", COLUMNS, "Payments",
                       detail_endpoint="payments.payment_detail",
                       action_endpoint="payments.payment_action")


@bp_payments.get("/<string:rid>", endpoint="payment_detail")
@login_required()
def payment_detail(rid: str):
    return render_detail("payments", rid, "detail.html", title="Payment", fields=DETAIL_FIELDS,
                         title_keys=("reference",), list_endpoint="payments.list_payments",
                         action_endpoint="payments.payment_action")


@bp_payments.post("/<string:rid>/<string:action>", endpoint="payment_action")
@login_required()
def payment_action(rid: str, action: str):
    return run_action("payments", rid, action, "payments.list_payments", "payments.payment_detail")
