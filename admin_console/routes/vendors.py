from flask import Blueprint

from ..auth_mw import login_required
from ..views import render_detail, render_list, run_action

bp_vendors = Blueprint("vendors", __name__, url_prefix="/admin/vendors")

COLUMNS = [
    ("Business", "businessName", "link"),
    ("Owner", "userId", "name"),
    ("Email", "userId.email", "text"),
    ("Phone", "userId.phone", "text"),
    ("Active", "isActive", "bool"),
    ("Verification", "verificationStatus", "status"),
    ("Joined", "createdAt", "date"),
]

DETAIL_FIELDS = [
    ("Owner", "userId", "name"),
    ("Email", "userId.email", "text"),
    ("Phone", "userId.phone", "text"),
    ("Verification", "verificationStatus", "status"),
    ("Rejection reason", "rejectionReason", "text"),
    ("Commission rate (%)", "commissionRate", "text"),
    ("Rating", "rating", "text"),
    ("Total products", "totalProducts", "text"),
    ("Total sales", "totalSales", "money"),
    ("Active", "isActive", "bool"),
    ("Sponsored", "isSponsored", "bool"),
    ("Documents", "documents", "documents"),
    ("Joined", "createdAt", "date"),
]


@bp_vendors.get("", endpoint="list_vendors")
@login_required()
def list_vendors():
    return render_list("vendors", "vendors.list_vendors", COLUMNS, "Vendors",
                       detail_endpoint="vendors.vendor_detail",
                       action_endpoint="vendors.vendor_action")


@bp_vendors.get("/<string:rid>", endpoint="vendor_detail")
@login_required()
def vendor_detail(rid: str):
    return render_detail("vendors", rid, "detail.html", title="Vendor", fields=DETAIL_FIELDS,
                         title_keys=("businessName",), list_endpoint="vendors.list_vendors",
                         action_endpoint="vendors.vendor_action")


@bp_vendors.post("/<string:rid>/<string:action>", endpoint="vendor_action")
@login_required()
def vendor_action(rid: str, action: str):
    return run_action("vendors", rid, action, "vendors.list_vendors", "vendors.vendor_detail")
