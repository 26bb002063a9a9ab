import logging
from flask import Blueprint

from ..auth_mw import api_client, login_required
from ..errors import ConsoleError
from ..views import render_detail, render_list, run_action

log = logging.getLogger(__name__)

bp_products = Blueprint("products", __name__, url_prefix="/admin/products")

COLUMNS = [
    ("Image", "thumbnail", "image"),
    ("Name", "name", "link"),
    ("Vendor", "vendorId", "vendor"),
    ("Price", "price", "money"),
    ("Active", "isActive", "bool"),
    ("Approval", "approvalStatus", "status"),
    ("Created", "createdAt", "date"),
]

DETAIL_FIELDS = [
    ("Image", "thumbnail", "image"),
    ("Description", "description", "text"),
    ("Price", "price", "money"),
    ("Original price", "originalPrice", "money"),
    ("Discount (%)", "discountPercentage", "text"),
    ("Active", "isActive", "bool"),
    ("Approval", "approvalStatus", "status"),
    ("Rejection reason", "rejectionReason", "text"),
    ("Vendor", "vendorId", "vendor"),
    ("Sold", "soldCount", "text"),
    ("Views", "viewCount", "text"),
    ("Created", "createdAt", "date"),
    ("Updated", "updatedAt", "date"),
]


def vendor_namer():
    """Per-request lookup of vendor business names; the id stands in on failure."""
    client = api_client()
    cache = {}

    def name(vid):
        if not isinstance(vid, str) or not vid:
            return "-"
        if vid not in cache:
            try:
                cache[vid] = client.get_record(f"/admin/vendors/{vid}").get("businessName") or vid
            except ConsoleError as e:
                log.debug("vendor %s lookup failed: %s", vid, e)
                cache[vid] = vid
        return cache[vid]

    return name


@bp_products.get("", endpoint="list_products")
@login_required()
def list_products():
    return render_list("products", "products.list_products", COLUMNS, "Products",
                       detail_endpoint="products.product_detail",
                       action_endpoint="products.product_action",
                       vendor_name=vendor_namer())


@bp_products.get("/<string:rid>", endpoint="product_detail")
@login_required()
def product_detail(rid: str):
    return render_detail("products", rid, "detail.html", title="Product", fields=DETAIL_FIELDS,
                         title_keys=("name",), list_endpoint="products.list_products",
                         action_endpoint="products.product_action",
                         vendor_name=vendor_namer())


@bp_products.post("/<string:rid>/<string:action>", endpoint="product_action")
@login_required()
def product_action(rid: str, action: str):
    return run_action("products", rid, action, "products.list_products", "products.product_detail")
