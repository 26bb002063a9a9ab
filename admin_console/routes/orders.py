from flask import Blueprint

from ..auth_mw import login_required
from ..views import render_detail, render_list

bp_orders = Blueprint("orders", __name__, url_prefix="/admin/orders")

# read-only: no actions on orders
COLUMNS = [
    ("Order #", "orderNumber", "link"),
    ("User", "userId", "text"),
    ("Amount", "total", "money"),
    ("Payment", "paymentStatus", "status"),
    ("Method", "paymentMethod", "text"),
    ("Status", "status", "status"),
    ("Created", "createdAt", "date"),
]

DETAIL_FIELDS = [
    ("User", "userId", "text"),
    ("Status", "status", "status"),
    ("Payment status", "paymentStatus", "status"),
    ("Payment method", "paymentMethod", "text"),
    ("Subtotal", "subtotal", "money"),
    ("Shipping", "shippingFee", "money"),
    ("Total", "total", "money"),
    ("Items", "items", "items"),
    ("Shipping address", "shippingAddress", "address"),
    ("Created", "createdAt", "date"),
]


@bp_orders.get("", endpoint="list_orders")
@login_required()
def list_orders():
    return render_list("orders", "orders.list_orders", COLUMNS, "Orders",
                       detail_endpoint="orders.order_detail")


@bp_orders.get("/<string:rid>", endpoint="order_detail")
@login_required()
def order_detail(rid: str):
    return render_detail("orders", rid, "detail.html", title="Order", fields=DETAIL_FIELDS,
                         title_keys=("orderNumber",), list_endpoint="orders.list_orders")
