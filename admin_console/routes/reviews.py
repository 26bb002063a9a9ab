from flask import Blueprint

from ..auth_mw import login_required
from ..views import render_list, run_action

bp_reviews = Blueprint("reviews", __name__, url_prefix="/admin/reviews")

COLUMNS = [
    ("User", "userId", "name"),
    ("Product", "productId.name", "text"),
    ("Rating", "rating", "text"),
    ("Comment", "comment", "text"),
    ("Status", "status", "status"),
]


@bp_reviews.get("", endpoint="list_reviews")
@login_required()
def list_reviews():
    return render_list("reviews", "reviews.list_reviews", COLUMNS, "Reviews",
                       action_endpoint="reviews.review_action")


@bp_reviews.post("/<string:rid>/<string:action>", endpoint="review_action")
@login_required()
def review_action(rid: str, action: str):
    return run_action("reviews", rid, action, "reviews.list_reviews")
