from flask import Blueprint, flash, redirect, request, url_for

from ..auth_mw import api_client, login_required, workspace
from ..errors import ConsoleError, user_message
from ..views import render_list, run_action

bp_categories = Blueprint("categories", __name__, url_prefix="/admin/categories")

COLUMNS = [
    ("Name", "name", "text"),
    ("Slug", "slug", "text"),
    ("Description", "description", "text"),
]

FORM_FIELDS = ("name", "slug", "description")


def _form():
    return {k: request.form.get(k, "").strip() for k in FORM_FIELDS}


@bp_categories.get("", endpoint="list_categories")
@login_required()
def list_categories():
    editing = None
    edit_id = request.args.get("edit")
    if edit_id:
        editing = workspace().list_for("categories").find(edit_id)
    return render_list("categories", "categories.list_categories", COLUMNS, "Categories",
                       template="categories.html", action_endpoint="categories.category_action",
                       editing=editing)


@bp_categories.post("", endpoint="save_category")
@login_required()
def save_category():
    form = _form()
    edit_id = request.form.get("id") or None
    if not form["name"] or not form["slug"]:
        flash("Name and slug are required.", "error")
        return redirect(url_for("categories.list_categories", edit=edit_id))
    try:
        if edit_id:
            api_client().patch(f"/admin/categories/{edit_id}", json=form)
        else:
            api_client().post("/admin/categories", json=form)
    except ConsoleError as e:
        flash(user_message(e, "Error saving category."), "error")
        return redirect(url_for("categories.list_categories", edit=edit_id))
    flash("Category updated." if edit_id else "Category created.", "success")
    # the set changed shape: fetch again
    return redirect(url_for("categories.list_categories", page=request.form.get("page") or None))


@bp_categories.post("/<string:rid>/<string:action>", endpoint="category_action")
@login_required()
def category_action(rid: str, action: str):
    return run_action("categories", rid, action, "categories.list_categories")
