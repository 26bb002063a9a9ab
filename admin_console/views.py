"""Listing, detail and action plumbing shared by the resource blueprints."""
import logging

from flask import flash, jsonify, redirect, render_template, request, url_for

from .actions import available_actions
from .auth_mw import api_client, dispatcher, workspace
from .errors import ConsoleError, ResponseShapeError, user_message
from .resources import get_resource

log = logging.getLogger(__name__)


def wants_json() -> bool:
    best = request.accept_mimetypes.best_match(["application/json", "text/html"])
    return request.is_json or best == "application/json"


def _page_arg():
    try:
        return int(request.args.get("page", "1"))
    except ValueError:
        return 1


def render_list(resource_name, endpoint, columns, title, template="list.html", **ctx):
    """GET handler body for a listing page.

    ``held=1`` (set after a row action) re-renders the held list as patched
    by the dispatcher instead of fetching it again.
    """
    lst = workspace().list_for(resource_name)
    page = _page_arg()
    search = (request.args.get("search") or "").strip()

    if page < 1:
        return redirect(url_for(endpoint, page=1, search=search or None))

    if not (request.args.get("held") and lst.loaded):
        lst.load(api_client(), page, search)
        if lst.error is not None:
            flash(user_message(lst.error, f"Failed to load {title.lower()}."), "error")

    if lst.loaded and lst.total_pages and page > lst.total_pages:
        return redirect(url_for(endpoint, page=lst.clamp(page), search=search or None))

    rows = [(item, available_actions(resource_name, item)) for item in lst.items]
    return render_template(template, title=title, resource=resource_name, endpoint=endpoint,
                           listing=lst, rows=rows, columns=columns, search=search, **ctx)


def fetch_record(resource_name, rid):
    res = get_resource(resource_name)
    try:
        return api_client().get_record(res.detail.format(id=rid))
    except ResponseShapeError as e:
        log.error("%s/%s: %s", resource_name, rid, e)
        return None
    except ConsoleError as e:
        flash(user_message(e, f"Failed to load {resource_name[:-1]}."), "error")
        return None


def render_detail(resource_name, rid, template, **ctx):
    record = fetch_record(resource_name, rid)
    if record is None:
        return render_template(template, record=None, actions=[], resource=resource_name, **ctx), 404
    return render_template(template, record=record, resource=resource_name,
                           actions=available_actions(resource_name, record), **ctx)


def _action_form():
    """Action inputs from a form post or a JSON body."""
    if request.is_json:
        body = request.get_json(silent=True)
        if isinstance(body, dict):
            return body
    return request.values


def _int_or(value, default=1):
    try:
        return max(int(value), 1)
    except (TypeError, ValueError):
        return default


def run_action(resource_name, rid, action_name, list_endpoint, detail_endpoint=None):
    """POST handler body for a row or detail action.

    The record comes from the held list when it is there (so a second click
    on an already-approved row is refused locally). Otherwise it comes from
    the backend detail endpoint, or, for resources without one, from the
    list page the action was posted from, fetched again.
    """
    form = _action_form()
    client = api_client()
    lst = workspace().list_for(resource_name)
    record = lst.find(rid)
    if record is None:
        if get_resource(resource_name).detail:
            record = fetch_record(resource_name, rid)
        else:
            lst.load(client, _int_or(form.get("page")), (form.get("search") or "").strip())
            record = lst.find(rid)
    if record is None:
        record = {"_id": rid}

    result = dispatcher().dispatch(resource_name, record, action_name,
                                   reason=form.get("reason"), listing=lst)

    if wants_json():
        status = 200 if result.ok else (409 if result.duplicate else 400 if result.invalid else 502)
        return jsonify(ok=result.ok, message=result.message, data=result.record,
                       removed=result.removed), status

    flash(result.message, "success" if result.ok else "error")
    if detail_endpoint and form.get("from") == "detail" and not result.removed:
        return redirect(url_for(detail_endpoint, rid=rid))

    # back to the held list, patched in place
    args = {"held": 1}
    for k in ("page", "search"):
        if form.get(k):
            args[k] = form[k]
    return redirect(url_for(list_endpoint, **args))
