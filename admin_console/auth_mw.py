import uuid
from functools import wraps

from flask import current_app, flash, g, redirect, request, session, url_for

from .actions import ActionDispatcher
from .api_client import ApiClient
from .tokens import SessionStore


def _ext():
    return current_app.extensions["admin_console"]


# ===================== Session store per request =====================
def load_session_store():
    """before_request: one store per request, fed from the token cookie."""
    store = SessionStore(request.cookies.get(current_app.config["TOKEN_COOKIE"]))
    g.token_cookie = None

    def on_change(state):
        tok = store.token
        g.token_cookie = ("set", tok) if tok else ("clear", None)

    store.subscribe(on_change)
    g.session_store = store


def write_token_cookie(response):
    """after_request: persist whatever the store decided about the token."""
    op = getattr(g, "token_cookie", None)
    if not op:
        return response
    name = current_app.config["TOKEN_COOKIE"]
    if op[0] == "set":
        response.set_cookie(name, op[1], httponly=True, samesite="Lax")
    else:
        response.delete_cookie(name)
    return response


def session_store() -> SessionStore:
    return g.session_store


def current_claims():
    state = g.session_store.read()
    return state.claims if state.authenticated else None


# ===================== Decorators =====================
def login_required(next_endpoint_name="auth.login_page"):
    def _wrap(f):
        @wraps(f)
        def inner(*args, **kwargs):
            claims = current_claims()
            if claims is None:
                # remember where to go back after login
                if request.method == "GET":
                    session["next_after_login"] = request.full_path.rstrip("?")
                return redirect(url_for(next_endpoint_name))
            if not claims.is_admin:
                g.session_store.clear()
                flash("This account is not an administrator.", "error")
                return redirect(url_for(next_endpoint_name))
            return f(*args, **kwargs)
        return inner
    return _wrap


def superadmin_required(f):
    @wraps(f)
    @login_required()
    def inner(*args, **kwargs):
        if not current_claims().is_superadmin:
            flash("Super admin privileges required.", "error")
            return redirect(url_for("vendors.list_vendors"))
        return f(*args, **kwargs)
    return inner


# ===================== Backend access =====================
def api_client() -> ApiClient:
    client = getattr(g, "api_client", None)
    if client is None:
        cfg = current_app.config
        store = g.session_store
        client = g.api_client = ApiClient(
            cfg["API_BASE_URL"],
            token_provider=lambda: store.token,
            timeout=cfg["REQUEST_TIMEOUT"],
            http=_ext()["http"],
        )
    return client


def dispatcher() -> ActionDispatcher:
    return ActionDispatcher(api_client(), guard=_ext()["guard"])


def console_id() -> str:
    cid = session.get("console_id")
    if not cid:
        cid = session["console_id"] = uuid.uuid4().hex
    return cid


def workspace():
    return _ext()["workspaces"].get(console_id())


def drop_workspace():
    cid = session.get("console_id")
    if cid:
        _ext()["workspaces"].drop(cid)
