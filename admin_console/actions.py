import logging
import threading
from dataclasses import dataclass

from .errors import ConsoleError, ValidationError, user_message
from .resources import get_resource, record_id

log = logging.getLogger(__name__)

PENDING = {"PENDING"}


@dataclass(frozen=True)
class Action:
    name: str
    label: str
    method: str
    path: str                       # formatted with id=
    body: object = None             # callable(reason, rid) -> dict | None
    fields: object = None           # callable(reason) -> dict patched on success
    pre: frozenset | None = None    # allowed current statuses, None = any
    reason: str | None = None       # "required" | "optional" | None
    removes: bool = False
    merge: bool = True              # merge the response record into ours
    done: str = "Done."
    confirm: str | None = None
    style: str = "primary"

    def allowed(self, status) -> bool:
        return self.pre is None or status in self.pre


def _status(field_name, value, reason_key=None):
    def body(reason=None, rid=None):
        d = {field_name: value}
        if reason_key and reason:
            d[reason_key] = reason
        return d
    return body


def _moderation(path, field_name, reason_key, noun, pre=frozenset(PENDING)):
    return {
        "approve": Action("approve", "Approve", "PATCH", path,
                          body=_status(field_name, "APPROVED"),
                          fields=_status(field_name, "APPROVED"),
                          pre=pre, done=f"{noun} approved.", style="success"),
        "reject": Action("reject", "Reject", "PATCH", path,
                         body=_status(field_name, "REJECTED", reason_key),
                         fields=_status(field_name, "REJECTED", reason_key),
                         pre=frozenset(PENDING), reason="required",
                         done=f"{noun} rejected.", style="danger"),
    }


def _deletion_request(account_type):
    def body(reason=None, rid=None):
        return {"accountId": rid, "accountType": account_type, "reason": reason}

    return Action(
        "request_deletion", "Request deletion", "POST", "/deletion/admin-submit",
        body=body, reason="required", merge=False,
        done=f"{account_type} deletion request submitted.", style="danger",
    )


def _decide(decision):
    def body(reason=None, rid=None):
        return {"action": decision, "decisionReason": reason or ""}
    return body


ACTIONS = {
    "products": {
        **_moderation("/admin/products/{id}/approve", "approvalStatus",
                      "rejectionReason", "Product"),
        "delete": Action("delete", "Delete", "DELETE", "/admin/products/{id}", removes=True,
                         done="Product deleted.", confirm="Delete this product permanently?",
                         style="danger"),
    },
    "vendors": {
        **_moderation("/vendors/{id}/verify", "verificationStatus",
                      "rejectionReason", "Vendor",
                      pre=frozenset({"PENDING", "NOT_VERIFIED"})),
        "request_deletion": _deletion_request("Vendor"),
    },
    "users": {
        "activate": Action("activate", "Activate", "PATCH", "/admin/users/{id}/status",
                           body=_status("status", "ACTIVE"), fields=_status("status", "ACTIVE"),
                           done="User activated.", style="success"),
        "suspend": Action("suspend", "Suspend", "PATCH", "/admin/users/{id}/status",
                          body=_status("status", "SUSPENDED"), fields=_status("status", "SUSPENDED"),
                          done="User suspended.", style="danger"),
        "request_deletion": _deletion_request("User"),
    },
    "reviews": _moderation("/admin/reviews/{id}/moderate", "status", "reason", "Review"),
    "withdrawals": _moderation("/admin/withdrawals/{id}/status", "status",
                               "reason", "Withdrawal"),
    "payments": {
        "approve": Action("approve", "Mark successful", "PATCH", "/admin/payments/{id}/status",
                          body=_status("status", "SUCCESS"), fields=_status("status", "SUCCESS"),
                          pre=frozenset(PENDING), done="Payment marked successful.",
                          style="success"),
        "fail": Action("fail", "Mark failed", "PATCH", "/admin/payments/{id}/status",
                       body=_status("status", "FAILED"), fields=_status("status", "FAILED"),
                       pre=frozenset(PENDING), done="Payment marked failed.", style="danger"),
    },
    "deletions": {
        "approve": Action("approve", "Approve", "POST", "/deletion/{id}/handle",
                          body=_decide("APPROVE"), fields=_status("status", "APPROVED"),
                          pre=frozenset(PENDING), reason="optional",
                          done="Request approved successfully.", style="success"),
        "reject": Action("reject", "Reject", "POST", "/deletion/{id}/handle",
                         body=_decide("REJECT"), fields=_status("status", "REJECTED", "decisionReason"),
                         pre=frozenset(PENDING), reason="required",
                         done="Request rejected successfully.", style="danger"),
    },
    "categories": {
        "delete": Action("delete", "Delete", "DELETE", "/admin/categories/{id}", removes=True,
                         done="Category deleted.", confirm="Delete this category?",
                         style="danger"),
    },
}


def get_action(resource: str, name: str) -> Action:
    try:
        return ACTIONS[resource][name]
    except KeyError:
        raise ValidationError(f"'{name}' is not an action on {resource}") from None


def available_actions(resource: str, record: dict) -> list:
    status = record.get(get_resource(resource).status_field)
    return [a for a in ACTIONS.get(resource, {}).values() if a.allowed(status)]


def validate(resource: str, action: Action, record: dict, reason: str | None):
    status = record.get(get_resource(resource).status_field)
    if not action.allowed(status):
        raise ValidationError(f"Cannot {action.label.lower()} a record that is {status or 'unknown'}.")
    if action.reason == "required" and not (reason or "").strip():
        if action.name == "request_deletion":
            raise ValidationError("Please provide a reason for deletion.")
        raise ValidationError("Please provide a reason for rejection.")


class InFlightGuard:
    """Set of keys with a request outstanding; acquire is an atomic check-and-set."""

    def __init__(self):
        self._lock = threading.Lock()
        self._keys = set()

    def acquire(self, key) -> bool:
        with self._lock:
            if key in self._keys:
                return False
            self._keys.add(key)
            return True

    def release(self, key):
        with self._lock:
            self._keys.discard(key)

    def busy(self, key) -> bool:
        with self._lock:
            return key in self._keys


@dataclass
class ActionResult:
    ok: bool
    record: dict
    message: str
    removed: bool = False
    duplicate: bool = False
    invalid: bool = False


class ActionDispatcher:
    def __init__(self, client, guard: InFlightGuard | None = None):
        self.client = client
        self.guard = guard or InFlightGuard()

    def _send(self, action, rid, reason):
        path = action.path.format(id=rid)
        body = action.body(reason, rid) if action.body else None
        return self.client.request(action.method, path, json=body)

    def dispatch(self, resource: str, record: dict, action_name: str,
                 reason: str | None = None, listing=None) -> ActionResult:
        rid = record_id(record)
        reason = (reason or "").strip() or None
        try:
            action = get_action(resource, action_name)
            validate(resource, action, record, reason)
        except ValidationError as e:
            return ActionResult(False, record, str(e), invalid=True)

        key = (resource, rid)
        if not self.guard.acquire(key):
            log.info("%s %s/%s already in flight, ignoring", action.name, resource, rid)
            return ActionResult(False, record, "This action is already in progress.",
                                duplicate=True)
        try:
            try:
                body = self._send(action, rid, reason)
            except ConsoleError as e:
                log.warning("%s %s/%s failed: %s", action.name, resource, rid, e)
                return ActionResult(False, record,
                                    user_message(e, f"Failed to {action.label.lower()}."))

            if action.removes:
                if listing is not None:
                    listing.remove(rid)
                return ActionResult(True, record, action.done, removed=True)

            data = body.get("data") if isinstance(body, dict) else None
            fields = dict(action.fields(reason)) if action.fields else {}
            if action.merge and isinstance(data, dict):
                fields.update(data)
            updated = {**record, **fields}
            if listing is not None and fields:
                updated = listing.patch(rid, fields) or updated
            return ActionResult(True, updated, action.done)
        finally:
            self.guard.release(key)
