import logging
import time
from dataclasses import dataclass

import jwt

log = logging.getLogger(__name__)

UNKNOWN = "unknown"
AUTHENTICATED = "authenticated"
ANONYMOUS = "anonymous"

ADMIN_ROLES = {"ADMIN", "SUPERADMIN"}


@dataclass(frozen=True)
class Claims:
    subject: str | None
    role: str
    expires_at: int | None
    email: str | None = None

    @property
    def is_superadmin(self) -> bool:
        return self.role == "SUPERADMIN"

    @property
    def is_admin(self) -> bool:
        return self.role in ADMIN_ROLES


def read_claims(token: str | None, now: float | None = None) -> Claims | None:
    """Decode a bearer token's claims for display gating only.

    The signature is not checked: the backend is the trust boundary.
    Missing, malformed and expired tokens all come back as ``None``.
    """
    if not token:
        return None
    try:
        payload = jwt.decode(token, options={"verify_signature": False})
    except jwt.PyJWTError as e:
        log.info("discarding undecodable token: %s", e)
        return None
    if not isinstance(payload, dict):
        return None

    exp = payload.get("exp")
    if exp is not None:
        try:
            exp = int(exp)
        except (TypeError, ValueError):
            return None
        if exp <= (time.time() if now is None else now):
            return None

    sub = payload.get("id") or payload.get("sub")
    return Claims(
        subject=str(sub) if sub is not None else None,
        role=str(payload.get("role") or "").upper(),
        expires_at=exp,
        email=payload.get("email"),
    )


@dataclass(frozen=True)
class SessionState:
    status: str = UNKNOWN
    claims: Claims | None = None

    @property
    def authenticated(self) -> bool:
        return self.status == AUTHENTICATED


class SessionStore:
    """Owns the bearer token; consumers read it through here, never from cookies.

    ``update``/``clear`` move the state back to UNKNOWN and resolve it again;
    listeners are called with the new state after every resolution.
    """

    def __init__(self, token: str | None = None, clock=None):
        self._token = token
        self._clock = clock or time.time
        self._listeners = []
        self._state = SessionState()

    def subscribe(self, listener):
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _emit(self):
        for fn in list(self._listeners):
            fn(self._state)

    def resolve(self, notify: bool = True) -> SessionState:
        claims = read_claims(self._token, now=self._clock())
        if claims is None:
            self._state = SessionState(ANONYMOUS)
            if self._token:
                # expired or malformed: forget it
                self._token = None
                if notify:
                    self._emit()
        else:
            self._state = SessionState(AUTHENTICATED, claims)
        return self._state

    def read(self) -> SessionState:
        if self._state.status == UNKNOWN:
            return self.resolve()
        return self._state

    @property
    def token(self) -> str | None:
        self.read()
        return self._token

    def update(self, token: str | None) -> SessionState:
        self._token = token or None
        self._state = SessionState()
        state = self.resolve(notify=False)
        self._emit()
        return state

    def clear(self) -> SessionState:
        return self.update(None)
