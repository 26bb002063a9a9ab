import logging
import threading
from dataclasses import dataclass

from .errors import ConsoleError, ResponseShapeError, ValidationError
from .resources import Page, Resource, record_id, total_pages_for

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Ticket:
    seq: int
    page: int
    search: str


class ResourceList:
    """One page of a backend resource, held for the duration of a session.

    Requests are numbered as they are issued. A result is applied only
    when it belongs to the most recently issued request, so a slow answer
    for an older page or search term never overwrites a newer one.
    """

    def __init__(self, resource: Resource, page_size: int = 10):
        self.resource = resource
        self.limit = resource.page_size or page_size

        self.items = []
        self.page = 1
        self.total = 0
        self.total_pages = 0
        self.search = ""
        self.error = None
        self.loaded = False

        self._lock = threading.Lock()
        self._seq = 0

    # ---------- request lifecycle ----------
    def issue(self, page: int = 1, search: str = "") -> Ticket:
        if page < 1:
            raise ValidationError("page must be >= 1")
        with self._lock:
            self._seq += 1
            return Ticket(self._seq, page, (search or "").strip())

    def is_current(self, ticket: Ticket) -> bool:
        with self._lock:
            return ticket.seq == self._seq

    def complete(self, ticket: Ticket, page: Page) -> bool:
        with self._lock:
            if ticket.seq != self._seq:
                log.debug("%s: dropping stale result #%s", self.resource.name, ticket.seq)
                return False
            self.items = list(page.items)
            self.page = page.page
            self.total = page.total
            self.total_pages = page.total_pages
            self.search = ticket.search
            self.error = None
            self.loaded = True
            return True

    def fail(self, ticket: Ticket, exc: Exception) -> bool:
        with self._lock:
            if ticket.seq != self._seq:
                return False
            self.error = exc
            if not self.loaded:
                # first load failed: explicit empty view
                self.items = []
                self.total = self.total_pages = 0
            return True

    def close(self):
        """Abandon interest in whatever is still in flight."""
        with self._lock:
            self._seq += 1

    # ---------- fetch ----------
    def fetch(self, client, ticket: Ticket) -> Page:
        params = {"page": ticket.page, "limit": self.limit, "search": ticket.search}
        body = client.get(self.resource.path, params=params)
        try:
            return self.resource.adapter(body, ticket.page, self.limit)
        except ResponseShapeError as e:
            log.error("%s: unexpected response shape: %s", self.resource.name, e)
            return Page(page=ticket.page, limit=self.limit)

    def load(self, client, page: int = 1, search: str = "") -> bool:
        """Fetch ``page`` and apply it if no newer request was issued meanwhile."""
        ticket = self.issue(page, search)
        try:
            result = self.fetch(client, ticket)
        except ConsoleError as e:
            return self.fail(ticket, e)
        return self.complete(ticket, result)

    # ---------- helpers ----------
    def clamp(self, page: int) -> int:
        if page < 1:
            return 1
        if self.loaded and self.total_pages and page > self.total_pages:
            return self.total_pages
        return page

    def find(self, rid):
        for item in self.items:
            if record_id(item) == rid:
                return item
        return None

    def patch(self, rid, fields: dict) -> dict | None:
        with self._lock:
            for i, item in enumerate(self.items):
                if record_id(item) == rid:
                    self.items[i] = {**item, **fields}
                    return self.items[i]
        return None

    def remove(self, rid) -> bool:
        with self._lock:
            before = len(self.items)
            self.items = [x for x in self.items if record_id(x) != rid]
            removed = len(self.items) != before
            if removed:
                self.total = max(self.total - 1, 0)
                if self.resource.paginated:
                    self.total_pages = total_pages_for(self.total, self.limit)
                else:
                    self.total_pages = 1 if self.items else 0
            return removed

    @property
    def has_prev(self):
        return self.page > 1

    @property
    def has_next(self):
        return self.page < self.total_pages
