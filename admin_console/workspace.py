import threading
import time

from .listing import ResourceList
from .resources import get_resource


class Workspace:
    """The held lists of one browser session, one per resource."""

    def __init__(self, page_size: int = 10):
        self.page_size = page_size
        self.lists = {}
        self.touched = time.time()

    def list_for(self, resource_name: str) -> ResourceList:
        lst = self.lists.get(resource_name)
        if lst is None:
            lst = self.lists[resource_name] = ResourceList(get_resource(resource_name),
                                                           self.page_size)
        self.touched = time.time()
        return lst

    def close(self):
        for lst in self.lists.values():
            lst.close()
        self.lists.clear()


class WorkspaceRegistry:
    def __init__(self, page_size: int = 10, idle_seconds: int = 3600):
        self.page_size = page_size
        self.idle_seconds = idle_seconds
        self._lock = threading.Lock()
        self._spaces = {}

    def get(self, console_id: str) -> Workspace:
        with self._lock:
            self._expire()
            ws = self._spaces.get(console_id)
            if ws is None:
                ws = self._spaces[console_id] = Workspace(self.page_size)
            return ws

    def drop(self, console_id: str):
        with self._lock:
            ws = self._spaces.pop(console_id, None)
        if ws is not None:
            ws.close()

    def _expire(self):
        cutoff = time.time() - self.idle_seconds
        for cid in [k for k, ws in self._spaces.items() if ws.touched < cutoff]:
            self._spaces.pop(cid).close()

    def __len__(self):
        with self._lock:
            return len(self._spaces)
