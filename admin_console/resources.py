"""Backend resources and the adapters that normalize their list payloads.

The backend is not consistent about list shapes::

    {data: [...], total, page, limit}                      products, orders, payments
    {data: [...], pagination: {total, page, limit, totalPages}}   users
    {data: [...], totalWithdrawals, page, limit, totalPages}      withdrawals
    {data: [...], total?} or a bare list                   categories
    {data: [...]}                                          vendors, reviews, deletion requests

Every adapter returns a :class:`Page` or raises ``ResponseShapeError``.
"""
import math
from dataclasses import dataclass, field

from .errors import ResponseShapeError


@dataclass
class Page:
    items: list = field(default_factory=list)
    page: int = 1
    total_pages: int = 0
    total: int = 0
    limit: int = 10


def total_pages_for(total: int, limit: int) -> int:
    if limit <= 0:
        return 0
    return math.ceil(total / limit)


def _int(v, default):
    try:
        return int(v)
    except (TypeError, ValueError):
        return default


def _items(body):
    data = body.get("data") if isinstance(body, dict) else None
    if not isinstance(data, list):
        raise ResponseShapeError(f"expected a list under 'data', got {type(data).__name__}")
    return data


def adapt_paged(body, page, limit) -> Page:
    items = _items(body)
    total = _int(body.get("total"), len(items))
    limit = _int(body.get("limit"), limit) or limit
    pages = _int(body.get("totalPages"), None)
    return Page(items=items, page=_int(body.get("page"), page), total=total, limit=limit,
                total_pages=pages if pages is not None else total_pages_for(total, limit))


def adapt_pagination_block(body, page, limit) -> Page:
    items = _items(body)
    meta = body.get("pagination")
    if not isinstance(meta, dict):
        # some deployments answer users in the flat shape
        return adapt_paged(body, page, limit)
    total = _int(meta.get("total"), len(items))
    limit = _int(meta.get("limit"), limit) or limit
    pages = _int(meta.get("totalPages"), None)
    return Page(items=items, page=_int(meta.get("page"), page), total=total, limit=limit,
                total_pages=pages if pages is not None else total_pages_for(total, limit))


def adapt_withdrawals(body, page, limit) -> Page:
    items = _items(body)
    total = _int(body.get("totalWithdrawals") or body.get("total"), len(items))
    limit = _int(body.get("limit"), limit) or limit
    pages = _int(body.get("totalPages"), None)
    return Page(items=items, page=_int(body.get("page"), page), total=total, limit=limit,
                total_pages=pages if pages is not None else total_pages_for(total, limit))


def adapt_categories(body, page, limit) -> Page:
    # backend may or may not wrap with data
    if isinstance(body, list):
        items, meta = body, {}
    else:
        items, meta = _items(body), body
    total = _int(meta.get("total"), len(items))
    return Page(items=items, page=_int(meta.get("page"), page), total=total, limit=limit,
                total_pages=total_pages_for(total, limit))


def adapt_unpaged(body, page, limit) -> Page:
    items = _items(body)
    return Page(items=items, page=1, total=len(items), limit=max(len(items), 1),
                total_pages=1 if items else 0)


@dataclass(frozen=True)
class Resource:
    name: str
    path: str
    adapter: object = adapt_paged
    status_field: str = "status"
    page_size: int | None = None
    paginated: bool = True
    detail: str | None = None      # formatted with id=


RESOURCES = {
    "users":       Resource("users", "/admin/users", adapt_pagination_block,
                            detail="/admin/users/{id}"),
    "vendors":     Resource("vendors", "/admin/vendors", adapt_unpaged,
                            status_field="verificationStatus", paginated=False,
                            detail="/admin/vendors/{id}"),
    "products":    Resource("products", "/admin/products", adapt_paged,
                            status_field="approvalStatus", page_size=5,
                            detail="/admin/products/{id}"),
    "orders":      Resource("orders", "/admin/orders", adapt_paged, detail="/admin/orders/{id}"),
    "payments":    Resource("payments", "/admin/payments", adapt_paged,
                            detail="/admin/payments/{id}"),
    "reviews":     Resource("reviews", "/admin/reviews/moderation", adapt_unpaged, paginated=False),
    "categories":  Resource("categories", "/admin/categories", adapt_categories, page_size=5),
    "withdrawals": Resource("withdrawals", "/admin/withdrawals", adapt_withdrawals, page_size=5),
    "deletions":   Resource("deletions", "/deletion", adapt_unpaged, paginated=False),
}


def get_resource(name: str) -> Resource:
    try:
        return RESOURCES[name]
    except KeyError:
        raise LookupError(f"unknown resource: {name}") from None


def record_id(record: dict):
    return record.get("_id") or record.get("id")
