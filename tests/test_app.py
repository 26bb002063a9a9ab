from conftest import make_token, page_body


def cookies(resp):
    return " ".join(resp.headers.getlist("Set-Cookie"))


def products(n, status="PENDING"):
    return [{"_id": f"p{i}", "name": f"Product {i}", "price": 1000 + i,
             "approvalStatus": status, "isActive": True} for i in range(n)]


def withdrawals():
    return {"data": [{"_id": "w1", "amount": 2500, "status": "PENDING",
                      "withdrawalDetails": {"bankName": "GTB", "accountName": "Ada",
                                            "bankAccount": "0123456789"}}],
            "totalWithdrawals": 1, "page": 1, "limit": 5, "totalPages": 1}


def test_health(client):
    assert client.get("/health").get_json()["status"] == "ok"


def test_anonymous_is_sent_to_login(client):
    resp = client.get("/admin/users")
    assert resp.status_code == 302
    assert resp.headers["Location"].endswith("/login")


def test_expired_token_equals_no_token(client, http):
    client.set_cookie("token", make_token(exp_in=-10))
    resp = client.get("/admin/dashboard")
    assert resp.status_code == 302
    assert resp.headers["Location"].endswith("/login")
    # the stale cookie is removed
    assert "token=;" in cookies(resp)
    assert http.calls == []


def test_root_redirects_by_session(client, admin_client):
    assert client.get("/").headers["Location"].endswith("/admin/dashboard")


def test_login_sets_cookie_and_redirects(client, http):
    token = make_token("ADMIN")
    http.add("POST", "/auth/login", {"data": {"token": token}})
    resp = client.post("/login", data={"email": "a@b.c", "password": "pw"})
    assert resp.status_code == 302
    assert resp.headers["Location"].endswith("/admin/dashboard")
    assert f"token={token}" in cookies(resp)
    assert http.calls[0].json == {"email": "a@b.c", "password": "pw"}
    assert "Authorization" not in http.calls[0].headers


def test_login_failure_shows_server_message(client, http):
    http.add("POST", "/auth/login", {"message": "Invalid credentials"}, status=401)
    resp = client.post("/login", data={"email": "a@b.c", "password": "bad"})
    assert resp.status_code == 401
    assert b"Invalid credentials" in resp.data


def test_login_refuses_non_admin(client, http):
    http.add("POST", "/auth/login", {"data": {"token": make_token("CUSTOMER")}})
    resp = client.post("/login", data={"email": "c@b.c", "password": "pw"})
    assert resp.status_code == 403
    assert b"not an administrator" in resp.data
    assert "token=;" in cookies(resp)


def test_login_requires_fields(client, http):
    resp = client.post("/login", data={"email": "", "password": ""})
    assert resp.status_code == 400
    assert http.calls == []


def test_logout_clears_cookie(admin_client):
    resp = admin_client.get("/logout")
    assert resp.status_code == 302
    assert "token=;" in cookies(resp)


def test_requests_carry_bearer_token(admin_client, http):
    http.add("GET", "/admin/users", {"data": [], "pagination": {"total": 0, "page": 1,
                                                                "limit": 10, "totalPages": 0}})
    admin_client.get("/admin/users")
    assert http.calls[0].headers["Authorization"].startswith("Bearer ")


def test_products_page_and_clamp(admin_client, http):
    http.add("GET", "/admin/products", page_body(products(5), total=12))
    resp = admin_client.get("/admin/products?page=1")
    assert resp.status_code == 200
    assert "Page 1 of 3 · Total: 12".encode() in resp.data
    assert http.calls[0].params == {"page": 1, "limit": 5}

    resp = admin_client.get("/admin/products?page=4")
    assert resp.status_code == 302
    assert "page=3" in resp.headers["Location"]


def test_page_below_one_redirects(admin_client, http):
    resp = admin_client.get("/admin/products?page=0")
    assert resp.status_code == 302
    assert "page=1" in resp.headers["Location"]
    assert http.calls == []


def test_first_load_failure_shows_message(admin_client, http):
    http.add("GET", "/admin/orders", {"message": "Orders service down"}, status=503)
    resp = admin_client.get("/admin/orders")
    assert resp.status_code == 200
    assert b"Orders service down" in resp.data
    assert b"Could not load orders" in resp.data


def test_withdrawals_are_superadmin_only(admin_client, http):
    resp = admin_client.get("/admin/withdrawals")
    assert resp.status_code == 302
    assert resp.headers["Location"].endswith("/admin/vendors")
    assert http.calls == []


def test_approve_withdrawal_end_to_end(superadmin_client, http):
    http.add("GET", "/admin/withdrawals", withdrawals())
    http.add("PATCH", "/admin/withdrawals/w1/status", {"data": {"status": "APPROVED"}})

    page = superadmin_client.get("/admin/withdrawals")
    assert b"Approve" in page.data

    resp = superadmin_client.post("/admin/withdrawals/w1/approve", data={"from": "list", "page": "1"})
    assert resp.status_code == 302
    assert "held=1" in resp.headers["Location"]

    patch = http.sent("PATCH")
    assert len(patch) == 1 and patch[0].json == {"status": "APPROVED"}

    page = superadmin_client.get(resp.headers["Location"])
    assert b"APPROVED" in page.data
    assert b"Withdrawal approved." in page.data
    assert b">Approve<" not in page.data
    # the held list was patched, not fetched again
    assert len(http.sent("GET", "/admin/withdrawals")) == 1


def test_reject_without_reason_via_console(superadmin_client, http):
    http.add("GET", "/admin/withdrawals", withdrawals())
    superadmin_client.get("/admin/withdrawals")
    resp = superadmin_client.post("/admin/withdrawals/w1/reject", data={"reason": ""},
                                  headers={"Accept": "application/json"})
    assert resp.status_code == 400
    assert resp.get_json()["message"] == "Please provide a reason for rejection."
    assert http.sent("PATCH") == []


def test_action_json_failure_keeps_status(admin_client, http):
    http.add("GET", "/admin/reviews/moderation", {"data": [
        {"_id": "r1", "rating": 4, "comment": "ok", "status": "PENDING",
         "userId": {"firstName": "Ada", "lastName": "O"}, "productId": {"name": "Lamp"}}]})
    http.add("PATCH", "/admin/reviews/r1/moderate", {"message": "Review locked"}, status=409)
    admin_client.get("/admin/reviews")

    resp = admin_client.post("/admin/reviews/r1/approve", headers={"Accept": "application/json"})
    body = resp.get_json()
    assert resp.status_code == 502
    assert body["message"] == "Review locked"
    assert body["data"]["status"] == "PENDING"


def test_detail_action_uses_backend_record(admin_client, http):
    http.add("GET", "/admin/users/u1", {"data": {"_id": "u1", "firstName": "Ada",
                                                 "status": "ACTIVE", "email": "ada@x.io"}})
    http.add("PATCH", "/admin/users/u1/status", {"data": {"status": "SUSPENDED"}})

    resp = admin_client.post("/admin/users/u1/suspend", data={"from": "detail"})
    assert resp.status_code == 302
    assert resp.headers["Location"].endswith("/admin/users/u1")
    assert http.sent("PATCH")[0].json == {"status": "SUSPENDED"}


def test_product_detail_shows_vendor_name(admin_client, http):
    http.add("GET", "/admin/products/p1", {"data": {"_id": "p1", "name": "Lamp",
                                                    "approvalStatus": "PENDING", "vendorId": "v9",
                                                    "price": 100}})
    http.add("GET", "/admin/vendors/v9", {"data": {"_id": "v9", "businessName": "Bright Co"}})
    resp = admin_client.get("/admin/products/p1")
    assert resp.status_code == 200
    assert b"Bright Co" in resp.data
    assert b"Approve" in resp.data


def test_missing_detail_is_404(admin_client, http):
    http.add("GET", "/admin/orders/o404", {"message": "Order not found"}, status=404)
    resp = admin_client.get("/admin/orders/o404")
    assert resp.status_code == 404
    assert b"Order not found" in resp.data


def test_delete_product_from_detail_goes_to_list(admin_client, http):
    http.add("GET", "/admin/products/p1", {"data": {"_id": "p1", "approvalStatus": "APPROVED"}})
    http.add("DELETE", "/admin/products/p1", None, status=204)
    resp = admin_client.post("/admin/products/p1/delete", data={"from": "detail"})
    assert resp.status_code == 302
    assert "/admin/products" in resp.headers["Location"]
    assert not resp.headers["Location"].endswith("/p1")


def test_categories_validation_and_save(admin_client, http):
    resp = admin_client.post("/admin/categories", data={"name": "Shoes", "slug": ""})
    assert resp.status_code == 302
    assert http.calls == []

    http.add("POST", "/admin/categories", {"data": {"_id": "c1"}})
    admin_client.post("/admin/categories", data={"name": "Shoes", "slug": "shoes"})
    assert http.calls[0].json == {"name": "Shoes", "slug": "shoes", "description": ""}

    http.add("PATCH", "/admin/categories/c1", {"data": {"_id": "c1"}})
    admin_client.post("/admin/categories", data={"id": "c1", "name": "Shoes", "slug": "shoe"})
    assert http.sent("PATCH")[0].path == "/admin/categories/c1"


def test_categories_page_renders_bare_list(admin_client, http):
    http.add("GET", "/admin/categories", [{"_id": "c1", "name": "Shoes", "slug": "shoes"}])
    resp = admin_client.get("/admin/categories?search=sh")
    assert resp.status_code == 200
    assert b"Shoes" in resp.data
    assert http.calls[0].params == {"page": 1, "limit": 5, "search": "sh"}


def test_signup_requires_superadmin(admin_client, http):
    assert admin_client.get("/admin/signup").status_code == 302


def test_signup_password_mismatch(superadmin_client, http):
    resp = superadmin_client.post("/admin/signup", data={
        "email": "new@x.io", "password": "a", "confirm_password": "b"})
    assert resp.status_code == 400
    assert b"Passwords do not match" in resp.data
    assert http.calls == []

    http.add("POST", "/auth/register", {"data": {}})
    resp = superadmin_client.post("/admin/signup", data={
        "firstName": "New", "email": "new@x.io", "password": "a", "confirm_password": "a"})
    assert resp.status_code == 302
    body = http.calls[0].json
    assert body["role"] == "ADMIN" and body["isVendor"] is False


def test_dashboard_summarizes_stats(admin_client, http):
    http.add("GET", "/admin/dashboard/stats", {"data": {
        "users": {"total": 10, "active": 8, "inactive": 2},
        "orders": {"total": 3, "revenue": 1500.5, "byStatus": {"PENDING": 1, "DELIVERED": 2}},
    }})
    resp = admin_client.get("/admin/dashboard")
    assert resp.status_code == 200
    assert b"byStatus \xc2\xb7 DELIVERED" in resp.data
    assert "₦1,500.50".encode() in resp.data


def test_deletion_requests_decided_by_superadmin(superadmin_client, http):
    http.add("GET", "/deletion", {"data": [
        {"_id": "d1", "accountId": "u1", "accountType": "User", "status": "PENDING", "reason": "spam"}]})
    http.add("POST", "/deletion/d1/handle", {"message": "done"})
    superadmin_client.get("/admin/deletion-requests")
    resp = superadmin_client.post("/admin/deletion-requests/d1/reject",
                                  data={"reason": "keep"}, headers={"Accept": "application/json"})
    assert resp.get_json()["data"]["status"] == "REJECTED"
    assert http.sent("POST")[0].json == {"action": "REJECT", "decisionReason": "keep"}


def test_action_on_unloaded_list_fetches_posted_page(superadmin_client, http):
    http.add("GET", "/admin/withdrawals", withdrawals())
    http.add("PATCH", "/admin/withdrawals/w1/status", {"data": {"status": "APPROVED"}})

    resp = superadmin_client.post("/admin/withdrawals/w1/approve", data={"page": "1"},
                                  headers={"Accept": "application/json"})

    assert resp.status_code == 200
    assert resp.get_json()["data"]["status"] == "APPROVED"
    assert http.sent("GET")[0].params == {"page": 1, "limit": 5}
    assert len(http.sent("PATCH")) == 1


def test_action_on_record_missing_after_refetch_is_refused(superadmin_client, http):
    http.add("GET", "/admin/withdrawals", withdrawals())
    resp = superadmin_client.post("/admin/withdrawals/w9/approve",
                                  headers={"Accept": "application/json"})
    assert resp.status_code == 400
    assert "unknown" in resp.get_json()["message"]
    assert http.sent("PATCH") == []


def test_reject_reason_from_json_body(superadmin_client, http):
    http.add("GET", "/admin/withdrawals", withdrawals())
    http.add("PATCH", "/admin/withdrawals/w1/status", {"data": {"status": "REJECTED"}})
    superadmin_client.get("/admin/withdrawals")

    resp = superadmin_client.post("/admin/withdrawals/w1/reject", json={"reason": "bad bank"})

    assert resp.status_code == 200
    assert http.sent("PATCH")[0].json == {"status": "REJECTED", "reason": "bad bank"}
