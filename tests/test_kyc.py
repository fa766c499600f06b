# File: tests/test_kyc.py


def test_initial_status_is_pending(client, auth_headers):
    resp = client.get("/api/kyc/status", headers=auth_headers)
    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "pending"
    assert body["submittedAt"] is None
    assert body["documents"] == []


def test_submit_documents(client, auth_headers):
    resp = client.post(
        "/api/kyc/submit",
        json={"documents": ["passport.pdf", "  ", "utility-bill.pdf"]},
        headers=auth_headers,
    )
    assert resp.status_code == 200
    kyc = resp.json()["kyc"]
    assert kyc["status"] == "pending"
    assert kyc["documents"] == ["passport.pdf", "utility-bill.pdf"]
    assert kyc["submittedAt"] is not None


def test_submit_requires_documents(client, auth_headers):
    resp = client.post("/api/kyc/submit", json={"documents": []}, headers=auth_headers)
    assert resp.status_code == 400
    assert resp.json()["message"] == "At least one identity document is required"

    resp = client.post("/api/kyc/submit", json={"documents": "passport.pdf"}, headers=auth_headers)
    assert resp.status_code == 400


def test_resubmit_after_rejection(client, auth_headers, admin_headers):
    user_id = client.get("/api/auth/me", headers=auth_headers).json()["user"]["id"]
    client.post("/api/kyc/submit", json={"documents": ["blurry.jpg"]}, headers=auth_headers)
    client.post(f"/api/admin/users/{user_id}/kyc", json={"status": "rejected"}, headers=admin_headers)

    resp = client.post("/api/kyc/submit", json={"documents": ["passport.pdf"]}, headers=auth_headers)
    assert resp.status_code == 200
    assert resp.json()["kyc"]["status"] == "pending"


def test_cannot_resubmit_after_approval(client, auth_headers, admin_headers):
    user_id = client.get("/api/auth/me", headers=auth_headers).json()["user"]["id"]
    client.post(f"/api/admin/users/{user_id}/kyc", json={"status": "approved"}, headers=admin_headers)

    resp = client.post("/api/kyc/submit", json={"documents": ["passport.pdf"]}, headers=auth_headers)
    assert resp.status_code == 409


def test_kyc_requires_auth(client):
    assert client.get("/api/kyc/status").status_code == 401
