# File: tests/test_assets.py

import pytest

from app.core.errors import BadRequestError
from app.models.user import User
from app.services import asset_service
from conftest import pledge


def test_pledge_creates_pending_asset(client, auth_headers):
    asset = pledge(client, auth_headers, value=0)
    assert asset["status"] == "pending"
    assert asset["estimatedValue"] == 0
    assert asset["tokenId"] is None
    assert asset["isListed"] is False


@pytest.mark.parametrize(
    "payload, message",
    [
        ({"assetType": "art", "description": "Painting"}, "Asset type, description and estimated value are required"),
        ({"assetType": "yacht", "description": "Boat", "estimatedValue": 10}, "Invalid asset type"),
        ({"assetType": "art", "description": "Painting", "estimatedValue": -1}, "Estimated value must be a non-negative number"),
        ({"assetType": "art", "description": "Painting", "estimatedValue": "lots"}, "Estimated value must be a non-negative number"),
        ({"assetType": "art", "description": "Painting", "estimatedValue": 5, "documents": "deed.pdf"}, "Documents must be a list of strings"),
    ],
)
def test_pledge_validation(client, auth_headers, payload, message):
    resp = client.post("/api/assets/pledge", json=payload, headers=auth_headers)
    assert resp.status_code == 400
    assert resp.json()["message"] == message


def test_pledge_requires_auth(client):
    resp = client.post(
        "/api/assets/pledge",
        json={"assetType": "art", "description": "Painting", "estimatedValue": 5},
    )
    assert resp.status_code == 401


def test_my_assets_are_owner_scoped(client, auth_headers, other_headers):
    mine = pledge(client, auth_headers)
    pledge(client, other_headers, asset_type="art", description="Sculpture")

    resp = client.get("/api/assets/mine", headers=auth_headers)
    assert resp.status_code == 200
    ids = [a["id"] for a in resp.json()["assets"]]
    assert ids == [mine["id"]]

    resp = client.get(f"/api/assets/{mine['id']}", headers=other_headers)
    assert resp.status_code == 404
    assert resp.json()["message"] == "Asset not found"


def test_my_assets_status_filter(client, auth_headers, approved_asset):
    pledge(client, auth_headers, asset_type="bonds", description="Treasury bond")

    approved = client.get("/api/assets/mine", params={"status": "approved"}, headers=auth_headers).json()
    assert [a["id"] for a in approved["assets"]] == [approved_asset["id"]]

    resp = client.get("/api/assets/mine", params={"status": "bogus"}, headers=auth_headers)
    assert resp.status_code == 400


def test_mint_requires_approved_status(client, auth_headers):
    asset = pledge(client, auth_headers)
    resp = client.post(f"/api/assets/{asset['id']}/mint", json={}, headers=auth_headers)
    assert resp.status_code == 400
    assert resp.json()["message"] == "Only approved assets can be minted"

    stored = client.get(f"/api/assets/{asset['id']}", headers=auth_headers).json()["asset"]
    assert stored["status"] == "pending"
    assert stored["tokenId"] is None


def test_mint_tokenizes_once(client, auth_headers, approved_asset):
    resp = client.post(
        f"/api/assets/{approved_asset['id']}/mint",
        json={"tokenSymbol": "flat", "tokenSupply": 1000},
        headers=auth_headers,
    )
    assert resp.status_code == 200
    asset = resp.json()["asset"]
    assert asset["status"] == "tokenized"
    assert asset["tokenSymbol"] == "FLAT"
    assert asset["tokenSupply"] == 1000
    assert asset["tokenPrice"] == 250.0
    assert asset["tokenId"].startswith("0x") and len(asset["tokenId"]) == 42
    assert asset["tokenizedAt"] is not None

    again = client.post(f"/api/assets/{approved_asset['id']}/mint", json={"tokenSupply": 5}, headers=auth_headers)
    assert again.status_code == 400

    stored = client.get(f"/api/assets/{approved_asset['id']}", headers=auth_headers).json()["asset"]
    assert stored["tokenId"] == asset["tokenId"]
    assert stored["tokenSupply"] == 1000


def test_mint_defaults(client, auth_headers, approved_asset):
    resp = client.post(f"/api/assets/{approved_asset['id']}/mint", headers=auth_headers)
    assert resp.status_code == 200
    asset = resp.json()["asset"]
    assert asset["tokenSymbol"] == "RE"
    assert asset["tokenName"] == "Real Estate Token"
    assert asset["tokenType"] == "ERC-20"
    assert asset["tokenSupply"] == 1
    assert asset["tokenPrice"] == 250000.0


def test_mint_fractional_default_supply(client, auth_headers, approved_asset):
    resp = client.post(
        f"/api/assets/{approved_asset['id']}/mint",
        json={"fractional": True},
        headers=auth_headers,
    )
    assert resp.json()["asset"]["tokenSupply"] == 1_000_000


@pytest.mark.parametrize(
    "payload",
    [
        {"tokenSupply": 0},
        {"tokenSupply": 2.5},
        {"tokenSymbol": "T"},
        {"tokenSymbol": "BAD-SYMBOL"},
        {"tokenType": "ERC-9999"},
        {"fractional": "yes"},
    ],
)
def test_mint_validation_leaves_asset_approved(client, auth_headers, approved_asset, payload):
    resp = client.post(f"/api/assets/{approved_asset['id']}/mint", json=payload, headers=auth_headers)
    assert resp.status_code == 400
    stored = client.get(f"/api/assets/{approved_asset['id']}", headers=auth_headers).json()["asset"]
    assert stored["status"] == "approved"


def test_cannot_mint_someone_elses_asset(client, other_headers, approved_asset):
    resp = client.post(f"/api/assets/{approved_asset['id']}/mint", headers=other_headers)
    assert resp.status_code == 404


def test_listing_toggle(client, auth_headers, tokenized_asset):
    resp = client.patch(
        f"/api/assets/{tokenized_asset['id']}/listing",
        json={"isListed": True},
        headers=auth_headers,
    )
    assert resp.status_code == 200
    assert resp.json()["asset"]["isListed"] is True


def test_listing_requires_tokenized(client, auth_headers, approved_asset):
    resp = client.patch(
        f"/api/assets/{approved_asset['id']}/listing",
        json={"isListed": True},
        headers=auth_headers,
    )
    assert resp.status_code == 400
    assert resp.json()["message"] == "Only tokenized assets can be listed"


def test_marketplace_only_shows_tokenized_and_listed(client, auth_headers, other_headers, tokenized_asset):
    # tokenized but unlisted, approved, and pending assets stay hidden
    pledge(client, other_headers, asset_type="art", description="Sculpture")
    assert client.get("/api/assets/marketplace").json()["listings"] == []

    client.patch(f"/api/assets/{tokenized_asset['id']}/listing", json={"isListed": True}, headers=auth_headers)

    for headers in ({}, auth_headers, other_headers):
        listings = client.get("/api/assets/marketplace", headers=headers).json()["listings"]
        assert [item["assetId"] for item in listings] == [tokenized_asset["id"]]
        assert listings[0]["tokenId"] == tokenized_asset["tokenId"]
        assert listings[0]["ownerName"] == "Jane Doe"


def test_public_summary(client, auth_headers, tokenized_asset):
    summary = client.get("/api/assets/summary").json()["summary"]
    assert summary["totalAssets"] == 1
    assert summary["realEstateCount"] == 1
    assert summary["commoditiesCount"] == 0
    assert summary["totalValue"] == 250000.0
    assert summary["totalValueMillions"] == 0.2


@pytest.mark.parametrize(
    "value, message",
    [
        (10**400, "Estimated value must be a non-negative number"),
        (1e16, "Estimated value is too large"),
        ("1e400", "Estimated value must be a non-negative number"),
    ],
)
def test_pledge_rejects_out_of_range_values(client, auth_headers, value, message):
    resp = client.post(
        "/api/assets/pledge",
        json={"assetType": "art", "description": "Painting", "estimatedValue": value},
        headers=auth_headers,
    )
    assert resp.status_code == 400
    assert resp.json() == {"success": False, "message": message}


def test_pledge_rejects_non_finite_value(client, auth_headers):
    resp = client.post(
        "/api/assets/pledge",
        content='{"assetType": "art", "description": "Painting", "estimatedValue": Infinity}',
        headers={**auth_headers, "Content-Type": "application/json"},
    )
    assert resp.status_code == 400
    assert resp.json()["success"] is False
    assert client.get("/api/assets/mine", headers=auth_headers).json()["assets"] == []


@pytest.mark.parametrize(
    "payload, message",
    [
        ({"tokenSupply": 10**20}, "Token supply must not exceed 1,000,000,000,000,000"),
        ({"tokenSupply": 2.5}, "Token supply must be a whole number of at least 1"),
        ({"tokenSupply": "1000"}, "Token supply must be a whole number of at least 1"),
        ({"fractional": "yes"}, "fractional must be a boolean"),
        ({"isListed": 1}, "isListed must be a boolean"),
    ],
)
def test_mint_field_messages(client, auth_headers, approved_asset, payload, message):
    resp = client.post(f"/api/assets/{approved_asset['id']}/mint", json=payload, headers=auth_headers)
    assert resp.status_code == 400
    assert resp.json() == {"success": False, "message": message}
    stored = client.get(f"/api/assets/{approved_asset['id']}", headers=auth_headers).json()["asset"]
    assert stored["status"] == "approved"


def test_mint_largest_supply_is_stored(client, auth_headers, approved_asset):
    resp = client.post(
        f"/api/assets/{approved_asset['id']}/mint",
        json={"tokenSupply": 10**15},
        headers=auth_headers,
    )
    assert resp.status_code == 200
    assert resp.json()["asset"]["tokenSupply"] == 10**15


def test_concurrent_mints_tokenize_once(client, app, auth_headers, approved_asset):
    user_id = client.get("/api/auth/me", headers=auth_headers).json()["user"]["id"]
    first = app.state.session_factory()
    second = app.state.session_factory()
    try:
        # both requests have already seen the asset as approved
        asset_service.get_owned_asset(first, first.get(User, user_id), approved_asset["id"])
        asset_service.get_owned_asset(second, second.get(User, user_id), approved_asset["id"])

        minted = asset_service.mint_asset(first, first.get(User, user_id), approved_asset["id"], token_symbol="ONE")
        with pytest.raises(BadRequestError) as exc:
            asset_service.mint_asset(second, second.get(User, user_id), approved_asset["id"], token_symbol="TWO")
        assert exc.value.message == "Only approved assets can be minted"
        token_id = minted.token_id
    finally:
        first.close()
        second.close()

    stored = client.get(f"/api/assets/{approved_asset['id']}", headers=auth_headers).json()["asset"]
    assert stored["tokenId"] == token_id
    assert stored["tokenSymbol"] == "ONE"
