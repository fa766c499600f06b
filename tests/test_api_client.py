# File: tests/test_api_client.py

"""
Drives the API client against the in-process app through TestClient, which
exposes the same ``request`` interface as a requests session.
"""

import pytest

from app.client.api_client import ApiClient, ApiError, is_public_endpoint
from conftest import ADMIN_EMAIL, ADMIN_PASSWORD


@pytest.fixture
def api(client):
    return ApiClient(base_url=str(client.base_url), session=client)


def test_public_endpoints():
    assert is_public_endpoint("/api/auth/login")
    assert is_public_endpoint("/api/marketplace/listings")
    assert not is_public_endpoint("/api/assets/mine")


def test_login_stores_token_and_attaches_it(api):
    api.register("Jane Doe", "jane@x.com", "Passw0rd")
    assert not api.is_authenticated

    api.login("jane@x.com", "Passw0rd")
    assert api.is_authenticated
    assert api.me()["email"] == "jane@x.com"

    api.logout()
    with pytest.raises(ApiError) as exc:
        api.me()
    assert exc.value.status_code == 401
    assert exc.value.message == "No token provided"


def test_errors_carry_server_message(api):
    api.register("Jane Doe", "jane@x.com", "Passw0rd")
    with pytest.raises(ApiError) as exc:
        api.register("Jane Doe", "jane@x.com", "Passw0rd")
    assert exc.value.status_code == 409
    assert exc.value.message == "Email already registered"


def test_full_flow(client, api):
    api.register("Jane Doe", "jane@x.com", "Passw0rd")
    api.login("jane@x.com", "Passw0rd")
    asset = api.pledge_asset("precious_metals", "Ten 1oz gold bars", 20000, ["assay.pdf"])
    assert api.my_assets()[0]["id"] == asset["id"]

    admin = ApiClient(base_url=str(client.base_url), session=client)
    admin.login(ADMIN_EMAIL, ADMIN_PASSWORD)
    admin.request("POST", f"/api/admin/assets/{asset['id']}/approve")

    minted = api.mint_token(asset["id"], fractional=True)
    assert minted["tokenSymbol"] == "GOLD"
    api.set_listing(asset["id"], True)

    listings = api.marketplace_listings()
    assert listings[0]["tokenId"] == minted["tokenId"]
    assert admin.buy_token(minted["tokenId"], 10)["success"] is True
    assert api.provide_liquidity("gold-usdc", 100)["lpTokens"] == 100
    assert api.my_activity(limit=1)[0]["type"] == "asset_tokenized"


def test_token_file_persistence(client, tmp_path):
    token_file = tmp_path / "token"
    first = ApiClient(base_url=str(client.base_url), session=client, token_file=str(token_file))
    first.register("Jane Doe", "jane@x.com", "Passw0rd")
    first.login("jane@x.com", "Passw0rd")
    assert token_file.read_text()

    second = ApiClient(base_url=str(client.base_url), session=client, token_file=str(token_file))
    assert second.me()["email"] == "jane@x.com"

    second.logout()
    assert not token_file.exists()
