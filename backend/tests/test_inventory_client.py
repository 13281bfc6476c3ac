import pytest

from utils.inventory_client import InventoryAPIError, InventoryClient


@pytest.fixture
def api(client):
    return InventoryClient(client=client)


def test_health(api):
    assert "message" in api.health()


def test_crud_through_client(api, tmp_path):
    photo = tmp_path / "butter.png"
    photo.write_bytes(b"png")

    created = api.create_product("Client Butter", price=99.5, quantity=3, image=photo)
    assert created["price"] == 99.5
    assert created["imageUrl"].endswith(".png")

    assert api.get_product(created["id"]) == created
    assert [p["id"] for p in api.list_products()] == [created["id"]]

    updated = api.update_product(created["id"], quantity=7)
    assert updated["quantity"] == 7
    assert updated["name"] == "Client Butter"

    assert api.delete_product(created["id"]) is True
    assert api.get_product(created["id"]) is None
    assert api.delete_product(created["id"]) is False


def test_errors_raise_with_message(api):
    with pytest.raises(InventoryAPIError) as excinfo:
        api.create_product("  ")

    assert excinfo.value.status_code == 400
    assert excinfo.value.message == "Name is required."


def test_does_not_close_injected_client(client):
    with InventoryClient(client=client) as api:
        api.health()
    assert client.get("/api").status_code == 200
