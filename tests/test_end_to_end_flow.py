"""
End-to-end flow over HTTP:

1. alice registers and creates an item
2. the item has default quantity and price
3. bob cannot modify alice's item
4. alice deletes it and her list is empty again
"""
from __future__ import annotations

from stockkeeper.core.security import decode_access_token


def test_two_accounts_inventory_flow(client, bearer):
    resp = client.post("/api/register", json={"username": "alice", "email": "alice@x.com", "password": "secret1"})
    assert resp.status_code == 201
    alice = resp.json()
    assert decode_access_token(alice["token"]).user_id == alice["user"]["id"]
    alice_auth = bearer(alice["token"])

    resp = client.post("/api/inventory", json={"name": "Widget", "sku": "W-1"}, headers=alice_auth)
    assert resp.status_code == 201
    item = resp.json()["item"]
    assert item["quantity"] == 0
    assert item["unit_price"] == "0.00"

    resp = client.get("/api/inventory", headers=alice_auth)
    assert resp.status_code == 200
    assert [i["id"] for i in resp.json()["items"]] == [item["id"]]

    resp = client.post("/api/register", json={"username": "bob", "email": "bob@x.com", "password": "secret1"})
    assert resp.status_code == 201
    bob_auth = bearer(resp.json()["token"])

    resp = client.put(f"/api/inventory/{item['id']}", json={"name": "Mine now", "sku": "W-1"}, headers=bob_auth)
    assert resp.status_code == 404
    assert resp.json() == {"error": "Inventory item not found"}

    resp = client.delete(f"/api/inventory/{item['id']}", headers=bob_auth)
    assert resp.status_code == 404

    assert client.get("/api/inventory", headers=bob_auth).json() == {"items": []}

    resp = client.put(
        f"/api/inventory/{item['id']}",
        json={"name": "Widget", "sku": "W-1", "quantity": "7", "unit_price": "1.5"},
        headers=alice_auth,
    )
    assert resp.status_code == 200
    assert resp.json()["item"]["quantity"] == 7
    assert resp.json()["item"]["unit_price"] == "1.50"

    resp = client.delete(f"/api/inventory/{item['id']}", headers=alice_auth)
    assert resp.status_code == 200
    assert resp.json()["message"] == "Inventory item deleted successfully"

    assert client.get("/api/inventory", headers=alice_auth).json() == {"items": []}
