"""Tests for the product catalog."""

import pytest

from conftest import cookie_header
from src.catalog.routes import price_ttc


@pytest.fixture
def catalog(store):
    familles = store.seed("familles_produits", {"nom": "Nettoyage"}, {"nom": "Bureautique"})
    categories = store.seed(
        "categories_produits",
        {"nom": "Sols", "famille_id": familles[0]["id"]},
        {"nom": "Papier", "famille_id": familles[1]["id"]},
    )
    produits = store.seed(
        "produits",
        {"designation": "Serpillière", "reference": "NET-001", "famille_id": familles[0]["id"], "categorie_id": categories[0]["id"], "prix_ht": 10},
        {"designation": "Balai", "reference": "NET-002", "famille_id": familles[0]["id"], "categorie_id": categories[0]["id"], "prix_ht": 15},
        {"designation": "Ramette A4", "reference": "BUR-100", "famille_id": familles[1]["id"], "categorie_id": categories[1]["id"], "prix_ht": 5},
    )
    return {"familles": familles, "categories": categories, "produits": produits}


def _product(catalog, **overrides):
    body = {
        "designation": "Seau",
        "reference": "NET-003",
        "famille_id": catalog["familles"][0]["id"],
        "categorie_id": catalog["categories"][0]["id"],
        "prix_ht": 100,
    }
    body.update(overrides)
    return body


def test_price_ttc():
    assert price_ttc(100, None) == 120
    assert price_ttc(100, 5.5) == 105.5
    assert price_ttc(100, 20, prix_ttc=99) == 99


def test_families_and_categories_are_public(client, catalog):
    resp = client.get("/api/catalogue/familles")
    assert resp.status_code == 200
    assert [f["nom"] for f in resp.json()["data"]] == ["Bureautique", "Nettoyage"]

    resp = client.get("/api/catalogue/categories", params={"famille_id": catalog["familles"][0]["id"]})
    assert [c["nom"] for c in resp.json()["data"]] == ["Sols"]


def test_product_search(client, catalog):
    resp = client.get("/api/catalogue/produits")
    assert [p["designation"] for p in resp.json()["data"]] == ["Balai", "Ramette A4", "Serpillière"]

    resp = client.get("/api/catalogue/produits", params={"search": "net-00"})
    assert [p["reference"] for p in resp.json()["data"]] == ["NET-002", "NET-001"]

    resp = client.get("/api/catalogue/produits", params={"search": "ramette"})
    assert len(resp.json()["data"]) == 1

    resp = client.get("/api/catalogue/produits", params={"famille_id": catalog["familles"][1]["id"]})
    assert [p["reference"] for p in resp.json()["data"]] == ["BUR-100"]


def test_get_product(client, catalog):
    produit = catalog["produits"][0]
    resp = client.get(f"/api/catalogue/produits/{produit['id']}")
    assert resp.json()["data"]["reference"] == "NET-001"

    assert client.get("/api/catalogue/produits/missing").status_code == 404


def test_create_product_computes_ttc(client, catalog, admin_headers):
    resp = client.post("/api/catalogue/produits", json=_product(catalog, tva_pct=10), headers=admin_headers)
    assert resp.status_code == 201
    assert resp.json()["data"]["prix_ttc"] == 110


def test_consultant_can_edit_catalog(client, catalog, consultant):
    resp = client.post("/api/catalogue/produits", json=_product(catalog), headers=cookie_header(consultant[1]))
    assert resp.status_code == 201
    assert resp.json()["data"]["prix_ttc"] == 120


def test_commercial_cannot_edit_catalog(client, catalog, commercial_headers):
    resp = client.post("/api/catalogue/produits", json=_product(catalog), headers=commercial_headers)
    assert resp.status_code == 403

    produit = catalog["produits"][0]
    assert client.delete(f"/api/catalogue/produits/{produit['id']}", headers=commercial_headers).status_code == 403


def test_catalog_writes_require_session(client, catalog):
    resp = client.post("/api/catalogue/produits", json=_product(catalog))
    assert resp.status_code == 401


def test_update_product(client, catalog, admin_headers):
    produit = catalog["produits"][0]

    resp = client.put(f"/api/catalogue/produits/{produit['id']}", json={"prix_ht": 50}, headers=admin_headers)
    assert resp.status_code == 200
    assert resp.json()["data"]["prix_ttc"] == 60

    resp = client.put(f"/api/catalogue/produits/{produit['id']}", json={"designation": "Mop"}, headers=admin_headers)
    assert resp.json()["data"]["designation"] == "Mop"
    assert resp.json()["data"]["prix_ttc"] == 60

    assert client.put(f"/api/catalogue/produits/{produit['id']}", json={}, headers=admin_headers).status_code == 400
    assert client.put("/api/catalogue/produits/missing", json={"designation": "x"}, headers=admin_headers).status_code == 404


def test_delete_product(client, store, catalog, admin_headers):
    produit = catalog["produits"][0]
    resp = client.delete(f"/api/catalogue/produits/{produit['id']}", headers=admin_headers)
    assert resp.status_code == 204
    assert len(store.tables["produits"]) == 2
