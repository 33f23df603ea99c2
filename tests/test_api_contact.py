MESSAGE = {
    "nombre": "  Ana  ",
    "email": "ana@clinica.es",
    "mensaje": "Quisiera más información sobre el cuestionario.",
}


def test_send_message_trims_and_defaults_subject(client, admin_headers):
    res = client.post("/api/v1/contact", json=MESSAGE)
    assert res.status_code == 201, res.text

    res = client.get("/api/v1/admin/contact-messages", headers=admin_headers)
    item = res.json()["items"][0]
    assert item["nombre"] == "Ana"
    assert item["asunto"] == "Sin asunto"
    assert item["status"] == "unread"


def test_validation_errors(client):
    assert client.post("/api/v1/contact", json={**MESSAGE, "nombre": "A"}).status_code == 422
    assert client.post("/api/v1/contact", json={**MESSAGE, "email": "no-es-email"}).status_code == 422
    assert client.post("/api/v1/contact", json={**MESSAGE, "mensaje": "corto"}).status_code == 422
    assert client.post("/api/v1/contact", json={**MESSAGE, "asunto": "x" * 201}).status_code == 422


def test_stats_and_admin_workflow(client, admin_headers):
    first = client.post("/api/v1/contact", json=MESSAGE).json()["id"]
    second = client.post("/api/v1/contact", json={**MESSAGE, "asunto": "Citas"}).json()["id"]

    res = client.put(
        f"/api/v1/admin/contact-messages/{first}/status", json={"status": "read"}, headers=admin_headers,
    )
    assert res.status_code == 200
    assert res.json()["status"] == "read"

    stats = client.get("/api/v1/contact/stats").json()
    assert stats == {"total": 2, "unread": 1, "read": 1, "replied": 0}

    res = client.get("/api/v1/admin/contact-messages?status=unread", headers=admin_headers)
    assert [m["id"] for m in res.json()["items"]] == [second]

    assert client.delete(f"/api/v1/admin/contact-messages/{second}", headers=admin_headers).status_code == 200
    assert client.delete(f"/api/v1/admin/contact-messages/{second}", headers=admin_headers).status_code == 404


def test_invalid_status_rejected(client, admin_headers):
    mid = client.post("/api/v1/contact", json=MESSAGE).json()["id"]
    res = client.put(
        f"/api/v1/admin/contact-messages/{mid}/status", json={"status": "archivado"}, headers=admin_headers,
    )
    assert res.status_code == 422


def test_unpaid_blocks_contact(client, unpaid):
    assert client.post("/api/v1/contact", json=MESSAGE).status_code == 402
