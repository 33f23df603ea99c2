from app.services.question_catalog import PERSONALIDAD_QUESTIONS

SUBMISSION = {
    "type": "personalidad",
    "personalInfo": {"nombre": "Ana", "correo": "ana@x.com"},
    "answers": {"0": {"answer": "Sí"}, "1": {"value": "No"}, "2": "[object Object]"},
    "completed": False,
}


def test_sync_anonymous_and_read_back(client, admin_user):
    res = client.post("/api/v1/questionnaires/sync", json=SUBMISSION)
    assert res.status_code == 201, res.text
    qid = res.json()["id"]

    res = client.get(f"/api/v1/questionnaires/{qid}")
    assert res.status_code == 200
    body = res.json()
    assert body["answers"] == {"0": "Sí", "1": "No", "2": "Respuesta no válida"}
    assert body["personal_info"]["apellidos"] == "Desconocido"
    assert body["items"][0]["question"] == PERSONALIDAD_QUESTIONS[0]
    assert body["user_email"] == admin_user.email


def test_sync_invalid_type_is_400(client, admin_user):
    res = client.post("/api/v1/questionnaires/sync", json={**SUBMISSION, "type": "invalid"})
    assert res.status_code == 400


def test_sync_without_system_user_is_503(client):
    res = client.post("/api/v1/questionnaires/sync", json=SUBMISSION)
    assert res.status_code == 503


def test_sync_with_token_is_attributed(client, admin_user, pro_user, pro_headers):
    res = client.post("/api/v1/questionnaires/sync", json=SUBMISSION, headers=pro_headers)
    assert res.status_code == 201

    res = client.get("/api/v1/questionnaires/mine", headers=pro_headers)
    assert res.status_code == 200
    body = res.json()
    assert body["pagination"]["total"] == 1
    assert body["items"][0]["user_email"] == pro_user.email


def test_invalid_token_is_rejected_even_on_optional_routes(client, admin_user):
    res = client.post(
        "/api/v1/questionnaires/sync", json=SUBMISSION, headers={"Authorization": "Bearer basura"},
    )
    assert res.status_code == 401


def test_save_complete_and_lock(client, admin_user):
    qid = client.post("/api/v1/questionnaires/sync", json=SUBMISSION).json()["id"]

    res = client.post(f"/api/v1/questionnaires/{qid}/save", json={"answers": {"0": "A veces"}})
    assert res.status_code == 200
    assert res.json()["answers"] == {"0": "A veces"}

    res = client.post(f"/api/v1/questionnaires/{qid}/complete")
    assert res.status_code == 200
    assert res.json()["completed"] is True

    res = client.post(f"/api/v1/questionnaires/{qid}/complete")
    assert res.status_code == 200

    res = client.post(f"/api/v1/questionnaires/{qid}/save", json={"answers": {"0": "No"}})
    assert res.status_code == 409


def test_unknown_questionnaire_is_404(client, admin_user):
    assert client.get("/api/v1/questionnaires/9999").status_code == 404


def test_other_users_questionnaire_is_hidden(client, admin_user, pro_headers):
    qid = client.post("/api/v1/questionnaires/sync", json=SUBMISSION).json()["id"]
    assert client.get(f"/api/v1/questionnaires/{qid}", headers=pro_headers).status_code == 404


def test_mine_requires_auth(client):
    assert client.get("/api/v1/questionnaires/mine").status_code == 401


def test_mine_stats(client, admin_user, pro_headers):
    client.post("/api/v1/questionnaires/sync", json={**SUBMISSION, "completed": True}, headers=pro_headers)
    client.post("/api/v1/questionnaires/sync", json={**SUBMISSION, "type": "pareja"}, headers=pro_headers)

    res = client.get("/api/v1/questionnaires/mine/stats", headers=pro_headers)
    assert res.status_code == 200
    stats = res.json()
    assert stats["total"] == 2
    assert stats["completed"] == 1
    assert stats["completion_rate"] == 50
    assert stats["by_type"]["personalidad"]["completed"] == 1


def test_unpaid_blocks_public_routes(client, admin_user, unpaid):
    res = client.post("/api/v1/questionnaires/sync", json=SUBMISSION)
    assert res.status_code == 402
    assert res.json()["detail"]["error"] == "PAYMENT_REQUIRED"
    assert client.get("/api/v1/payment/status").json()["isPaid"] is False


def test_payment_status(client):
    body = client.get("/api/v1/payment/status").json()
    assert body["isPaid"] is True
    assert body["message"] == "Pago verificado"


def test_restore_latest_by_correo(client, admin_user):
    first = client.post("/api/v1/questionnaires/sync", json=SUBMISSION).json()["id"]
    client.post(f"/api/v1/questionnaires/{first}/complete")
    second = client.post("/api/v1/questionnaires/sync", json={**SUBMISSION, "answers": {"0": "No"}}).json()["id"]

    res = client.get("/api/v1/questionnaires/restore/ANA@x.com/personalidad")
    assert res.status_code == 200, res.text
    body = res.json()
    assert body["id"] == second
    assert body["answers"] == {"0": "No"}
    assert body["items"][0]["question"] == PERSONALIDAD_QUESTIONS[0]


def test_restore_not_found_and_invalid_type(client, admin_user):
    client.post("/api/v1/questionnaires/sync", json=SUBMISSION)
    assert client.get("/api/v1/questionnaires/restore/ana@x.com/pareja").status_code == 404
    assert client.get("/api/v1/questionnaires/restore/otra@x.com/personalidad").status_code == 404
    assert client.get("/api/v1/questionnaires/restore/ana@x.com/otro").status_code == 400


def test_restore_requires_payment(client, admin_user, unpaid):
    assert client.get("/api/v1/questionnaires/restore/ana@x.com/personalidad").status_code == 402
