from conftest import auth_headers, make_appointment, make_barber


def test_lists_by_name(client, customer, corte, barba):
    response = client.get("/api/specialties", headers=auth_headers(customer))

    assert response.status_code == 200
    assert [s["name"] for s in response.json()] == ["Barba", "Corte"]


def test_get_missing(client, customer):
    response = client.get("/api/specialties/42", headers=auth_headers(customer))

    assert response.status_code == 404
    assert response.json() == {"error": "Especialidade não encontrada"}


def test_admin_creates(client, admin):
    response = client.post(
        "/api/specialties",
        json={"name": " Sobrancelha ", "description": "Design de sobrancelha"},
        headers=auth_headers(admin),
    )

    assert response.status_code == 201
    assert response.json()["name"] == "Sobrancelha"


def test_duplicate_name(client, admin, corte):
    response = client.post("/api/specialties", json={"name": "Corte"}, headers=auth_headers(admin))

    assert response.status_code == 400
    assert response.json() == {"error": "Especialidade já existe"}


def test_blank_name(client, admin):
    response = client.post("/api/specialties", json={"name": "   "}, headers=auth_headers(admin))

    assert response.status_code == 400
    assert response.json() == {"error": "Nome é obrigatório"}


def test_customer_cannot_create(client, customer):
    response = client.post("/api/specialties", json={"name": "Corte"}, headers=auth_headers(customer))

    assert response.status_code == 403


def test_update(client, admin, corte):
    response = client.put(
        f"/api/specialties/{corte.id}", json={"description": "Tesoura e máquina"}, headers=auth_headers(admin)
    )

    assert response.status_code == 200
    assert response.json() == {"id": corte.id, "name": "Corte", "description": "Tesoura e máquina"}


def test_update_needs_a_field(client, admin, corte):
    response = client.put(f"/api/specialties/{corte.id}", json={}, headers=auth_headers(admin))

    assert response.status_code == 400


def test_update_to_existing_name(client, admin, corte, barba):
    response = client.put(f"/api/specialties/{barba.id}", json={"name": "Corte"}, headers=auth_headers(admin))

    assert response.status_code == 400
    assert response.json() == {"error": "Especialidade já existe"}


def test_delete_unused(client, admin, barba):
    response = client.delete(f"/api/specialties/{barba.id}", headers=auth_headers(admin))

    assert response.status_code == 200
    assert response.json()["specialty"]["name"] == "Barba"


def test_delete_used_by_barber(client, session, admin, corte):
    make_barber(session, "João", specialties=[corte])

    response = client.delete(f"/api/specialties/{corte.id}", headers=auth_headers(admin))

    assert response.status_code == 400


def test_delete_used_in_appointment(client, session, admin, customer, barba):
    barber = make_barber(session, "João")
    make_appointment(session, customer, barber, barba, status="completed")

    response = client.delete(f"/api/specialties/{barba.id}", headers=auth_headers(admin))

    assert response.status_code == 400
    assert "sendo utilizada" in response.json()["error"]
