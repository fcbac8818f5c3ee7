"""
Tests de endpoints de habitaciones y reservas:
doble reserva, rangos inválidos, estados y disponibilidad
"""
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))


def _reservar(client, owner, room, guest, check_in, check_out, **extra):
    payload = {
        "room_id": room["id"],
        "guest_id": guest["id"],
        "check_in": check_in,
        "check_out": check_out,
        "total_amount": "3000.00",
    }
    payload.update(extra)
    return client.post(
        f"/api/hotels/{owner['hotel_id']}/reservations", json=payload, headers=owner["headers"]
    )


class TestCrearReserva:

    def test_reserva_exitosa(self, client, owner, room, guest):
        resp = _reservar(client, owner, room, guest, "2025-07-01T14:00:00", "2025-07-03T11:00:00")
        assert resp.status_code == 201, resp.text
        data = resp.json()
        assert data["status"] == "pending"
        assert data["hotel_id"] == owner["hotel_id"]
        assert data["created_by"] == owner["user_id"]

    def test_doble_reserva_rechazada(self, client, owner, room, guest):
        primera = _reservar(client, owner, room, guest, "2025-07-01T14:00:00", "2025-07-05T11:00:00")
        assert primera.status_code == 201
        resp = _reservar(client, owner, room, guest, "2025-07-03T14:00:00", "2025-07-06T11:00:00")
        assert resp.status_code == 409
        assert resp.json()["code"] == "conflict"
        assert f"#{primera.json()['id']}" in resp.json()["detail"]

    def test_reservas_contiguas_permitidas(self, client, owner, room, guest):
        assert _reservar(client, owner, room, guest, "2025-07-01T14:00:00", "2025-07-03T11:00:00").status_code == 201
        resp = _reservar(client, owner, room, guest, "2025-07-03T11:00:00", "2025-07-05T11:00:00")
        assert resp.status_code == 201, resp.text

    def test_reserva_cancelada_libera_habitacion(self, client, owner, room, guest):
        primera = _reservar(client, owner, room, guest, "2025-07-01T14:00:00", "2025-07-05T11:00:00").json()
        cancelar = client.patch(
            f"/api/reservations/{primera['id']}", json={"status": "cancelled"}, headers=owner["headers"]
        )
        assert cancelar.status_code == 200
        resp = _reservar(client, owner, room, guest, "2025-07-02T14:00:00", "2025-07-04T11:00:00")
        assert resp.status_code == 201, resp.text

    def test_fechas_con_zona_horaria(self, client, owner, room, guest):
        # 2025-07-03T08:00-03:00 == 11:00 UTC: contigua con la anterior
        assert _reservar(client, owner, room, guest, "2025-07-01T14:00:00Z", "2025-07-03T11:00:00Z").status_code == 201
        resp = _reservar(client, owner, room, guest, "2025-07-03T08:00:00-03:00", "2025-07-04T08:00:00-03:00")
        assert resp.status_code == 201, resp.text
        assert resp.json()["check_in"].startswith("2025-07-03T11:00:00")

    def test_rango_invalido(self, client, owner, room, guest):
        resp = _reservar(client, owner, room, guest, "2025-07-03T11:00:00", "2025-07-03T11:00:00")
        assert resp.status_code == 400
        assert resp.json()["code"] == "invalid_range"

    def test_rango_invalido_se_valida_antes_que_la_habitacion(self, client, owner, guest):
        resp = _reservar(client, owner, {"id": 9999}, guest, "2025-07-05T11:00:00", "2025-07-01T11:00:00")
        assert resp.status_code == 400
        assert resp.json()["code"] == "invalid_range"

    def test_habitacion_inexistente(self, client, owner, guest):
        resp = _reservar(client, owner, {"id": 9999}, guest, "2025-07-01T14:00:00", "2025-07-03T11:00:00")
        assert resp.status_code == 404

    def test_estado_inicial_invalido(self, client, owner, room, guest):
        resp = _reservar(
            client, owner, room, guest, "2025-07-01T14:00:00", "2025-07-03T11:00:00", status="checked_out"
        )
        assert resp.status_code == 400
        assert resp.json()["detail"] == "Error de validación"


class TestActualizarReserva:

    def test_flujo_completo_de_estados(self, client, owner, room, guest):
        reserva = _reservar(client, owner, room, guest, "2025-07-01T14:00:00", "2025-07-03T11:00:00").json()
        for estado in ("confirmed", "checked_in", "checked_out"):
            resp = client.patch(
                f"/api/reservations/{reserva['id']}", json={"status": estado}, headers=owner["headers"]
            )
            assert resp.status_code == 200, resp.text
            assert resp.json()["status"] == estado

    def test_transicion_invalida(self, client, owner, room, guest):
        reserva = _reservar(client, owner, room, guest, "2025-07-01T14:00:00", "2025-07-03T11:00:00").json()
        resp = client.patch(
            f"/api/reservations/{reserva['id']}", json={"status": "checked_out"}, headers=owner["headers"]
        )
        assert resp.status_code == 409
        assert resp.json()["code"] == "invalid_transition"

    def test_mover_fechas_sobre_otra_reserva(self, client, owner, room, guest):
        _reservar(client, owner, room, guest, "2025-07-10T14:00:00", "2025-07-12T11:00:00")
        segunda = _reservar(client, owner, room, guest, "2025-07-01T14:00:00", "2025-07-03T11:00:00").json()
        resp = client.patch(
            f"/api/reservations/{segunda['id']}",
            json={"check_out": "2025-07-11T11:00:00"},
            headers=owner["headers"],
        )
        assert resp.status_code == 409

    def test_mover_fechas_sin_choque_con_si_misma(self, client, owner, room, guest):
        reserva = _reservar(client, owner, room, guest, "2025-07-01T14:00:00", "2025-07-03T11:00:00").json()
        resp = client.patch(
            f"/api/reservations/{reserva['id']}",
            json={"check_out": "2025-07-04T11:00:00"},
            headers=owner["headers"],
        )
        assert resp.status_code == 200, resp.text
        assert resp.json()["check_out"].startswith("2025-07-04T11:00:00")

    def test_patch_vacio(self, client, owner, room, guest):
        reserva = _reservar(client, owner, room, guest, "2025-07-01T14:00:00", "2025-07-03T11:00:00").json()
        resp = client.patch(f"/api/reservations/{reserva['id']}", json={}, headers=owner["headers"])
        assert resp.status_code == 400

    def test_eliminar_reserva(self, client, owner, room, guest):
        reserva = _reservar(client, owner, room, guest, "2025-07-01T14:00:00", "2025-07-03T11:00:00").json()
        resp = client.delete(f"/api/reservations/{reserva['id']}", headers=owner["headers"])
        assert resp.status_code == 204
        assert client.get(f"/api/reservations/{reserva['id']}", headers=owner["headers"]).status_code == 404


class TestDisponibilidad:

    def test_disponibilidad_y_lecturas_idempotentes(self, client, owner, room, guest):
        reserva = _reservar(client, owner, room, guest, "2025-07-01T14:00:00", "2025-07-05T11:00:00").json()
        url = f"/api/hotels/{owner['hotel_id']}/rooms/{room['id']}/availability"
        params = {"check_in": "2025-07-02T14:00:00Z", "check_out": "2025-07-03T11:00:00Z"}

        primera = client.get(url, params=params, headers=owner["headers"])
        segunda = client.get(url, params=params, headers=owner["headers"])
        assert primera.status_code == 200
        assert primera.json() == segunda.json()
        assert primera.json()["available"] is False
        assert primera.json()["conflicting_reservation_id"] == reserva["id"]

        libre = client.get(
            url, params={"check_in": "2025-07-05T11:00:00", "check_out": "2025-07-06T11:00:00"},
            headers=owner["headers"],
        )
        assert libre.json()["available"] is True
        assert libre.json()["conflicting_reservation_id"] is None

    def test_fecha_invalida(self, client, owner, room):
        resp = client.get(
            f"/api/hotels/{owner['hotel_id']}/rooms/{room['id']}/availability",
            params={"check_in": "no-es-fecha", "check_out": "2025-07-06"},
            headers=owner["headers"],
        )
        assert resp.status_code == 400


class TestHabitaciones:

    def test_numero_duplicado(self, client, owner, room):
        resp = client.post(
            f"/api/hotels/{owner['hotel_id']}/rooms",
            json={"room_number": "101", "type": "Single", "price_per_night": "900.00", "capacity": 1},
            headers=owner["headers"],
        )
        assert resp.status_code == 409

    def test_no_se_elimina_habitacion_con_reservas(self, client, owner, room, guest):
        _reservar(client, owner, room, guest, "2025-07-01T14:00:00", "2025-07-03T11:00:00")
        resp = client.delete(f"/api/rooms/{room['id']}", headers=owner["headers"])
        assert resp.status_code == 409
        assert client.get(f"/api/rooms/{room['id']}", headers=owner["headers"]).status_code == 200

    def test_eliminar_habitacion_libre(self, client, owner, room):
        resp = client.delete(f"/api/rooms/{room['id']}", headers=owner["headers"])
        assert resp.status_code == 204
        assert client.get(f"/api/rooms/{room['id']}", headers=owner["headers"]).status_code == 404

    def test_validacion_de_campos(self, client, owner):
        resp = client.post(
            f"/api/hotels/{owner['hotel_id']}/rooms",
            json={"room_number": "102", "price_per_night": "-5", "capacity": 0},
            headers=owner["headers"],
        )
        assert resp.status_code == 400
        body = resp.json()
        assert body["detail"] == "Error de validación"
        campos = {tuple(err["loc"])[-1] for err in body["errors"]}
        assert {"type", "price_per_night", "capacity"} <= campos
