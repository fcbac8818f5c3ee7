"""
Tests de las reglas de reservas (funciones puras de services/booking.py)
"""
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest
from datetime import datetime
from unittest.mock import Mock

from models import ReservationStatus
from services.booking import (
    check_transition,
    find_conflict,
    overlaps,
    validate_booking,
    validate_range,
)
from utils.exceptions import Conflict, InvalidRange, InvalidTransition


def _reserva(id, check_in, check_out, status=ReservationStatus.CONFIRMED):
    r = Mock()
    r.id = id
    r.check_in = check_in
    r.check_out = check_out
    r.status = status
    return r


D1 = datetime(2025, 1, 1, 14)
D3 = datetime(2025, 1, 3, 11)
D5 = datetime(2025, 1, 5, 11)


class TestValidateRange:

    def test_rango_valido(self):
        validate_range(D1, D3)

    def test_check_out_igual_a_check_in(self):
        with pytest.raises(InvalidRange):
            validate_range(D3, D3)

    def test_check_out_anterior(self):
        with pytest.raises(InvalidRange):
            validate_range(D5, D1)

    def test_fechas_faltantes(self):
        with pytest.raises(InvalidRange):
            validate_range(None, D3)


class TestOverlaps:

    def test_superposicion_parcial(self):
        assert overlaps(D1, D5, D3, datetime(2025, 1, 7))

    def test_contiguas_no_se_superponen(self):
        # checkout y checkin el mismo instante
        assert not overlaps(D1, D3, D3, D5)
        assert not overlaps(D3, D5, D1, D3)

    def test_contenida(self):
        assert overlaps(D1, D5, D3, datetime(2025, 1, 4))


class TestValidateBooking:

    def test_habitacion_libre(self):
        validate_booking(7, D1, D3, [])

    def test_choque_con_reserva_confirmada(self):
        existentes = [_reserva(42, D1, D5)]
        with pytest.raises(Conflict) as exc:
            validate_booking(7, D3, datetime(2025, 1, 6), existentes)
        assert "#42" in exc.value.message
        assert "7" in exc.value.message

    def test_reserva_cancelada_no_bloquea(self):
        existentes = [_reserva(42, D1, D5, ReservationStatus.CANCELLED)]
        validate_booking(7, D1, D5, existentes)

    def test_reserva_con_checkout_no_bloquea(self):
        existentes = [_reserva(42, D1, D5, ReservationStatus.CHECKED_OUT)]
        assert find_conflict(D1, D5, existentes) is None

    def test_pendiente_y_checked_in_bloquean(self):
        for estado in (ReservationStatus.PENDING, ReservationStatus.CHECKED_IN):
            existentes = [_reserva(1, D1, D5, estado)]
            assert find_conflict(D3, datetime(2025, 1, 6), existentes).id == 1

    def test_rango_invalido_antes_que_conflicto(self):
        existentes = [_reserva(42, D1, D5)]
        with pytest.raises(InvalidRange):
            validate_booking(7, D5, D1, existentes)

    def test_estado_como_string(self):
        # El estado puede llegar como valor crudo de la base
        existentes = [_reserva(9, D1, D5, "cancelled")]
        assert find_conflict(D1, D5, existentes) is None


class TestTransiciones:

    @pytest.mark.parametrize("actual,nuevo", [
        ("pending", "confirmed"),
        ("pending", "cancelled"),
        ("confirmed", "checked_in"),
        ("confirmed", "cancelled"),
        ("checked_in", "checked_out"),
        ("confirmed", "confirmed"),
    ])
    def test_transiciones_permitidas(self, actual, nuevo):
        check_transition(actual, nuevo)

    @pytest.mark.parametrize("actual,nuevo", [
        ("pending", "checked_in"),
        ("pending", "checked_out"),
        ("checked_in", "cancelled"),
        ("checked_out", "checked_in"),
        ("cancelled", "confirmed"),
    ])
    def test_transiciones_invalidas(self, actual, nuevo):
        with pytest.raises(InvalidTransition):
            check_transition(actual, nuevo)
