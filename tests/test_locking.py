"""
Tests de bloqueo de filas en reservas e inventario (Store simulado con Mock).
Verifican qué fila se bloquea, que sea dentro de la transacción y antes de leer
las reservas superpuestas o el stock.
"""
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from contextlib import contextmanager
from datetime import datetime
from decimal import Decimal
from unittest.mock import Mock

from models import Guest, Product, Reservation, ReservationStatus, Room, Sale, Supplier
from schemas.reservations import ReservationCreate, ReservationUpdate
from schemas.restaurant import PurchaseCreate, SaleCreate
from services.booking import ReservationService
from services.inventory import InventoryLedger


class _RegistroStore:
    """Mock de Store que anota cada acceso y si ocurrió dentro de atomic()"""

    def __init__(self, entidades):
        self.eventos = []
        self.en_transaccion = False
        self.store = Mock()
        self.store.ctx = Mock(user_id=1, email="dueno@hotel.com")
        self.store.atomic.side_effect = self._atomic
        self.store.get.side_effect = self._get
        self.store.get_in_hotel.side_effect = self._get_in_hotel
        self.store.list_reservations_for_room.side_effect = self._listar
        self.store.create.side_effect = self._create
        self.entidades = entidades

    @contextmanager
    def _atomic(self):
        self.en_transaccion = True
        try:
            yield self.store
        finally:
            self.en_transaccion = False

    def _get(self, model, entity_id, lock=False):
        self.eventos.append(("get", model, lock, self.en_transaccion))
        return self.entidades[model]

    def _get_in_hotel(self, model, entity_id, hotel_id, lock=False):
        self.eventos.append(("get_in_hotel", model, lock, self.en_transaccion))
        return self.entidades[model]

    def _listar(self, room_id, check_in, check_out, exclude_id=None):
        self.eventos.append(("listar", Reservation, False, self.en_transaccion))
        return []

    def _create(self, model, **fields):
        self.eventos.append(("create", model, False, self.en_transaccion))
        return Mock(id=99, **fields)

    def indice(self, accion, model):
        return next(i for i, e in enumerate(self.eventos) if e[0] == accion and e[1] == model)


D1 = datetime(2025, 7, 1, 14)
D3 = datetime(2025, 7, 3, 11)


def _reserva_existente(status=ReservationStatus.PENDING):
    return Mock(id=5, hotel_id=1, room_id=7, guest_id=3, check_in=D1, check_out=D3, status=status)


class TestBloqueoReservas:

    def test_crear_bloquea_habitacion_antes_de_buscar_superposiciones(self):
        registro = _RegistroStore({Room: Mock(id=7), Guest: Mock(id=3)})
        datos = ReservationCreate(room_id=7, guest_id=3, check_in=D1, check_out=D3, total_amount=Decimal("100"))

        ReservationService(registro.store).create(1, datos)

        bloqueo = registro.eventos[registro.indice("get_in_hotel", Room)]
        assert bloqueo == ("get_in_hotel", Room, True, True)
        assert registro.indice("get_in_hotel", Room) < registro.indice("listar", Reservation)
        assert registro.indice("listar", Reservation) < registro.indice("create", Reservation)
        assert all(en_tx for accion, _, _, en_tx in registro.eventos)

    def test_cambio_de_estado_bloquea_la_reserva(self):
        registro = _RegistroStore({Reservation: _reserva_existente(), Room: Mock(id=7)})

        ReservationService(registro.store).update(5, ReservationUpdate(status="cancelled"))

        assert registro.eventos[0] == ("get", Reservation, True, True)

    def test_confirmar_bloquea_habitacion_y_revalida(self):
        registro = _RegistroStore({Reservation: _reserva_existente(), Room: Mock(id=7)})

        ReservationService(registro.store).update(5, ReservationUpdate(status="confirmed"))

        assert ("get_in_hotel", Room, True, True) in registro.eventos
        assert registro.indice("get_in_hotel", Room) < registro.indice("listar", Reservation)

    def test_mover_fechas_bloquea_habitacion_antes_de_buscar(self):
        registro = _RegistroStore({Reservation: _reserva_existente(), Room: Mock(id=7)})

        ReservationService(registro.store).update(5, ReservationUpdate(check_out=datetime(2025, 7, 4, 11)))

        assert registro.eventos[0] == ("get", Reservation, True, True)
        assert registro.eventos[registro.indice("get_in_hotel", Room)] == ("get_in_hotel", Room, True, True)
        assert registro.indice("get_in_hotel", Room) < registro.indice("listar", Reservation)


class TestBloqueoInventario:

    def _producto(self):
        return Mock(
            id=3, current_stock=Decimal("5"), unit_price=Decimal("150.00"), alert_threshold=Decimal("1")
        )

    def test_venta_bloquea_producto_dentro_de_la_transaccion(self):
        producto = self._producto()
        registro = _RegistroStore({Product: producto})
        datos = SaleCreate(product_id=3, quantity=Decimal("3"), payment_method="cash")

        InventoryLedger(registro.store, allow_negative_stock=False).record_sale(1, datos)

        assert registro.eventos[0] == ("get_in_hotel", Product, True, True)
        assert registro.indice("get_in_hotel", Product) < registro.indice("create", Sale)
        assert producto.current_stock == Decimal("2")

    def test_compra_bloquea_producto_dentro_de_la_transaccion(self):
        producto = self._producto()
        registro = _RegistroStore({Product: producto, Supplier: Mock(id=4)})
        datos = PurchaseCreate(product_id=3, supplier_id=4, quantity=Decimal("10"), unit_cost=Decimal("90.00"))

        InventoryLedger(registro.store).record_purchase(1, datos)

        assert registro.eventos[0] == ("get_in_hotel", Product, True, True)
        assert all(en_tx for accion, _, _, en_tx in registro.eventos)
        assert producto.current_stock == Decimal("15")

