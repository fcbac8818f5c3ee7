"""
Endpoints de pagos y facturas
"""
import uuid
from typing import List

from fastapi import APIRouter, Depends, Path, status

from models import Hotel, Invoice, Payment, Reservation
from schemas.billing import InvoiceCreate, InvoiceRead, PaymentCreate, PaymentRead, PaymentUpdate
from services.store import Store
from utils.dependencies import FINANCE, get_store, require_roles
from utils.logging_utils import log_event
from utils.timezone import utcnow


router = APIRouter(prefix="/api", tags=["Facturación"])


def generar_numero_factura() -> str:
    """INV-<timestamp>-<sufijo aleatorio>; la unicidad la asegura uq_invoice_number"""
    return f"INV-{utcnow().strftime('%Y%m%d%H%M%S')}-{uuid.uuid4().hex[:6].upper()}"


# ========== PAGOS ==========

@router.get("/hotels/{hotel_id}/payments", response_model=List[PaymentRead])
def listar_pagos(hotel_id: int = Path(..., gt=0), store: Store = Depends(require_roles(FINANCE))):
    return store.list_by_hotel(Payment, hotel_id)


@router.post("/hotels/{hotel_id}/payments", response_model=PaymentRead, status_code=status.HTTP_201_CREATED)
def registrar_pago(
    datos: PaymentCreate,
    hotel_id: int = Path(..., gt=0),
    store: Store = Depends(require_roles(FINANCE)),
):
    store.check_hotel(hotel_id)
    if datos.reservation_id is not None:
        store.get_in_hotel(Reservation, datos.reservation_id, hotel_id)

    campos = datos.model_dump()
    if not campos.get("currency"):
        campos["currency"] = store.get(Hotel, hotel_id).currency

    pago = store.create(Payment, hotel_id=hotel_id, **campos)
    log_event(
        "pagos", store.ctx.email, "Registrar pago",
        f"id={pago.id} monto={pago.amount} {pago.currency} metodo={pago.method.value}",
    )
    return pago


@router.get("/payments/{payment_id}", response_model=PaymentRead)
def obtener_pago(payment_id: int = Path(..., gt=0), store: Store = Depends(require_roles(FINANCE))):
    return store.get(Payment, payment_id)


@router.patch("/payments/{payment_id}", response_model=PaymentRead)
def actualizar_pago(
    datos: PaymentUpdate,
    payment_id: int = Path(..., gt=0),
    store: Store = Depends(require_roles(FINANCE)),
):
    pago = store.update(Payment, payment_id, datos)
    log_event("pagos", store.ctx.email, "Actualizar pago", f"id={payment_id} campos={sorted(datos.changes())}")
    return pago


# ========== FACTURAS ==========

@router.get("/hotels/{hotel_id}/invoices", response_model=List[InvoiceRead])
def listar_facturas(hotel_id: int = Path(..., gt=0), store: Store = Depends(require_roles(FINANCE))):
    return store.list_by_hotel(Invoice, hotel_id)


@router.post("/hotels/{hotel_id}/invoices", response_model=InvoiceRead, status_code=status.HTTP_201_CREATED)
def emitir_factura(
    datos: InvoiceCreate,
    hotel_id: int = Path(..., gt=0),
    store: Store = Depends(require_roles(FINANCE)),
):
    store.check_hotel(hotel_id)
    if datos.payment_id is not None:
        store.get_in_hotel(Payment, datos.payment_id, hotel_id)

    factura = store.create(
        Invoice,
        hotel_id=hotel_id,
        payment_id=datos.payment_id,
        invoice_number=generar_numero_factura(),
        pdf_url=datos.pdf_url,
    )
    log_event("facturas", store.ctx.email, "Emitir factura", f"id={factura.id} numero={factura.invoice_number}")
    return factura


@router.get("/invoices/{invoice_id}", response_model=InvoiceRead)
def obtener_factura(invoice_id: int = Path(..., gt=0), store: Store = Depends(get_store)):
    return store.get(Invoice, invoice_id)
