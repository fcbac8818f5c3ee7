"""
Endpoints del restaurante: productos, ventas, compras y proveedores.

Ventas y compras mueven el stock a través de InventoryLedger.
"""
from typing import List

from fastapi import APIRouter, Depends, Path, Response, status

from models import Product, Purchase, Sale, Supplier
from schemas.restaurant import (
    ProductCreate, ProductRead, ProductUpdate,
    PurchaseCreate, PurchaseRead,
    SaleCreate, SaleRead,
    SupplierCreate, SupplierRead, SupplierUpdate,
)
from services.inventory import InventoryLedger
from services.store import Store
from utils.dependencies import RESTAURANT, STOCK_MANAGERS, get_store, require_roles
from utils.logging_utils import log_event


router = APIRouter(prefix="/api", tags=["Restaurante"])


# ========== PRODUCTOS ==========

@router.get("/hotels/{hotel_id}/products", response_model=List[ProductRead])
def listar_productos(hotel_id: int = Path(..., gt=0), store: Store = Depends(get_store)):
    return store.list_by_hotel(Product, hotel_id)


@router.get("/hotels/{hotel_id}/products/low-stock", response_model=List[ProductRead])
def productos_stock_bajo(hotel_id: int = Path(..., gt=0), store: Store = Depends(get_store)):
    return InventoryLedger(store).list_low_stock(hotel_id)


@router.post("/hotels/{hotel_id}/products", response_model=ProductRead, status_code=status.HTTP_201_CREATED)
def crear_producto(
    datos: ProductCreate,
    hotel_id: int = Path(..., gt=0),
    store: Store = Depends(require_roles(RESTAURANT)),
):
    producto = store.create(Product, hotel_id=hotel_id, **datos.model_dump())
    log_event("inventario", store.ctx.email, "Crear producto", f"id={producto.id} stock={producto.current_stock}")
    return producto


@router.get("/products/{product_id}", response_model=ProductRead)
def obtener_producto(product_id: int = Path(..., gt=0), store: Store = Depends(get_store)):
    return store.get(Product, product_id)


@router.patch("/products/{product_id}", response_model=ProductRead)
def actualizar_producto(
    datos: ProductUpdate,
    product_id: int = Path(..., gt=0),
    store: Store = Depends(require_roles(RESTAURANT)),
):
    producto = store.update(Product, product_id, datos)
    log_event("inventario", store.ctx.email, "Actualizar producto", f"id={product_id} campos={sorted(datos.changes())}")
    return producto


@router.delete("/products/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
def eliminar_producto(product_id: int = Path(..., gt=0), store: Store = Depends(require_roles(RESTAURANT))):
    store.delete(Product, product_id)
    log_event("inventario", store.ctx.email, "Eliminar producto", f"id={product_id}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ========== VENTAS ==========

@router.get("/hotels/{hotel_id}/sales", response_model=List[SaleRead])
def listar_ventas(hotel_id: int = Path(..., gt=0), store: Store = Depends(get_store)):
    return store.list_by_hotel(Sale, hotel_id)


@router.post("/hotels/{hotel_id}/sales", response_model=SaleRead, status_code=status.HTTP_201_CREATED)
def registrar_venta(
    datos: SaleCreate,
    hotel_id: int = Path(..., gt=0),
    store: Store = Depends(require_roles(RESTAURANT)),
):
    return InventoryLedger(store).record_sale(hotel_id, datos)


@router.get("/employees/{employee_id}/sales", response_model=List[SaleRead])
def ventas_por_empleado(employee_id: int = Path(..., gt=0), store: Store = Depends(get_store)):
    return store.list_where(Sale, Sale.employee_id == employee_id)


# ========== COMPRAS ==========

@router.get("/hotels/{hotel_id}/purchases", response_model=List[PurchaseRead])
def listar_compras(hotel_id: int = Path(..., gt=0), store: Store = Depends(require_roles(STOCK_MANAGERS))):
    return store.list_by_hotel(Purchase, hotel_id)


@router.post("/hotels/{hotel_id}/purchases", response_model=PurchaseRead, status_code=status.HTTP_201_CREATED)
def registrar_compra(
    datos: PurchaseCreate,
    hotel_id: int = Path(..., gt=0),
    store: Store = Depends(require_roles(STOCK_MANAGERS)),
):
    return InventoryLedger(store).record_purchase(hotel_id, datos)


# ========== PROVEEDORES ==========

@router.get("/hotels/{hotel_id}/suppliers", response_model=List[SupplierRead])
def listar_proveedores(hotel_id: int = Path(..., gt=0), store: Store = Depends(require_roles(STOCK_MANAGERS))):
    return store.list_by_hotel(Supplier, hotel_id)


@router.post("/hotels/{hotel_id}/suppliers", response_model=SupplierRead, status_code=status.HTTP_201_CREATED)
def crear_proveedor(
    datos: SupplierCreate,
    hotel_id: int = Path(..., gt=0),
    store: Store = Depends(require_roles(STOCK_MANAGERS)),
):
    proveedor = store.create(Supplier, hotel_id=hotel_id, **datos.model_dump())
    log_event("inventario", store.ctx.email, "Crear proveedor", f"id={proveedor.id}")
    return proveedor


@router.patch("/suppliers/{supplier_id}", response_model=SupplierRead)
def actualizar_proveedor(
    datos: SupplierUpdate,
    supplier_id: int = Path(..., gt=0),
    store: Store = Depends(require_roles(STOCK_MANAGERS)),
):
    proveedor = store.update(Supplier, supplier_id, datos)
    log_event("inventario", store.ctx.email, "Actualizar proveedor", f"id={supplier_id}")
    return proveedor
