"""
Inventario del restaurante: productos, ventas, compras y proveedores
"""
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Text, Index, Numeric, CheckConstraint
from sqlalchemy.orm import relationship
from database.conexion import Base
from utils.timezone import utcnow
from .core import PaymentMethod, enum_column


class Product(Base):
    __tablename__ = "products"
    __table_args__ = (
        CheckConstraint("unit_price >= 0", name="ck_product_price_non_negative"),
        Index("idx_product_hotel", "hotel_id"),
        Index("idx_product_category", "category"),
    )

    id = Column(Integer, primary_key=True)
    hotel_id = Column(Integer, ForeignKey("hotels.id", ondelete="CASCADE"), nullable=False)
    name = Column(String(150), nullable=False)
    category = Column(String(60), nullable=False)
    unit_price = Column(Numeric(10, 2), nullable=False)
    current_stock = Column(Numeric(10, 2), default=0, nullable=False)
    alert_threshold = Column(Numeric(10, 2), default=10, nullable=False)
    unit = Column(String(30), nullable=False)  # kg, litros, botellas...
    created_at = Column(DateTime, default=utcnow, nullable=False)

    hotel = relationship("Hotel", back_populates="products")
    # RESTRICT en la base: no se borra un producto con movimientos
    sales = relationship("Sale", back_populates="product", passive_deletes="all")
    purchases = relationship("Purchase", back_populates="product", passive_deletes="all")


class Supplier(Base):
    __tablename__ = "suppliers"
    __table_args__ = (Index("idx_supplier_hotel", "hotel_id"),)

    id = Column(Integer, primary_key=True)
    hotel_id = Column(Integer, ForeignKey("hotels.id", ondelete="CASCADE"), nullable=False)
    name = Column(String(150), nullable=False)
    contact = Column(String(20), nullable=True)
    address = Column(Text, nullable=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    purchases = relationship("Purchase", back_populates="supplier", passive_deletes=True)


class Sale(Base):
    __tablename__ = "sales"
    __table_args__ = (
        CheckConstraint("quantity > 0", name="ck_sale_quantity_positive"),
        Index("idx_sale_hotel", "hotel_id"),
        Index("idx_sale_employee", "employee_id"),
    )

    id = Column(Integer, primary_key=True)
    hotel_id = Column(Integer, ForeignKey("hotels.id", ondelete="CASCADE"), nullable=False)
    product_id = Column(Integer, ForeignKey("products.id", ondelete="RESTRICT"), nullable=False)
    employee_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    room_id = Column(Integer, ForeignKey("rooms.id", ondelete="SET NULL"), nullable=True)  # cargo a habitación
    quantity = Column(Numeric(10, 2), nullable=False)
    total = Column(Numeric(10, 2), nullable=False)
    payment_method = Column(enum_column(PaymentMethod, "payment_method"), nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    product = relationship("Product", back_populates="sales")


class Purchase(Base):
    __tablename__ = "purchases"
    __table_args__ = (
        CheckConstraint("quantity > 0", name="ck_purchase_quantity_positive"),
        Index("idx_purchase_hotel", "hotel_id"),
    )

    id = Column(Integer, primary_key=True)
    hotel_id = Column(Integer, ForeignKey("hotels.id", ondelete="CASCADE"), nullable=False)
    supplier_id = Column(Integer, ForeignKey("suppliers.id", ondelete="SET NULL"), nullable=True)
    product_id = Column(Integer, ForeignKey("products.id", ondelete="RESTRICT"), nullable=False)
    quantity = Column(Numeric(10, 2), nullable=False)
    unit_cost = Column(Numeric(10, 2), nullable=False)
    total = Column(Numeric(10, 2), nullable=False)
    purchase_date = Column(DateTime, default=utcnow, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    product = relationship("Product", back_populates="purchases")
    supplier = relationship("Supplier", back_populates="purchases")
