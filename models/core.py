from sqlalchemy import (
    Column,
    Integer,
    String,
    DateTime,
    ForeignKey,
    Text,
    UniqueConstraint,
    Index,
    Numeric,
    CheckConstraint,
    Enum,
)
from sqlalchemy.orm import relationship
from config import DEFAULT_CURRENCY
from database.conexion import Base
from utils.timezone import utcnow
import enum


# ============================================================================
# ENUMS
# ============================================================================

class HotelPlan(str, enum.Enum):
    TRIAL = "trial"
    BASIC = "basic"
    PRO = "pro"
    ENTERPRISE = "enterprise"


class HotelStatus(str, enum.Enum):
    ACTIVE = "active"
    SUSPENDED = "suspended"
    TRIAL = "trial"


class UserRole(str, enum.Enum):
    SUPER_ADMIN = "super_admin"
    OWNER = "owner"
    RECEPTIONIST = "receptionist"
    HOUSEKEEPING = "housekeeping"
    CHEF = "chef"
    SERVER = "server"
    ACCOUNTANT = "accountant"


class RoomStatus(str, enum.Enum):
    AVAILABLE = "available"
    OCCUPIED = "occupied"
    CLEANING = "cleaning"
    MAINTENANCE = "maintenance"


class ReservationStatus(str, enum.Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CHECKED_IN = "checked_in"
    CHECKED_OUT = "checked_out"
    CANCELLED = "cancelled"


class PaymentStatus(str, enum.Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"
    REFUNDED = "refunded"


class PaymentMethod(str, enum.Enum):
    CASH = "cash"
    CARD = "card"
    TRANSFER = "transfer"
    ROOM_CHARGE = "room_charge"


def enum_column(enum_cls, name: str) -> Enum:
    """Guarda el valor ("pending") y no el nombre del miembro ("PENDING")"""
    return Enum(enum_cls, name=name, values_callable=lambda obj: [e.value for e in obj])


# ============================================================================
# TENANT
# ============================================================================

class Hotel(Base):
    """Tenant SaaS - cada hotel y todos sus datos"""
    __tablename__ = "hotels"
    __table_args__ = (
        UniqueConstraint("email", name="uq_hotel_email"),
        Index("idx_hotel_status", "status"),
    )

    id = Column(Integer, primary_key=True)
    name = Column(String(150), nullable=False)
    address = Column(Text, nullable=True)
    phone = Column(String(20), nullable=True)
    email = Column(String(150), nullable=False)
    plan = Column(enum_column(HotelPlan, "hotel_plan"), default=HotelPlan.TRIAL, nullable=False)
    currency = Column(String(3), default=DEFAULT_CURRENCY, nullable=False)
    status = Column(enum_column(HotelStatus, "hotel_status"), default=HotelStatus.TRIAL, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    # La base de datos borra en cascada; el ORM no carga hijos al borrar
    users = relationship("User", back_populates="hotel", passive_deletes=True)
    rooms = relationship("Room", back_populates="hotel", passive_deletes=True)
    guests = relationship("Guest", back_populates="hotel", passive_deletes=True)
    reservations = relationship("Reservation", back_populates="hotel", passive_deletes=True)
    products = relationship("Product", back_populates="hotel", passive_deletes=True)

    def __repr__(self):
        return f"<Hotel(id={self.id}, name='{self.name}', plan='{self.plan}')>"


# ============================================================================
# HABITACIONES / HUÉSPEDES / RESERVAS
# ============================================================================

class Room(Base):
    __tablename__ = "rooms"
    __table_args__ = (
        UniqueConstraint("hotel_id", "room_number", name="uq_room_hotel_numero"),
        CheckConstraint("price_per_night >= 0", name="ck_room_price_non_negative"),
        CheckConstraint("capacity > 0", name="ck_room_capacity_positive"),
        Index("idx_room_hotel", "hotel_id"),
        Index("idx_room_status", "status"),
    )

    id = Column(Integer, primary_key=True)
    hotel_id = Column(Integer, ForeignKey("hotels.id", ondelete="CASCADE"), nullable=False)
    room_number = Column(String(20), nullable=False)
    type = Column(String(50), nullable=False)  # Single, Double, Suite...
    price_per_night = Column(Numeric(10, 2), nullable=False)
    capacity = Column(Integer, nullable=False)
    status = Column(enum_column(RoomStatus, "room_status"), default=RoomStatus.AVAILABLE, nullable=False)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    hotel = relationship("Hotel", back_populates="rooms")
    # RESTRICT en la base: no se borra una habitación con reservas
    reservations = relationship("Reservation", back_populates="room", passive_deletes="all")


class Guest(Base):
    __tablename__ = "guests"
    __table_args__ = (
        Index("idx_guest_hotel", "hotel_id"),
        Index("idx_guest_email", "email"),
    )

    id = Column(Integer, primary_key=True)
    hotel_id = Column(Integer, ForeignKey("hotels.id", ondelete="CASCADE"), nullable=False)
    name = Column(String(150), nullable=False)
    phone = Column(String(20), nullable=True)
    email = Column(String(150), nullable=True)
    id_card = Column(String(60), nullable=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    hotel = relationship("Hotel", back_populates="guests")
    reservations = relationship("Reservation", back_populates="guest", passive_deletes="all")


class Reservation(Base):
    __tablename__ = "reservations"
    __table_args__ = (
        CheckConstraint("check_in < check_out", name="ck_reservation_range"),
        CheckConstraint("total_amount >= 0", name="ck_reservation_total_non_negative"),
        Index("idx_res_room_fechas", "room_id", "check_in", "check_out"),
        Index("idx_res_status", "status"),
        Index("idx_res_hotel", "hotel_id"),
    )

    id = Column(Integer, primary_key=True)
    hotel_id = Column(Integer, ForeignKey("hotels.id", ondelete="CASCADE"), nullable=False)
    room_id = Column(Integer, ForeignKey("rooms.id", ondelete="RESTRICT"), nullable=False)
    guest_id = Column(Integer, ForeignKey("guests.id", ondelete="RESTRICT"), nullable=False)

    check_in = Column(DateTime, nullable=False)
    check_out = Column(DateTime, nullable=False)

    status = Column(
        enum_column(ReservationStatus, "reservation_status"),
        default=ReservationStatus.PENDING,
        nullable=False,
    )
    total_amount = Column(Numeric(10, 2), nullable=False)
    payment_status = Column(
        enum_column(PaymentStatus, "payment_status"),
        default=PaymentStatus.PENDING,
        nullable=False,
    )
    created_by = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    hotel = relationship("Hotel", back_populates="reservations")
    room = relationship("Room", back_populates="reservations")
    guest = relationship("Guest", back_populates="reservations")


# ============================================================================
# PAGOS / FACTURAS
# ============================================================================

class Payment(Base):
    __tablename__ = "payments"
    __table_args__ = (
        CheckConstraint("amount >= 0", name="ck_payment_amount_non_negative"),
        Index("idx_payment_hotel", "hotel_id"),
        Index("idx_payment_status", "status"),
    )

    id = Column(Integer, primary_key=True)
    hotel_id = Column(Integer, ForeignKey("hotels.id", ondelete="CASCADE"), nullable=False)
    reservation_id = Column(Integer, ForeignKey("reservations.id", ondelete="SET NULL"), nullable=True)
    amount = Column(Numeric(10, 2), nullable=False)
    currency = Column(String(3), default=DEFAULT_CURRENCY, nullable=False)
    method = Column(enum_column(PaymentMethod, "payment_method"), nullable=False)
    status = Column(enum_column(PaymentStatus, "payment_status"), default=PaymentStatus.PENDING, nullable=False)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)


class Invoice(Base):
    __tablename__ = "invoices"
    __table_args__ = (
        UniqueConstraint("invoice_number", name="uq_invoice_number"),
        Index("idx_invoice_hotel", "hotel_id"),
    )

    id = Column(Integer, primary_key=True)
    hotel_id = Column(Integer, ForeignKey("hotels.id", ondelete="CASCADE"), nullable=False)
    payment_id = Column(Integer, ForeignKey("payments.id", ondelete="SET NULL"), nullable=True)
    invoice_number = Column(String(40), nullable=False)
    pdf_url = Column(Text, nullable=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)
