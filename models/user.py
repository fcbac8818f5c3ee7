"""
Modelo de Usuario para autenticación y autorización
"""
from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey, Index, UniqueConstraint
from sqlalchemy.orm import relationship
from database.conexion import Base
from utils.timezone import utcnow
from .core import UserRole, enum_column


class User(Base):
    """Usuarios del sistema. hotel_id es NULL solo para super_admin"""
    __tablename__ = "users"
    __table_args__ = (
        UniqueConstraint("email", name="uq_user_email"),
        Index("idx_user_hotel", "hotel_id"),
        Index("idx_user_active", "active"),
    )

    id = Column(Integer, primary_key=True, index=True)
    hotel_id = Column(Integer, ForeignKey("hotels.id", ondelete="CASCADE"), nullable=True)
    name = Column(String(120), nullable=False)
    email = Column(String(150), nullable=False)
    hashed_password = Column(String(255), nullable=False)
    role = Column(enum_column(UserRole, "user_role"), default=UserRole.RECEPTIONIST, nullable=False)
    active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    hotel = relationship("Hotel", back_populates="users")

    @property
    def is_super_admin(self) -> bool:
        return self.role == UserRole.SUPER_ADMIN

    def __repr__(self):
        return f"<User(id={self.id}, email='{self.email}', role='{self.role}')>"
