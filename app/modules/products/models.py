# app/modules/products/models.py
from datetime import date
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import String, ForeignKey, Date, Float, JSON, Numeric
from app.db.base import Base, TimestampMixin, UUIDPkMixin

PRODUCT_STATUSES = ("active", "inactive", "removed")
LOGISTICS_ACCESS = ("sim", "nao", "parcial")


class Product(Base, UUIDPkMixin, TimestampMixin):
    __tablename__ = "products"

    # Dono (produtor ou agente que publicou)
    user_id: Mapped[str] = mapped_column(String(36), ForeignKey("users.id", ondelete="CASCADE"), index=True)

    product_type: Mapped[str] = mapped_column(String(120), index=True)
    quantity: Mapped[float] = mapped_column(Float)
    price: Mapped[float] = mapped_column(Numeric(14, 2, asdecimal=False))  # Kz por unidade
    harvest_date: Mapped[date] = mapped_column(Date)

    province_id: Mapped[str] = mapped_column(String(80), index=True)
    municipality_id: Mapped[str] = mapped_column(String(80))
    logistics_access: Mapped[str] = mapped_column(String(10))  # sim | nao | parcial

    farmer_name: Mapped[str] = mapped_column(String(200))
    contact: Mapped[str] = mapped_column(String(100))
    description: Mapped[str | None] = mapped_column(String(2000), nullable=True)
    photos: Mapped[list | None] = mapped_column(JSON, nullable=True)  # URLs públicas

    location_lat: Mapped[float | None] = mapped_column(Float, nullable=True)
    location_lng: Mapped[float | None] = mapped_column(Float, nullable=True)

    status: Mapped[str] = mapped_column(String(20), default="active", index=True)
