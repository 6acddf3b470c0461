# app/modules/orders/models.py
from datetime import date
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import String, ForeignKey, Date, Float, Numeric
from app.db.base import Base, TimestampMixin, UUIDPkMixin

ORDER_STATUSES = ("pending", "accepted", "in_progress", "completed", "cancelled")


class Order(Base, UUIDPkMixin, TimestampMixin):
    __tablename__ = "orders"

    # comprador
    user_id: Mapped[str] = mapped_column(String(36), ForeignKey("users.id", ondelete="CASCADE"), index=True)
    product_id: Mapped[str] = mapped_column(String(36), ForeignKey("products.id", ondelete="RESTRICT"), index=True)

    quantity: Mapped[float] = mapped_column(Float)
    total_price: Mapped[float] = mapped_column(Numeric(14, 2, asdecimal=False))
    transport_fee: Mapped[float | None] = mapped_column(Numeric(14, 2, asdecimal=False), nullable=True)
    location: Mapped[str] = mapped_column(String(500))  # endereço de entrega
    delivery_date: Mapped[date | None] = mapped_column(Date, nullable=True)

    company: Mapped[str | None] = mapped_column(String(200), nullable=True)
    contact_name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(30), nullable=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    notes: Mapped[str | None] = mapped_column(String(2000), nullable=True)

    status: Mapped[str] = mapped_column(String(20), default="pending", index=True)
