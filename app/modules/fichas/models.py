# app/modules/fichas/models.py
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import String, ForeignKey, Text, JSON
from app.db.base import Base, TimestampMixin, UUIDPkMixin


class FichaRecebimento(Base, UUIDPkMixin, TimestampMixin):
    __tablename__ = "fichas_recebimento"

    user_id: Mapped[str] = mapped_column(String(36), ForeignKey("users.id", ondelete="CASCADE"), index=True)
    nome_ficha: Mapped[str] = mapped_column(String(200))
    tipo_negocio: Mapped[str] = mapped_column(String(100))
    produto: Mapped[str] = mapped_column(String(200))
    qualidade: Mapped[str | None] = mapped_column(String(200), nullable=True)
    embalagem: Mapped[str | None] = mapped_column(String(200), nullable=True)
    transporte: Mapped[str | None] = mapped_column(String(200), nullable=True)
    # [{"descricao": str, "coordenadas": {"lat": float, "lng": float} | None}]
    locais_entrega: Mapped[list | None] = mapped_column(JSON, nullable=True)
    telefone: Mapped[str | None] = mapped_column(String(30), nullable=True)
    observacoes: Mapped[str | None] = mapped_column(Text, nullable=True)
    descricao_final: Mapped[str | None] = mapped_column(Text, nullable=True)
