from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import String, Boolean, ForeignKey
from app.db.base import Base, TimestampMixin, UUIDPkMixin

USER_TYPES = ("agricultor", "comprador", "agente")
# papéis administrativos (has_role / is_root_admin / is_super_root / is_support_agent)
ADMIN_ROLES = ("admin", "root", "super_root", "support")


class User(Base, UUIDPkMixin, TimestampMixin):
    __tablename__ = "users"

    email: Mapped[str] = mapped_column(String(200), nullable=False, unique=True, index=True)
    senha_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    full_name: Mapped[str] = mapped_column(String(200), nullable=False)
    phone: Mapped[str | None] = mapped_column(String(40), nullable=True)
    identity_document: Mapped[str] = mapped_column(String(60), nullable=False)

    user_type: Mapped[str] = mapped_column(String(20), nullable=False)  # agricultor | comprador | agente
    admin_role: Mapped[str | None] = mapped_column(String(20), nullable=True)

    province_id: Mapped[str] = mapped_column(String(80), nullable=False)
    municipality_id: Mapped[str] = mapped_column(String(80), nullable=False)
    avatar_url: Mapped[str | None] = mapped_column(String(500), nullable=True)

    email_verified: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    phone_verified: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    # agentes recebem um código para indicar novos usuários
    agent_code: Mapped[str | None] = mapped_column(String(20), nullable=True, unique=True, index=True)
    referred_by_agent_id: Mapped[str | None] = mapped_column(
        String(36), ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )

    @property
    def is_admin(self) -> bool:
        return self.admin_role in ("admin", "root", "super_root")

    @property
    def is_root_admin(self) -> bool:
        return self.admin_role in ("root", "super_root")

    @property
    def is_super_root(self) -> bool:
        return self.admin_role == "super_root"

    @property
    def is_support_agent(self) -> bool:
        return self.admin_role == "support"
