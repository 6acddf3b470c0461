# scripts/create_admin.py
import sys, asyncio
if sys.platform.startswith("win"):
    asyncio.set_event_loop_policy(asyncio.WindowsSelectorEventLoopPolicy())

from getpass import getpass
from sqlalchemy import select

from app.db.base import Base
from app.db.session import AsyncSessionLocal, engine
from app.core.security import hash_password
from app.utils.text import normalize_email
import app.api.v1.router  # noqa: F401  (registra todos os models no metadata)
from app.modules.users.models import User


async def main():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with AsyncSessionLocal() as db:
        full_name = input("Nome do admin: ").strip() or "Admin AgriLink"
        email = normalize_email(input("Email: "))
        password = getpass("Senha: ")
        role = input("Papel [super_root/root/admin] (padrão: super_root): ").strip() or "super_root"
        if role not in ("super_root", "root", "admin"):
            print("Papel inválido")
            return

        res = await db.execute(select(User).where(User.email == email))
        u = res.scalar_one_or_none()
        if u:
            # promove o usuário existente
            u.admin_role = role
            await db.commit()
            print(f"Usuário {u.email} promovido a {role}")
            return

        u = User(
            email=email,
            senha_hash=hash_password(password),
            full_name=full_name,
            identity_document="-",
            user_type="comprador",
            admin_role=role,
            province_id="luanda",
            municipality_id="luanda-city",
            email_verified=True,
        )
        db.add(u)
        await db.commit()
        await db.refresh(u)
        print(f"Admin criado: {u.id} ({u.email}) papel={u.admin_role}")

if __name__ == "__main__":
    asyncio.run(main())
