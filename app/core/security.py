# app/core/security.py
import hashlib
from datetime import datetime, timedelta, timezone
from typing import Any

from jose import JWTError, jwt
from passlib.context import CryptContext

SECRET_ALG = "HS256"

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

def hash_password(plain: str) -> str:
    return pwd_context.hash(plain)

def verify_password(plain: str, hashed: str) -> bool:
    return pwd_context.verify(plain, hashed)

def create_access_token(
    data: dict[str, Any],
    expires_minutes: int = 120,
    secret_key: str = "change-me",
) -> str:
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + timedelta(minutes=expires_minutes)
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, secret_key, algorithm=SECRET_ALG)

def decode_token(token: str, secret_key: str) -> dict[str, Any]:
    return jwt.decode(token, secret_key, algorithms=[SECRET_ALG])

def password_fingerprint(senha_hash: str) -> str:
    return hashlib.sha256(senha_hash.encode()).hexdigest()[:16]

def create_purpose_token(
    subject: str,
    purpose: str,
    expires_minutes: int,
    secret_key: str,
    extra: dict[str, Any] | None = None,
) -> str:
    # tokens fora da sessão (ex.: reset de senha); claims em `extra` amarram o uso
    return create_access_token(
        {**(extra or {}), "sub": subject, "purpose": purpose},
        expires_minutes=expires_minutes,
        secret_key=secret_key,
    )

def decode_purpose_payload(token: str, purpose: str, secret_key: str) -> dict[str, Any] | None:
    try:
        payload = decode_token(token, secret_key)
    except JWTError:
        return None
    if payload.get("purpose") != purpose or not payload.get("sub"):
        return None
    return payload
