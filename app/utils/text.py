# app/utils/text.py
import re

def only_digits(s: str | None) -> str:
    return re.sub(r"\D+", "", s or "")

def normalize_phone(value: str | None) -> str | None:
    # guarda só dígitos (com DDI, se vier); "+244 923 000 000" -> "244923000000"
    digits = only_digits(value)
    return digits or None

def normalize_email(value: str) -> str:
    return (value or "").strip().lower()

def is_blank(value: str | None) -> bool:
    return not (value or "").strip()
