# app/utils/money.py

def format_kz(value: float) -> str:
    """Formata um valor em kwanzas no padrão pt-AO, sem casas decimais: 1.000.000 Kz"""
    return f"{int(round(value)):,}".replace(",", ".") + " Kz"
