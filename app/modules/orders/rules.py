# app/modules/orders/rules.py
"""
Regras do pedido B2B, em funções puras (sem banco, sem relógio implícito).

- admissibilidade: total >= mínimo, data de entrega em [hoje, hoje + janela] e
  campos do cliente preenchidos;
- cancelamento: permitido até 3h após a criação (3:00:00 exato ainda pode).
"""
import math
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Mapping

from app.utils.clock import as_utc
from app.utils.money import format_kz

REQUIRED_CUSTOMER_FIELDS = {
    "company": "Empresa",
    "contact": "Nome do Contato",
    "phone": "Telefone",
    "email": "Email",
    "address": "Endereço de Entrega",
}

CANCELLABLE_STATUSES = ("pending", "accepted")


@dataclass
class Admissibility:
    enabled: bool
    total: float
    minimum: float
    shortfall: float
    reasons: list[str] = field(default_factory=list)

    @property
    def minimum_met(self) -> bool:
        return self.shortfall <= 0


@dataclass
class CancelWindow:
    allowed: bool
    remaining_seconds: int
    label: str | None


CENTS = Decimal("0.01")


def to_cents(value) -> Decimal:
    # via str: 226283.44 vira Decimal("226283.44")
    return Decimal(str(value)).quantize(CENTS, rounding=ROUND_HALF_UP)


def line_total(price, qty) -> float:
    return float(to_cents(to_cents(price) * Decimal(str(qty))))


def cart_total(lines: Iterable[tuple[float, float]]) -> float:
    """Soma de preço x quantidade das linhas do carrinho, em centavos exatos."""
    total = sum((to_cents(price) * Decimal(str(qty)) for price, qty in lines), Decimal(0))
    return float(to_cents(total))


def check_admissibility(
    total: float,
    delivery_date: date | None,
    customer: Mapping[str, str | None],
    today: date,
    minimum: float,
    window_days: int = 14,
) -> Admissibility:
    reasons: list[str] = []
    shortfall = float(max(Decimal(0), to_cents(minimum) - to_cents(total)))
    if shortfall > 0:
        reasons.append(f"Valor mínimo não atingido. Faltam {format_kz(shortfall)}")

    if delivery_date is None:
        reasons.append("Selecione a data de entrega")
    elif delivery_date < today:
        reasons.append("A data de entrega não pode ser no passado")
    elif delivery_date > today + timedelta(days=window_days):
        reasons.append(f"A data de entrega deve ser em até {window_days} dias")

    for key, label in REQUIRED_CUSTOMER_FIELDS.items():
        if not (customer.get(key) or "").strip():
            reasons.append(f"Campo obrigatório: {label}")

    return Admissibility(
        enabled=not reasons,
        total=float(total),
        minimum=float(minimum),
        shortfall=shortfall,
        reasons=reasons,
    )


def format_remaining(seconds: int) -> str:
    # minutos arredondados para cima: 60s restantes -> "0h 1m restantes"
    total_minutes = math.ceil(max(0, seconds) / 60)
    return f"{total_minutes // 60}h {total_minutes % 60}m restantes"


def cancellation_window(created_at: datetime, now: datetime, hours: int = 3) -> CancelWindow:
    deadline = as_utc(created_at) + timedelta(hours=hours)
    remaining = (deadline - as_utc(now)).total_seconds()
    if remaining < 0:
        return CancelWindow(allowed=False, remaining_seconds=0, label=None)
    secs = math.ceil(remaining)
    return CancelWindow(allowed=True, remaining_seconds=secs, label=format_remaining(secs))
