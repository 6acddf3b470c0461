from datetime import date, datetime, timedelta, timezone

from app.modules.orders.rules import cancellation_window, cart_total, check_admissibility, format_remaining

TODAY = date(2026, 10, 19)
CUSTOMER = {
    "company": "Fazenda Kwanza Lda",
    "contact": "Ana Lopes",
    "phone": "+244 923 000 000",
    "email": "compras@kwanza.ao",
    "address": "Rua 21 de Janeiro, Luanda",
}


def check(total, delivery=TODAY + timedelta(days=10), customer=CUSTOMER):
    return check_admissibility(total, delivery, customer, today=TODAY, minimum=1_000_000, window_days=14)


def test_cart_total_sums_price_times_quantity():
    assert cart_total([(200_000, 2), (100_000, 3), (300_000, 1)]) == 1_000_000
    assert cart_total([]) == 0


def test_cent_prices_reaching_minimum_exactly():
    lines = [(226_283.44, 1), (674_093.19, 1), (99_623.37, 1)]
    total = cart_total(lines)
    assert total == 1_000_000
    a = check(total)
    assert a.enabled
    assert a.shortfall == 0
    assert a.reasons == []


def test_minimum_is_inclusive():
    assert check(1_000_000).enabled
    a = check(999_999)
    assert not a.enabled
    assert a.shortfall == 1
    assert a.reasons == ["Valor mínimo não atingido. Faltam 1 Kz"]


def test_delivery_window_bounds():
    assert check(1_000_000, TODAY).enabled
    assert check(1_000_000, TODAY + timedelta(days=14)).enabled
    assert not check(1_000_000, TODAY + timedelta(days=15)).enabled
    assert not check(1_000_000, TODAY - timedelta(days=1)).enabled
    assert check(1_000_000, None).reasons == ["Selecione a data de entrega"]


def test_blank_customer_fields_are_reported():
    a = check(1_000_000, customer={**CUSTOMER, "company": "  ", "email": ""})
    assert not a.enabled
    assert "Campo obrigatório: Empresa" in a.reasons
    assert "Campo obrigatório: Email" in a.reasons
    assert len(a.reasons) == 2


def test_notes_are_optional():
    assert check(1_000_000, customer={**CUSTOMER, "notes": ""}).enabled


def test_cancel_window_boundaries():
    created = datetime(2026, 10, 19, 8, 0, tzinfo=timezone.utc)

    w = cancellation_window(created, created + timedelta(hours=2, minutes=59))
    assert w.allowed
    assert w.label == "0h 1m restantes"

    assert cancellation_window(created, created + timedelta(hours=3)).allowed

    late = cancellation_window(created, created + timedelta(hours=3, seconds=1))
    assert not late.allowed
    assert late.label is None


def test_cancel_window_accepts_naive_created_at():
    created = datetime(2026, 10, 19, 8, 0)
    w = cancellation_window(created, datetime(2026, 10, 19, 9, 30, tzinfo=timezone.utc))
    assert w.allowed
    assert w.label == "1h 30m restantes"


def test_format_remaining_rounds_minutes_up():
    assert format_remaining(3 * 3600) == "3h 0m restantes"
    assert format_remaining(61) == "0h 2m restantes"
    assert format_remaining(0) == "0h 0m restantes"
