# app/modules/market/stats.py
from typing import Any, Iterable


def product_stats(products: Iterable[dict[str, Any]]) -> list[dict[str, Any]]:
    """Estatísticas por tipo de produto, na ordem em que cada tipo aparece."""
    groups: dict[str, list[dict[str, Any]]] = {}
    for p in products:
        groups.setdefault(p["product_type"], []).append(p)

    out = []
    for ptype, items in groups.items():
        prices = [float(i["price"]) for i in items]
        out.append({
            "product": ptype,
            "count": len(items),
            "avgPrice": sum(prices) / len(prices),
            "minPrice": min(prices),
            "maxPrice": max(prices),
            "totalQuantity": sum(float(i["quantity"]) for i in items),
        })
    return out


def product_summary(products: Iterable[dict[str, Any]]) -> list[dict[str, Any]]:
    return [
        {
            "type": p["product_type"],
            "quantity": p["quantity"],
            "price": p["price"],
            "location": f"{p.get('province_id') or ''} - {p.get('municipality_id') or ''}",
            "logistics": p.get("logistics_access"),
            "date": p.get("created_at"),
        }
        for p in products
    ]
