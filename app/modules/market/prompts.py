# app/modules/market/prompts.py
import json
from typing import Any

SYSTEM_PROMPT = "You are an expert agricultural market analyst for African markets."

_PROMPTS = {
    "pt": """Você é um analista de mercado agrícola especializado em Angola, RD Congo, África do Sul e mercados africanos. 
Analise os seguintes dados de produtos agrícolas e forneça:

1. **Resumo do Mercado**: Visão geral do estado atual do mercado
2. **Análise de Preços**: Produtos com melhores preços, variações notáveis
3. **Tendências de Demanda**: Quais produtos têm mais oferta e potencial demanda
4. **Recomendações para Compradores**: Melhores oportunidades de compra
5. **Recomendações para Agricultores**: Produtos com maior potencial de lucro
6. **Previsões**: Tendências esperadas para o próximo período

Dados dos produtos:
{stats}

Total de produtos: {total}
Resumo detalhado:
{summary}

Forneça uma análise detalhada e prática em PORTUGUÊS.""",
    "en": """You are an agricultural market analyst specialized in Angola, DR Congo, South Africa and African markets.
Analyze the following agricultural product data and provide:

1. **Market Summary**: Overview of the current market state
2. **Price Analysis**: Products with best prices, notable variations
3. **Demand Trends**: Which products have most supply and potential demand
4. **Recommendations for Buyers**: Best buying opportunities
5. **Recommendations for Farmers**: Products with highest profit potential
6. **Forecasts**: Expected trends for the next period

Product data:
{stats}

Total products: {total}
Detailed summary:
{summary}

Provide a detailed and practical analysis in ENGLISH.""",
    "fr": """Vous êtes un analyste de marché agricole spécialisé en Angola, RD Congo, Afrique du Sud et marchés africains.
Analysez les données suivantes sur les produits agricoles et fournissez:

1. **Résumé du Marché**: Aperçu de l'état actuel du marché
2. **Analyse des Prix**: Produits avec les meilleurs prix, variations notables
3. **Tendances de Demande**: Quels produits ont le plus d'offre et de demande potentielle
4. **Recommandations pour les Acheteurs**: Meilleures opportunités d'achat
5. **Recommandations pour les Agriculteurs**: Produits avec le meilleur potentiel de profit
6. **Prévisions**: Tendances attendues pour la prochaine période

Données des produits:
{stats}

Total des produits: {total}
Résumé détaillé:
{summary}

Fournissez une analyse détaillée et pratique en FRANÇAIS.""",
}

# só as primeiras linhas vão no prompt
SUMMARY_LIMIT = 20


def build_prompt(language: str, stats: list[dict[str, Any]], summary: list[dict[str, Any]], total: int) -> str:
    template = _PROMPTS.get(language) or _PROMPTS["pt"]
    return template.format(
        stats=json.dumps(stats, indent=2, ensure_ascii=False, default=str),
        total=total,
        summary=json.dumps(summary[:SUMMARY_LIMIT], indent=2, ensure_ascii=False, default=str),
    )
