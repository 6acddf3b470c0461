# app/utils/i18n.py
SUPPORTED_LANGUAGES = ("pt", "en", "fr")
DEFAULT_LANGUAGE = "pt"
DEFAULT_COUNTRY = "AO"

COUNTRY_TO_LANGUAGE = {
    "AO": "pt",  # Angola
    "CD": "fr",  # RD Congo
    "ZA": "en",  # África do Sul
    "GB": "en",  # Reino Unido
}


def language_for_country(country_code: str | None) -> str:
    return COUNTRY_TO_LANGUAGE.get((country_code or "").upper(), DEFAULT_LANGUAGE)


def normalize_language(lang: str | None) -> str:
    # aceita "en-US", "FR", etc.; qualquer outra coisa cai para pt
    base = (lang or "").strip().lower()[:2]
    return base if base in SUPPORTED_LANGUAGES else DEFAULT_LANGUAGE
