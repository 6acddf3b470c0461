# app/modules/locations/data.py
from typing import Any

from app.utils.i18n import COUNTRY_TO_LANGUAGE

# (id, nome, [(id_municipio, nome_municipio), ...])

# Angola
AO_PROVINCES = [
    ("bengo", "Bengo", [
        ("ambriz", "Ambriz"),
        ("dande", "Dande"),
        ("nambuangongo", "Nambuangongo"),
        ("pango-aluquem", "Pango Aluquém"),
    ]),
    ("benguela", "Benguela", [
        ("benguela-city", "Benguela"),
        ("lobito", "Lobito"),
        ("catumbela", "Catumbela"),
        ("cubal", "Cubal"),
    ]),
    ("bie", "Bié", [
        ("cuito", "Cuíto"),
        ("andulo", "Andulo"),
        ("camacupa", "Camacupa"),
    ]),
    ("cabinda", "Cabinda", [
        ("cabinda-city", "Cabinda"),
        ("cacongo", "Cacongo"),
        ("buco-zau", "Buco-Zau"),
    ]),
    ("huambo", "Huambo", [
        ("huambo-city", "Huambo"),
        ("caala", "Caála"),
        ("bailundo", "Bailundo"),
    ]),
    ("huila", "Huíla", [
        ("lubango", "Lubango"),
        ("matala", "Matala"),
        ("chibia", "Chibia"),
    ]),
    ("luanda", "Luanda", [
        ("luanda-city", "Luanda"),
        ("viana", "Viana"),
        ("cacuaco", "Cacuaco"),
        ("belas", "Belas"),
        ("talatona", "Talatona"),
    ]),
    ("malanje", "Malanje", [
        ("malanje-city", "Malanje"),
        ("cacuso", "Cacuso"),
    ]),
    ("moxico", "Moxico", [
        ("luena", "Luena"),
        ("luau", "Luau"),
    ]),
    ("namibe", "Namibe", [
        ("mocamedes", "Moçâmedes"),
        ("tombua", "Tômbua"),
    ]),
    ("uige", "Uíge", [
        ("uige-city", "Uíge"),
        ("negage", "Negage"),
    ]),
    ("zaire", "Zaire", [
        ("mbanza-congo", "Mbanza Congo"),
        ("soio", "Soio"),
    ]),
]

# RD Congo
CD_PROVINCES = [
    ("kinshasa", "Kinshasa", [
        ("gombe", "Gombe"),
        ("lingwala", "Lingwala"),
        ("barumbu", "Barumbu"),
        ("kinshasa-city", "Kinshasa"),
    ]),
    ("kongo-central", "Kongo Central", [
        ("matadi", "Matadi"),
        ("boma", "Boma"),
        ("muanda", "Muanda"),
    ]),
    ("katanga", "Haut-Katanga", [
        ("lubumbashi", "Lubumbashi"),
        ("likasi", "Likasi"),
        ("kolwezi", "Kolwezi"),
    ]),
    ("nord-kivu", "Nord-Kivu", [
        ("goma", "Goma"),
        ("butembo", "Butembo"),
        ("beni", "Beni"),
    ]),
    ("sud-kivu", "Sud-Kivu", [
        ("bukavu", "Bukavu"),
        ("uvira", "Uvira"),
    ]),
    ("kasai", "Kasaï", [
        ("tshikapa", "Tshikapa"),
        ("kananga", "Kananga"),
    ]),
    ("equateur", "Équateur", [
        ("mbandaka", "Mbandaka"),
        ("gemena", "Gemena"),
    ]),
]

# África do Sul
ZA_PROVINCES = [
    ("gauteng", "Gauteng", [
        ("johannesburg", "Johannesburg"),
        ("pretoria", "Pretoria"),
        ("soweto", "Soweto"),
        ("sandton", "Sandton"),
    ]),
    ("western-cape", "Western Cape", [
        ("cape-town", "Cape Town"),
        ("stellenbosch", "Stellenbosch"),
        ("paarl", "Paarl"),
    ]),
    ("kwazulu-natal", "KwaZulu-Natal", [
        ("durban", "Durban"),
        ("pietermaritzburg", "Pietermaritzburg"),
        ("richards-bay", "Richards Bay"),
    ]),
    ("eastern-cape", "Eastern Cape", [
        ("port-elizabeth", "Port Elizabeth"),
        ("east-london", "East London"),
    ]),
    ("limpopo", "Limpopo", [
        ("polokwane", "Polokwane"),
        ("tzaneen", "Tzaneen"),
    ]),
    ("mpumalanga", "Mpumalanga", [
        ("nelspruit", "Nelspruit"),
        ("witbank", "Witbank"),
    ]),
    ("free-state", "Free State", [
        ("bloemfontein", "Bloemfontein"),
        ("welkom", "Welkom"),
    ]),
    ("north-west", "North West", [
        ("rustenburg", "Rustenburg"),
        ("klerksdorp", "Klerksdorp"),
    ]),
    ("northern-cape", "Northern Cape", [
        ("kimberley", "Kimberley"),
        ("upington", "Upington"),
    ]),
]

# Reino Unido (regiões)
GB_PROVINCES = [
    ("london", "London", [
        ("central-london", "Central London"),
        ("westminster", "Westminster"),
        ("camden", "Camden"),
        ("greenwich", "Greenwich"),
    ]),
    ("south-east", "South East", [
        ("brighton", "Brighton"),
        ("oxford", "Oxford"),
        ("reading", "Reading"),
    ]),
    ("north-west", "North West", [
        ("manchester", "Manchester"),
        ("liverpool", "Liverpool"),
        ("preston", "Preston"),
    ]),
    ("west-midlands", "West Midlands", [
        ("birmingham", "Birmingham"),
        ("coventry", "Coventry"),
    ]),
    ("yorkshire", "Yorkshire", [
        ("leeds", "Leeds"),
        ("sheffield", "Sheffield"),
        ("york", "York"),
    ]),
    ("scotland", "Scotland", [
        ("edinburgh", "Edinburgh"),
        ("glasgow", "Glasgow"),
        ("aberdeen", "Aberdeen"),
    ]),
    ("wales", "Wales", [
        ("cardiff", "Cardiff"),
        ("swansea", "Swansea"),
    ]),
    ("northern-ireland", "Northern Ireland", [
        ("belfast", "Belfast"),
        ("derry", "Derry"),
    ]),
]

COUNTRY_NAMES = {
    "AO": "Angola",
    "CD": "RD Congo",
    "ZA": "África do Sul",
    "GB": "Reino Unido",
}

COUNTRY_PROVINCES = {
    "AO": AO_PROVINCES,
    "CD": CD_PROVINCES,
    "ZA": ZA_PROVINCES,
    "GB": GB_PROVINCES,
}

PROVINCE_LABELS = {"AO": "Província", "CD": "Province", "ZA": "Province", "GB": "Region"}
MUNICIPALITY_LABELS = {"AO": "Município", "CD": "Commune", "ZA": "City", "GB": "City"}


def province_label(country: str) -> str:
    return PROVINCE_LABELS.get(country.upper(), "Province")


def municipality_label(country: str) -> str:
    return MUNICIPALITY_LABELS.get(country.upper(), "City")


def provinces_for(country: str) -> list[dict[str, Any]]:
    return [
        {"id": pid, "name": name, "municipalities": [{"id": mid, "name": mname} for mid, mname in munis]}
        for pid, name, munis in COUNTRY_PROVINCES.get(country.upper(), [])
    ]


def municipalities_for(country: str, province_id: str) -> list[dict[str, str]] | None:
    for pid, _, munis in COUNTRY_PROVINCES.get(country.upper(), []):
        if pid == province_id:
            return [{"id": mid, "name": mname} for mid, mname in munis]
    return None


def countries() -> list[dict[str, Any]]:
    return [
        {
            "code": code,
            "name": COUNTRY_NAMES[code],
            "language": COUNTRY_TO_LANGUAGE[code],
            "province_label": province_label(code),
            "municipality_label": municipality_label(code),
        }
        for code in COUNTRY_PROVINCES
    ]
