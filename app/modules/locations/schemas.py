from typing import List
from pydantic import BaseModel


class MunicipalityOut(BaseModel):
    id: str
    name: str


class ProvinceOut(BaseModel):
    id: str
    name: str
    municipalities: List[MunicipalityOut] = []


class CountryOut(BaseModel):
    code: str
    name: str
    language: str
    province_label: str
    municipality_label: str
