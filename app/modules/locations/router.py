# app/modules/locations/router.py
from fastapi import APIRouter, HTTPException

from .data import countries, municipalities_for, provinces_for
from .schemas import CountryOut, MunicipalityOut, ProvinceOut

router = APIRouter()


@router.get("", response_model=list[CountryOut])
async def list_countries():
    return countries()


@router.get("/{country}/provinces", response_model=list[ProvinceOut])
async def list_provinces(country: str):
    # país desconhecido -> lista vazia
    return provinces_for(country)


@router.get("/{country}/provinces/{province_id}/municipalities", response_model=list[MunicipalityOut])
async def list_municipalities(country: str, province_id: str):
    out = municipalities_for(country, province_id)
    if out is None:
        raise HTTPException(status_code=404, detail="Província não encontrada")
    return out
