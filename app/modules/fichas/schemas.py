from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field


class Coordenadas(BaseModel):
    lat: float
    lng: float


class LocalEntrega(BaseModel):
    descricao: str = Field(min_length=1)
    coordenadas: Optional[Coordenadas] = None


class FichaCreate(BaseModel):
    nome_ficha: str = Field(min_length=1)
    tipo_negocio: str = Field(min_length=1)
    produto: str = Field(min_length=1)
    qualidade: Optional[str] = None
    embalagem: Optional[str] = None
    transporte: Optional[str] = None
    locais_entrega: List[LocalEntrega] = []
    telefone: Optional[str] = None
    observacoes: Optional[str] = None
    descricao_final: Optional[str] = None


class FichaOut(FichaCreate):
    id: str
    user_id: str
    created_at: datetime

    class Config:
        from_attributes = True
