from pydantic import BaseModel


class PhotoDTO(BaseModel):
    id: int
    url: str
    fecha_subida: str
    es_principal: bool
    id_pieza: int | None = None
    id_vehiculo: int | None = None
    nombre: str = ""
    descripcion: str | None = None
    origen: str = "manual"
