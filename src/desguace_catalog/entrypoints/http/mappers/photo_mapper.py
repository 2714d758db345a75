from __future__ import annotations

from desguace_catalog.domain.photo import Photo
from desguace_catalog.entrypoints.http.dtos.photos import PhotoDTO


class PhotoResponseMapper:
    @staticmethod
    def to_response(photo: Photo) -> PhotoDTO:
        return PhotoDTO(
            id=photo.id,
            url=photo.url,
            fecha_subida=photo.fecha_subida.isoformat(),
            es_principal=photo.es_principal,
            id_pieza=photo.id_pieza,
            id_vehiculo=photo.id_vehiculo,
            nombre=photo.nombre,
            descripcion=photo.descripcion,
            origen=photo.origen,
        )
