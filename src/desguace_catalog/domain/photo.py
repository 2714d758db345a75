from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime


@dataclass(frozen=True, slots=True)
class Photo:
    id: int
    url: str
    fecha_subida: datetime
    id_pieza: int | None = None
    id_vehiculo: int | None = None
    es_principal: bool = False
    nombre: str = ""
    descripcion: str | None = None
    tamanio: int = 0
    origen: str = "manual"

    @property
    def owner_key(self) -> tuple[str, int | None]:
        """Identifies the entity owning the photo (part or vehicle)."""
        if self.id_pieza is not None:
            return ("pieza", self.id_pieza)
        return ("vehiculo", self.id_vehiculo)


def principal_photo(photos: list[Photo]) -> Photo | None:
    """Photo flagged as principal, falling back to the first one."""
    for photo in photos:
        if photo.es_principal:
            return photo
    return photos[0] if photos else None


def mark_principal(photos: list[Photo], photo_id: int) -> list[Photo]:
    """
    Flip the principal flag inside one owner's photo set.

    Every sibling sharing the owner of ``photo_id`` ends up with
    ``es_principal=False`` and ``photo_id`` with ``True``. Photos of other
    owners are returned untouched. Applying it twice yields the same list.

    Raises:
        KeyError: If ``photo_id`` is not in ``photos``
    """
    target = next((photo for photo in photos if photo.id == photo_id), None)
    if target is None:
        raise KeyError(photo_id)

    owner = target.owner_key
    return [
        replace(photo, es_principal=photo.id == photo_id) if photo.owner_key == owner else photo
        for photo in photos
    ]


def latest_photos(photos: list[Photo], limit: int) -> list[Photo]:
    """
    Most recent photos first, truncated to ``limit``.

    Python's sort is stable, so photos uploaded at the same instant keep
    their input order.
    """
    ordered = sorted(photos, key=lambda photo: photo.fecha_subida, reverse=True)
    return ordered[:limit]
