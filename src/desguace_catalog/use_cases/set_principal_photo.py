from __future__ import annotations

from dataclasses import dataclass

from desguace_catalog.domain.errors import ValidationError
from desguace_catalog.domain.photo import Photo
from desguace_catalog.fetchers.entity_fetcher import PhotoFetcher


@dataclass(frozen=True, slots=True)
class SetPrincipalPhotoRequest:
    photo_id: int


@dataclass(frozen=True, slots=True)
class SetPrincipalPhotoResponse:
    photo: Photo


class SetPrincipalPhoto:
    """Marks one photo as the principal photo of its part or vehicle."""

    def __init__(self, photos: PhotoFetcher) -> None:
        self._photos = photos

    async def execute(self, request: SetPrincipalPhotoRequest) -> SetPrincipalPhotoResponse:
        if request.photo_id <= 0:
            raise ValidationError(
                errors=[{"field": "photo_id", "message": "Must be a positive integer", "code": "INVALID_ID"}]
            )
        photo = await self._photos.set_principal(request.photo_id)
        return SetPrincipalPhotoResponse(photo=photo)
