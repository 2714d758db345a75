"""Upload part photo use case."""

from __future__ import annotations

from dataclasses import dataclass

from desguace_catalog.domain.errors import ValidationError
from desguace_catalog.domain.photo import Photo
from desguace_catalog.fetchers.entity_fetcher import PhotoFetcher

MAX_PHOTO_BYTES = 10 * 1024 * 1024


@dataclass(frozen=True, slots=True)
class UploadPhotoRequest:
    part_id: int
    content: bytes
    filename: str
    content_type: str
    descripcion: str | None = None
    make_principal: bool = False

    def validate(self) -> None:
        """
        Raises:
            ValidationError: With one entry per invalid field
        """
        errors: list[dict[str, str]] = []
        if self.part_id <= 0:
            errors.append({"field": "part_id", "message": "Must be a positive integer", "code": "INVALID_ID"})
        if not self.content:
            errors.append({"field": "foto", "message": "File is empty", "code": "EMPTY_FILE"})
        elif len(self.content) > MAX_PHOTO_BYTES:
            errors.append({"field": "foto", "message": "File exceeds 10 MB", "code": "FILE_TOO_LARGE"})
        if not self.content_type.startswith("image/"):
            errors.append({"field": "foto", "message": "Must be an image", "code": "INVALID_CONTENT_TYPE"})
        if errors:
            raise ValidationError(errors=errors)


@dataclass(frozen=True, slots=True)
class UploadPhotoResponse:
    photo: Photo


class UploadPhoto:
    """
    Use case for attaching a new photo to a part.

    The photo is sent as a multipart upload with ``origen=manual``. When
    ``make_principal`` is set, the uploaded photo is then made the part's
    only principal photo.
    """

    def __init__(self, photos: PhotoFetcher) -> None:
        self._photos = photos

    async def execute(self, request: UploadPhotoRequest) -> UploadPhotoResponse:
        request.validate()

        fields = {"origen": "manual"}
        if request.descripcion:
            fields["descripcion"] = request.descripcion

        photo = await self._photos.upload(
            request.part_id,
            request.content,
            request.filename,
            request.content_type,
            fields,
        )
        if request.make_principal:
            photo = await self._photos.set_principal(photo.id)

        return UploadPhotoResponse(photo=photo)
