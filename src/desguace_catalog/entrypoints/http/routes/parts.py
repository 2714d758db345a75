from fastapi import APIRouter, Depends, File, Form, Path, Response, UploadFile, status

from desguace_catalog.entrypoints.http.dependencies import get_delete_part_use_case, get_upload_photo_use_case
from desguace_catalog.entrypoints.http.dtos.photos import PhotoDTO
from desguace_catalog.entrypoints.http.error_responses import ErrorResponse
from desguace_catalog.entrypoints.http.mappers.photo_mapper import PhotoResponseMapper
from desguace_catalog.use_cases.delete_part import DeletePart, DeletePartRequest
from desguace_catalog.use_cases.upload_photo import UploadPhoto, UploadPhotoRequest

router = APIRouter(prefix="/parts", tags=["Parts"])


@router.delete(
    "/{part_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a part",
    description="Refused with 409 `PART_LOCKED` while an open order includes the part.",
    responses={
        404: {"model": ErrorResponse, "description": "Part not found"},
        409: {"model": ErrorResponse, "description": "Part locked by an open order"},
    },
)
async def delete_part(
    part_id: int = Path(..., description="Part id", ge=1),
    use_case: DeletePart = Depends(get_delete_part_use_case),
) -> Response:
    await use_case.execute(DeletePartRequest(part_id=part_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/{part_id}/photos",
    response_model=PhotoDTO,
    status_code=status.HTTP_201_CREATED,
    summary="Upload a part photo",
    responses={422: {"model": ErrorResponse, "description": "Invalid file"}},
)
async def upload_part_photo(
    part_id: int = Path(..., description="Part id", ge=1),
    foto: UploadFile = File(..., description="Image file"),
    descripcion: str | None = Form(default=None),
    es_principal: bool = Form(default=False, description="Make it the part's principal photo"),
    use_case: UploadPhoto = Depends(get_upload_photo_use_case),
) -> PhotoDTO:
    content = await foto.read()
    request = UploadPhotoRequest(
        part_id=part_id,
        content=content,
        filename=foto.filename or "foto",
        content_type=foto.content_type or "application/octet-stream",
        descripcion=descripcion,
        make_principal=es_principal,
    )
    result = await use_case.execute(request)
    return PhotoResponseMapper.to_response(result.photo)
