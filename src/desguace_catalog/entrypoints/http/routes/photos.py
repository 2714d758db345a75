from fastapi import APIRouter, Depends, Path

from desguace_catalog.entrypoints.http.dependencies import get_set_principal_photo_use_case
from desguace_catalog.entrypoints.http.dtos.photos import PhotoDTO
from desguace_catalog.entrypoints.http.error_responses import ErrorResponse
from desguace_catalog.entrypoints.http.mappers.photo_mapper import PhotoResponseMapper
from desguace_catalog.use_cases.set_principal_photo import SetPrincipalPhoto, SetPrincipalPhotoRequest

router = APIRouter(prefix="/photos", tags=["Photos"])


@router.put(
    "/{photo_id}/principal",
    response_model=PhotoDTO,
    summary="Make a photo the principal one",
    description="Idempotent. The other photos of the same part or vehicle lose the flag.",
    responses={404: {"model": ErrorResponse, "description": "Photo not found"}},
)
async def set_principal_photo(
    photo_id: int = Path(..., description="Photo id", ge=1),
    use_case: SetPrincipalPhoto = Depends(get_set_principal_photo_use_case),
) -> PhotoDTO:
    result = await use_case.execute(SetPrincipalPhotoRequest(photo_id=photo_id))
    return PhotoResponseMapper.to_response(result.photo)
