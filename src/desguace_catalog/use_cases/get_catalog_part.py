from __future__ import annotations

from dataclasses import dataclass

from desguace_catalog.catalog.loader import CatalogLoader
from desguace_catalog.domain.catalog import CatalogItem
from desguace_catalog.domain.errors import ValidationError


@dataclass(frozen=True, slots=True)
class GetCatalogPartRequest:
    part_id: int


@dataclass(frozen=True, slots=True)
class GetCatalogPartResponse:
    item: CatalogItem


class GetCatalogPart:
    """
    Use case for the storefront detail of one part.

    Responsibilities:
    - Validate part_id
    - Load the part with its vehicle of origin and photos
    - Raise NotFoundError if the part doesn't exist
    """

    def __init__(self, loader: CatalogLoader) -> None:
        self._loader = loader

    async def execute(self, request: GetCatalogPartRequest) -> GetCatalogPartResponse:
        if request.part_id <= 0:
            raise ValidationError(
                errors=[{"field": "part_id", "message": "Must be a positive integer", "code": "INVALID_ID"}]
            )
        item = await self._loader.load_item(request.part_id)
        return GetCatalogPartResponse(item=item)
