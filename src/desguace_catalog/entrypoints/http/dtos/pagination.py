from pydantic import BaseModel, Field


class PaginationDTO(BaseModel):
    page: int
    limit: int
    total: int
    total_pages: int


class PagingQueryDTO(BaseModel):
    page: int = Field(
        default=1,
        description="Backend page to load (1-based)",
        examples=[1],
        ge=1,
    )
    limit: int = Field(
        default=15,
        description="Items per backend page",
        examples=[15],
        ge=1,
        le=200,
    )
