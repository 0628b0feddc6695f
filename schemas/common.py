from typing import Optional
from fastapi import Query
from pydantic import BaseModel, ConfigDict


NoContentResponse = None


class UnauthorizedResponse(BaseModel):
    message: str = "Unauthorized"


class BadRequestResponse(BaseModel):
    message: str


class ValidationErrorResponseDetail(BaseModel):
    field: str
    message: str


class ValidationErrorResponse(BaseModel):
    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "message": "Validation error on the submitted data",
                "errors": [
                    {
                        "field": "hours",
                        "message": "Input should be greater than 0",
                    },
                    {
                        "field": "availability.funday",
                        "message": "Input should be 'monday', 'tuesday', 'wednesday', 'thursday', 'friday', 'saturday' or 'sunday'",
                    },
                ],
            }
        },
    )

    message: str
    errors: list[ValidationErrorResponseDetail]


class ForbiddenResponse(BaseModel):
    message: str = "You don't have permissions to perform this action"


class NotFoundResponse(BaseModel):
    message: str = "Not found"


class ConflictResponse(BaseModel):
    message: str
    code: Optional[str] = None


class TooManyRequestsResponse(BaseModel):
    message: str = "Too many requests, please try again later"
    retry_after: Optional[int] = None


class InternalServerErrorResponse(BaseModel):
    detail: str


class PaginationQuery(BaseModel):
    page: Optional[int] = Query(None, ge=1, description="Page Number")
    limit: Optional[int] = Query(None, ge=1, description="Page Size")
    search: Optional[str] = Query(None, description="Search by name or email")
