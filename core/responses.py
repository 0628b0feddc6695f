import math
from abc import ABCMeta, abstractmethod
from typing import Any, Optional, Union
from fastapi import HTTPException
from fastapi.responses import JSONResponse, Response

from schemas.auth import AuthorizationStatusEnum
from core.exceptions import (
    ConflictError,
    InvalidInputError,
    NotFoundError,
    RsvpError,
    ServiceError,
)


class HttpResponseAbstract(metaclass=ABCMeta):
    @abstractmethod
    def response(self) -> Union[JSONResponse, Response, None]:
        pass


class Ok(HttpResponseAbstract):
    def __init__(self, data: Optional[Any]) -> None:
        self.data = data if data is not None else ""

    def response(self) -> JSONResponse:
        return JSONResponse(content=self.data, status_code=200)


class Created(HttpResponseAbstract):
    def __init__(self, data: Optional[Any]) -> None:
        self.data = data if data is not None else ""

    def response(self) -> JSONResponse:
        return JSONResponse(content=self.data, status_code=201)


class NoContent(HttpResponseAbstract):
    def response(self) -> Response:
        return Response(status_code=204)


class MessageResponse(HttpResponseAbstract):
    """
    json response with a `message` key, or `custom_response` verbatim
    when it is given
    """

    status_code: int = 400
    default_message: Optional[str] = None

    def __init__(
        self, message: Optional[str] = None, custom_response: Optional[Any] = None
    ) -> None:
        self.message = message if message is not None else self.default_message
        self.custom_response = custom_response

    def response(self) -> JSONResponse:
        if self.custom_response is None:
            return JSONResponse(
                content={"message": self.message}, status_code=self.status_code
            )
        return JSONResponse(content=self.custom_response, status_code=self.status_code)


class BadRequest(MessageResponse):
    status_code = 400


class Unauthorized(MessageResponse):
    status_code = 401
    default_message = "Unauthorized"


class Forbidden(MessageResponse):
    status_code = 403
    default_message = "You don't have permissions to perform this action"


class NotFound(MessageResponse):
    status_code = 404
    default_message = "Not Found"


class Conflict(MessageResponse):
    status_code = 409
    default_message = "Conflict"


class TooManyRequests(MessageResponse):
    status_code = 429
    default_message = "Too many requests, please try again later"

    def __init__(
        self,
        retry_after: Optional[float] = None,
        limit: Optional[int] = None,
        message: Optional[str] = None,
    ) -> None:
        super().__init__(message=message)
        # whole seconds, rounded up so clients never retry too early
        self.retry_after = math.ceil(retry_after or 0)
        self.limit = limit

    def response(self) -> JSONResponse:
        headers = {"X-RateLimit-Remaining": "0", "Retry-After": str(self.retry_after)}
        if self.limit is not None:
            headers["X-RateLimit-Limit"] = str(self.limit)
        return JSONResponse(
            content={"message": self.message, "retry_after": self.retry_after},
            status_code=self.status_code,
            headers=headers,
        )


class InternalServerError(HttpResponseAbstract):
    def __init__(
        self, error: Optional[str] = None, custom_response: Optional[Any] = None
    ) -> None:
        """
        error: error string, logged by the caller and never sent to the client
        custom_response: override default json detail
        """
        self.error = error
        self.custom_response = custom_response

    def response(self) -> JSONResponse:
        if self.custom_response is None:
            raise HTTPException(status_code=500, detail="Something wrong with server")
        raise HTTPException(status_code=500, detail=self.custom_response)


def common_response(res: HttpResponseAbstract):
    return res.response()


def handle_service_error(e: ServiceError) -> Union[JSONResponse, Response]:
    """Map a service layer error onto its HTTP response.

    not found -> 404, conflict -> 409, invalid input -> 400.
    RSVP errors carry their code in the body so clients can branch on it.
    """
    if isinstance(e, RsvpError):
        body = {"message": e.message, "code": e.code.value}
        if e.is_not_found:
            return common_response(NotFound(custom_response=body))
        if e.is_conflict:
            return common_response(Conflict(custom_response=body))
        return common_response(BadRequest(custom_response=body))
    if isinstance(e, NotFoundError):
        return common_response(NotFound(message=e.message))
    if isinstance(e, ConflictError):
        return common_response(Conflict(message=e.message))
    if isinstance(e, InvalidInputError):
        return common_response(BadRequest(message=e.message))
    return common_response(InternalServerError(error=e.message))


def handle_authorization_status(
    auth_status: AuthorizationStatusEnum,
) -> Union[JSONResponse, Response]:
    if auth_status == AuthorizationStatusEnum.UNAUTHORIZED:
        return common_response(Unauthorized(message="Unauthorized"))
    return common_response(Forbidden())
