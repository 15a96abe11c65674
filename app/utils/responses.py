from pydantic import BaseModel


class HTTPException(BaseModel):
    detail: str


class Unauthorized(HTTPException):
    detail: str = "Could not validate LINE session"


class Forbidden(HTTPException):
    detail: str = "You're not allowed"


_400 = {"description": "Bad request", "model": HTTPException}
_401 = {
    "description": "Unauthorized",
    "model": Unauthorized,
    "headers": {
        "WWW-Authenticate": {
            "description": "Authentication type",
            "schema": {"type": "string"},
        },
    },
}
_403 = {"description": "Forbidden", "model": Forbidden}
_404 = {"description": "Not found", "model": HTTPException}
_409 = {"description": "Conflict", "model": HTTPException}
_500 = {"description": "Store failure", "model": HTTPException}
