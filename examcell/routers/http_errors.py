# /examcell/routers/http_errors.py

from fastapi import HTTPException, status

from ..services.errors import NotFoundError


def to_http_exception(error: ValueError) -> HTTPException:
    """
    Translates a service-layer business error into the HTTP error the client sees.
    NotFoundError is a 404; every other rule violation (validation, conflict) is a 400.
    """
    if isinstance(error, NotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(error))
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(error))
