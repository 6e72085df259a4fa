from fastapi import HTTPException, status

from finboard.services.errors import EntityNotFoundError, InvalidTransitionError


def http_error_for(exc: Exception) -> HTTPException:
    if isinstance(exc, EntityNotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    if isinstance(exc, InvalidTransitionError):
        return HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail={
                "message": str(exc),
                "current": exc.current,
                "target": exc.target,
                "allowed_from": exc.allowed_from,
            },
        )
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
