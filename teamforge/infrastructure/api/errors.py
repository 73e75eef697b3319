"""Map domain errors to HTTP responses."""

from fastapi import HTTPException

from teamforge.domain.errors import (
    FormationInProgress,
    HackathonNotFound,
    InsufficientParticipants,
    InvalidRuleSet,
    NoApprovedParticipants,
    TeamFormationError,
)


def to_http_exception(error: TeamFormationError) -> HTTPException:
    if isinstance(error, HackathonNotFound):
        return HTTPException(status_code=404, detail=str(error))
    if isinstance(error, FormationInProgress):
        return HTTPException(status_code=409, detail=str(error))
    if isinstance(error, InvalidRuleSet):
        return HTTPException(status_code=422, detail=str(error))
    if isinstance(error, InsufficientParticipants):
        return HTTPException(
            status_code=400,
            detail={
                "error": str(error),
                "min_team_size": error.min_team_size,
                "available_participants": error.pool_size,
            },
        )
    if isinstance(error, NoApprovedParticipants):
        return HTTPException(status_code=400, detail=str(error))
    return HTTPException(status_code=500, detail=str(error))
