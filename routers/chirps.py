import uuid
from fastapi import APIRouter, Depends, Query, Response
from starlette import status
from utils.deps import db_dependency, get_current_user_id, user_id_dependency
from schemas.chirp_schemas import ChirpListResponse, ChirpResponse, CreateChirpRequest, CreateChirpResponse, SortOrder
from services.chirp_service import ChirpService


router = APIRouter(
    prefix="/api/chirps",
    tags=["chirps"]
)


# Any valid access token may post; the author is the userId in the body
@router.post("", response_model=CreateChirpResponse, status_code=status.HTTP_201_CREATED, dependencies=[Depends(get_current_user_id)])
async def create_chirp(body: CreateChirpRequest, db: db_dependency):
    chirp = ChirpService.create_chirp(body, db)
    return CreateChirpResponse(chirp=ChirpResponse.model_validate(chirp))


@router.get("", response_model=ChirpListResponse)
async def list_chirps(db: db_dependency, author_id: uuid.UUID | None = Query(None, alias="authorId"),
                      sort: SortOrder = SortOrder.asc):
    chirps = ChirpService.list_chirps(db, author_id=author_id, sort=sort)
    return ChirpListResponse(user_chirps=[ChirpResponse.model_validate(chirp) for chirp in chirps])


@router.get("/{chirp_id}", response_model=ChirpResponse)
async def get_chirp(chirp_id: str, db: db_dependency):
    return ChirpService.get_chirp(chirp_id, db)


@router.delete("/{chirp_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_chirp(chirp_id: str, user_id: user_id_dependency, db: db_dependency):
    ChirpService.delete_chirp(chirp_id, user_id, db)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
