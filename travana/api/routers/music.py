from typing import Optional

from fastapi import APIRouter, Depends

from travana.api.models.schemas import CreatePlaylistRequest, Playlist
from travana.core.errors import ValidationError
from travana.dependencies import get_music_service
from travana.domain.services.music_service import MusicService

router = APIRouter(prefix="/music", tags=["music"])


@router.get("")
async def music(
    action: Optional[str] = None,
    query: Optional[str] = None,
    limit: int = 20,
    destination: Optional[str] = None,
    duration: str = "7 days",
    mood: Optional[str] = None,
    genres: Optional[str] = None,
    svc: MusicService = Depends(get_music_service),
):
    if action == "search":
        if not query:
            raise ValidationError("Query parameter is required")
        return await svc.search_tracks(query, limit)

    if action == "recommendations":
        if not destination:
            raise ValidationError("Destination parameter is required")
        return await svc.get_playlist_recommendations(destination, duration, mood or "upbeat")

    if action == "popular":
        return svc.get_popular_travel_playlists()

    if action == "mood":
        if not mood:
            raise ValidationError("Mood parameter is required")
        return await svc.get_mood_based_recommendations(mood)

    if action == "genres":
        names = [g.strip() for g in (genres or "").split(",") if g.strip()]
        if not names:
            raise ValidationError("Genres parameter is required")
        return await svc.get_genre_recommendations(names)

    raise ValidationError("Invalid action parameter")


@router.post("", response_model=Playlist)
async def create_playlist(body: CreatePlaylistRequest, svc: MusicService = Depends(get_music_service)):
    if not body.name or body.trackIds is None:
        raise ValidationError("Name and trackIds array are required")
    return await svc.create_playlist(body.name, body.description or "", body.trackIds)
