from __future__ import annotations

import logging
from typing import Any, Dict, List

from travana.api.models.schemas import Playlist, PlaylistRecommendation, Track
from travana.external import spotify_api

logger = logging.getLogger(__name__)

COVER_IMAGE = "https://images.unsplash.com/photo-1493225457124-a3eb161ffa5f?w=300"

FALLBACK_TRACKS: List[Track] = [
    Track(
        id="1",
        name="Bohemian Rhapsody",
        artist="Queen",
        album="A Night at the Opera",
        duration=354000,
        spotifyUrl="https://open.spotify.com/track/3z8h0TU7ReDPLIbEnYhWZb",
        imageUrl=COVER_IMAGE,
    ),
    Track(
        id="2",
        name="Hotel California",
        artist="Eagles",
        album="Hotel California",
        duration=391000,
        spotifyUrl="https://open.spotify.com/track/40riOy7x9W7GXjyGp4pjAv",
        imageUrl=COVER_IMAGE,
    ),
    Track(
        id="3",
        name="Imagine",
        artist="John Lennon",
        album="Imagine",
        duration=183000,
        spotifyUrl="https://open.spotify.com/track/7pKfPomDEeI4TPT6EOYjn9",
        imageUrl=COVER_IMAGE,
    ),
    Track(
        id="4",
        name="Wonderwall",
        artist="Oasis",
        album="(What's the Story) Morning Glory?",
        duration=258000,
        spotifyUrl="https://open.spotify.com/track/2CT3r93YuSHtm57mjxvjhH",
        imageUrl=COVER_IMAGE,
    ),
    Track(
        id="5",
        name="Sweet Child O' Mine",
        artist="Guns N' Roses",
        album="Appetite for Destruction",
        duration=356000,
        spotifyUrl="https://open.spotify.com/track/7o2CTH4ctstm8TNelqjb51",
        imageUrl=COVER_IMAGE,
    ),
]

DESTINATION_PLAYLISTS = [
    ("paris", "Parisian Vibes", "Charming French music for your Paris adventure", "french cafe music", "romantic"),
    ("tokyo", "Tokyo Nights", "Japanese pop and electronic music", "japanese pop", "energetic"),
    ("new york", "NYC Energy", "High-energy tracks for the city that never sleeps", "new york city energy", "energetic"),
]

MOOD_PLAYLISTS = {
    "relaxed": ("Chill Vibes", "Relaxing music for your peaceful journey", "chill acoustic"),
    "adventure": ("Adventure Anthems", "Epic tracks for your adventurous spirit", "epic adventure music"),
    "romantic": ("Romantic Journey", "Love songs for your romantic getaway", "romantic love songs"),
}

UNIVERSAL_PLAYLISTS = [
    ("Road Trip Classics", "Timeless hits perfect for any journey", "road trip classics", "nostalgic"),
    ("Travel Essentials", "Essential tracks for every traveler", "travel music", "upbeat"),
]

MOOD_QUERIES = {
    "happy": "upbeat happy music",
    "sad": "melancholic music",
    "energetic": "high energy music",
    "relaxed": "chill relaxing music",
    "romantic": "romantic love songs",
    "nostalgic": "nostalgic classics",
    "adventure": "epic adventure music",
}


def spotify_item_to_track(item: Dict[str, Any]) -> Track:
    album = item.get("album") or {}
    images = album.get("images") or []
    artists = item.get("artists") or [{}]
    return Track(
        id=item["id"],
        name=item.get("name", ""),
        artist=artists[0].get("name", ""),
        album=album.get("name", ""),
        duration=item.get("duration_ms", 0),
        previewUrl=item.get("preview_url"),
        imageUrl=images[0].get("url") if images else None,
        spotifyUrl=(item.get("external_urls") or {}).get("spotify", ""),
    )


def fallback_tracks(limit: int) -> List[Track]:
    return [track.model_copy() for track in FALLBACK_TRACKS[: max(limit, 0)]]


def format_duration(ms: int) -> str:
    minutes, rest = divmod(int(ms), 60000)
    return f"{minutes}:{rest // 1000:02d}"


def playlist_types(destination: str, mood: str) -> List[Dict[str, str]]:
    types: List[Dict[str, str]] = []
    dest = destination.lower()
    for keyword, name, description, query, playlist_mood in DESTINATION_PLAYLISTS:
        if keyword in dest:
            types.append({"name": name, "description": description, "searchQuery": query, "mood": playlist_mood})
            break

    if mood in MOOD_PLAYLISTS:
        name, description, query = MOOD_PLAYLISTS[mood]
        types.append({"name": name, "description": description, "searchQuery": query, "mood": mood})

    for name, description, query, playlist_mood in UNIVERSAL_PLAYLISTS:
        types.append({"name": name, "description": description, "searchQuery": query, "mood": playlist_mood})
    return types


class MusicService:
    async def search_tracks(self, query: str, limit: int = 20) -> List[Track]:
        items = await spotify_api.search_tracks(query, limit)
        if items is None:
            return fallback_tracks(limit)
        try:
            return [spotify_item_to_track(item) for item in items]
        except (KeyError, IndexError, TypeError) as exc:
            logger.warning("Unexpected Spotify track payload for '%s': %s", query, exc)
            return fallback_tracks(limit)

    async def get_playlist_recommendations(
        self, destination: str, duration: str, mood: str
    ) -> List[PlaylistRecommendation]:
        recommendations: List[PlaylistRecommendation] = []
        for playlist_type in playlist_types(destination, mood):
            tracks = await self.search_tracks(playlist_type["searchQuery"], 15)
            if not tracks:
                continue
            recommendations.append(
                PlaylistRecommendation(
                    name=playlist_type["name"],
                    description=playlist_type["description"],
                    tracks=tracks,
                    mood=playlist_type["mood"],
                    duration=duration,
                )
            )
        return recommendations

    async def get_mood_based_recommendations(self, mood: str) -> List[Track]:
        return await self.search_tracks(MOOD_QUERIES.get(mood, "travel music"), 20)

    async def get_genre_recommendations(self, genres: List[str]) -> List[Track]:
        tracks: List[Track] = []
        for genre in genres:
            tracks.extend(await self.search_tracks(genre, 5))
        return tracks

    async def create_playlist(self, name: str, description: str, track_ids: List[str]) -> Playlist:
        # Creating a real playlist needs a Spotify user login
        logger.info("Creating mock playlist '%s' with %d tracks", name, len(track_ids))
        return Playlist(
            id="mock-playlist-id",
            name=name,
            description=description or "",
            imageUrl=COVER_IMAGE,
            trackCount=len(track_ids),
            spotifyUrl="https://open.spotify.com/playlist/mock",
            tracks=[],
        )

    def get_popular_travel_playlists(self) -> List[PlaylistRecommendation]:
        return [
            PlaylistRecommendation(
                name="Road Trip Essentials",
                description="The ultimate collection for any road trip",
                tracks=fallback_tracks(10),
                mood="upbeat",
                duration="2h 30m",
            ),
            PlaylistRecommendation(
                name="Chill Travel Vibes",
                description="Relaxing music for peaceful journeys",
                tracks=fallback_tracks(10),
                mood="relaxed",
                duration="1h 45m",
            ),
            PlaylistRecommendation(
                name="Adventure Anthems",
                description="Epic tracks for adventurous spirits",
                tracks=fallback_tracks(10),
                mood="adventure",
                duration="2h 15m",
            ),
        ]
