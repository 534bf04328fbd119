"""
Movie concept domain model.

Pure domain objects - no Flask, no LangChain. Snapshots are frozen so a
listener or caller can never mutate the state held by the store.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, FrozenSet, Optional, Tuple


DEFAULT_MOVIE_TITLE = "Unnamed"


class MovieField(str, Enum):
    """Addressable fields of a movie concept. Values are the wire identifiers."""
    TITLE = "title"
    DESCRIPTION = "description"
    GENRE = "genre"
    TAGLINE = "tagline"
    CAST = "cast"
    POSTER_URL = "posterUrl"
    REVIEWS = "reviews"

    @classmethod
    def values(cls) -> Tuple[str, ...]:
        return tuple(member.value for member in cls)


@dataclass(frozen=True)
class CastMember:
    character: str
    actor: str

    def to_dict(self) -> Dict[str, str]:
        return {"character": self.character, "actor": self.actor}


@dataclass(frozen=True)
class Review:
    text: str
    author: str

    def to_dict(self) -> Dict[str, str]:
        return {"text": self.text, "author": self.author}


@dataclass(frozen=True)
class MovieState:
    """Snapshot of one session's movie concept."""
    movie_title: str = DEFAULT_MOVIE_TITLE
    description: Optional[str] = None
    tagline: Optional[str] = None
    poster_url: Optional[str] = None
    genre: Optional[str] = None
    director: Optional[str] = None
    cast: Tuple[CastMember, ...] = ()
    reviews: Tuple[Review, ...] = ()
    locked_fields: FrozenSet[MovieField] = field(default_factory=frozenset)

    def is_locked(self, movie_field: MovieField) -> bool:
        return movie_field in self.locked_fields

    def to_dict(self) -> Dict[str, Any]:
        """Serialize field-for-field using the wire names."""
        return {
            "movieTitle": self.movie_title,
            "description": self.description,
            "tagline": self.tagline,
            "posterUrl": self.poster_url,
            "genre": self.genre,
            "director": self.director,
            "cast": [member.to_dict() for member in self.cast],
            "reviews": [review.to_dict() for review in self.reviews],
            "lockedFields": sorted(f.value for f in self.locked_fields),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MovieState":
        """
        Rebuild a snapshot from its serialized form.

        :raises ValueError: if lockedFields holds an unknown identifier
        :raises KeyError: if a cast member or review is missing a key
        """
        return cls(
            movie_title=data.get("movieTitle") or DEFAULT_MOVIE_TITLE,
            description=data.get("description"),
            tagline=data.get("tagline"),
            poster_url=data.get("posterUrl"),
            genre=data.get("genre"),
            director=data.get("director"),
            cast=tuple(
                CastMember(character=item["character"], actor=item["actor"])
                for item in data.get("cast") or []
            ),
            reviews=tuple(
                Review(text=item["text"], author=item["author"])
                for item in data.get("reviews") or []
            ),
            locked_fields=frozenset(
                MovieField(value) for value in data.get("lockedFields") or []
            ),
        )
