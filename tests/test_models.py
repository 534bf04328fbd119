"""
Tests for the movie concept domain model and response schemas.
"""
import dataclasses

import pytest

from movie_pitch.models import CastMember, DEFAULT_MOVIE_TITLE, MovieField, MovieState, Review
from movie_pitch.schemas import FieldStatus, OperationResponse, RegenerateResponse


class TestMovieField:
    def test_wire_values(self):
        assert MovieField.values() == (
            "title", "description", "genre", "tagline", "cast", "posterUrl", "reviews",
        )

    def test_lookup_by_wire_value(self):
        assert MovieField("posterUrl") is MovieField.POSTER_URL

    def test_unknown_value_rejected(self):
        with pytest.raises(ValueError):
            MovieField("budget")


class TestMovieState:
    def test_defaults(self):
        state = MovieState()
        assert state.movie_title == DEFAULT_MOVIE_TITLE == "Unnamed"
        assert state.description is None
        assert state.tagline is None
        assert state.poster_url is None
        assert state.cast == ()
        assert state.reviews == ()
        assert state.locked_fields == frozenset()

    def test_snapshot_is_frozen(self):
        state = MovieState()
        with pytest.raises(dataclasses.FrozenInstanceError):
            state.movie_title = "Other"

    def test_to_dict_uses_wire_names(self):
        state = MovieState(
            movie_title="Giant Robots",
            description="D",
            cast=(CastMember(character="Hero", actor="A"),),
            reviews=(Review(text="Loud.", author="Critic"),),
            locked_fields=frozenset({MovieField.TITLE, MovieField.CAST}),
        )
        data = state.to_dict()
        assert data == {
            "movieTitle": "Giant Robots",
            "description": "D",
            "tagline": None,
            "posterUrl": None,
            "genre": None,
            "director": None,
            "cast": [{"character": "Hero", "actor": "A"}],
            "reviews": [{"text": "Loud.", "author": "Critic"}],
            "lockedFields": ["cast", "title"],
        }

    def test_from_dict_restores_snapshot(self):
        state = MovieState(
            movie_title="Giant Robots",
            tagline="T",
            poster_url="/posters/s/1.jpg",
            cast=(CastMember("Hero", "A"), CastMember("Villain", "B")),
            locked_fields=frozenset({MovieField.POSTER_URL}),
        )
        assert MovieState.from_dict(state.to_dict()) == state

    def test_from_dict_missing_title_uses_default(self):
        assert MovieState.from_dict({}).movie_title == DEFAULT_MOVIE_TITLE

    def test_from_dict_rejects_unknown_lock(self):
        with pytest.raises(ValueError):
            MovieState.from_dict({"lockedFields": ["budget"]})

    def test_is_locked(self):
        state = MovieState(locked_fields=frozenset({MovieField.GENRE}))
        assert state.is_locked(MovieField.GENRE)
        assert not state.is_locked(MovieField.TITLE)


class TestResponses:
    def test_operation_response_to_dict(self):
        response = OperationResponse("lock", MovieState())
        assert response.to_dict()["operation"] == "lock"
        assert response.to_dict()["state"]["movieTitle"] == "Unnamed"

    def test_regenerate_response_reports_failed_fields(self):
        response = RegenerateResponse(
            state=MovieState(),
            field_status={
                MovieField.DESCRIPTION: FieldStatus.GENERATED,
                MovieField.TAGLINE: FieldStatus.FAILED,
                MovieField.CAST: FieldStatus.LOCKED,
            },
            errors={MovieField.TAGLINE: "boom"},
            latency_ms=12,
        )
        assert response.failed_fields == frozenset({MovieField.TAGLINE})
        assert not response.succeeded

        data = response.to_dict()
        assert data["failedFields"] == ["tagline"]
        assert data["fieldStatus"] == {
            "description": "generated",
            "tagline": "failed",
            "cast": "locked",
        }
        assert data["errors"] == {"tagline": "boom"}
        assert data["latencyMs"] == 12

    def test_regenerate_response_without_failures_succeeds(self):
        response = RegenerateResponse(state=MovieState())
        assert response.succeeded
        assert response.failed_fields == frozenset()
