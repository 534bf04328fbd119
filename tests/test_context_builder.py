"""
Tests for context document assembly.
"""
from movie_pitch.generation import context_builder
from movie_pitch.models import CastMember, MovieState


FULL_STATE = MovieState(
    movie_title="Giant Robots",
    description="Robots fight.",
    tagline="Bigger is better.",
    cast=(CastMember("Hero", "A. Star"), CastMember("Villain", "B. Heavy")),
)


def test_title_only_for_fresh_state():
    context = context_builder.poster_context(MovieState(movie_title="Giant Robots"))
    assert context == "<Title>\nGiant Robots\n</Title>"


def test_poster_context_block_order():
    context = context_builder.poster_context(FULL_STATE)
    assert context == (
        "<Title>\nGiant Robots\n</Title>\n"
        "<Description>\nRobots fight.\n</Description>\n"
        "<Cast>\nA. Star as Hero\nB. Heavy as Villain\n</Cast>\n"
        "<Tagline>\nBigger is better.\n</Tagline>"
    )


def test_description_context_excludes_previous_description():
    context = context_builder.description_context(FULL_STATE)
    assert "<Description>" not in context
    assert "<Cast>" in context
    assert "<Tagline>" in context


def test_tagline_and_cast_context_use_title_and_description():
    for build in (context_builder.tagline_context, context_builder.cast_context):
        context = build(FULL_STATE)
        assert "<Title>" in context
        assert "<Description>" in context
        assert "<Cast>" not in context
        assert "<Tagline>" not in context


def test_empty_cast_is_omitted():
    state = MovieState(movie_title="X", description="D")
    assert "<Cast>" not in context_builder.poster_context(state)


def test_deterministic():
    assert context_builder.poster_context(FULL_STATE) == context_builder.poster_context(FULL_STATE)
