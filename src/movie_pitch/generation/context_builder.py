"""
Context documents for generation steps.

Deterministic: the same state always yields the same document. The title is
always present; description and tagline appear only once set, cast only
when non-empty. Blocks are emitted in a fixed order.
"""
from typing import Iterable, List

from ..models import MovieField, MovieState


_BLOCK_ORDER = (MovieField.DESCRIPTION, MovieField.CAST, MovieField.TAGLINE)


def _block(tag: str, body: str) -> str:
    return f"<{tag}>\n{body}\n</{tag}>"


def build_context(state: MovieState, include: Iterable[MovieField] = ()) -> str:
    """
    Build the context document for a generation call.

    :param state: Current snapshot
    :param include: Optional fields the step is allowed to see
    :return: Tagged context document
    """
    wanted = set(include)
    parts: List[str] = [_block("Title", state.movie_title)]

    for movie_field in _BLOCK_ORDER:
        if movie_field not in wanted:
            continue
        if movie_field is MovieField.DESCRIPTION and state.description:
            parts.append(_block("Description", state.description))
        elif movie_field is MovieField.CAST and state.cast:
            starring = "\n".join(f"{m.actor} as {m.character}" for m in state.cast)
            parts.append(_block("Cast", starring))
        elif movie_field is MovieField.TAGLINE and state.tagline:
            parts.append(_block("Tagline", state.tagline))

    return "\n".join(parts)


def description_context(state: MovieState) -> str:
    return build_context(state, include=(MovieField.CAST, MovieField.TAGLINE))


def tagline_context(state: MovieState) -> str:
    return build_context(state, include=(MovieField.DESCRIPTION,))


def cast_context(state: MovieState) -> str:
    return build_context(state, include=(MovieField.DESCRIPTION,))


def poster_context(state: MovieState) -> str:
    return build_context(
        state,
        include=(MovieField.DESCRIPTION, MovieField.CAST, MovieField.TAGLINE),
    )
