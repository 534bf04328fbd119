from dataclasses import dataclass
from typing import Optional

from .models import DEFAULT_MOVIE_TITLE


@dataclass
class MoviePitchConfig:
    # LLM / text generation
    llm_provider: str = "groq"
    llm_model: str = "llama-3.1-8b-instant"
    llm_temperature: float = 0.8

    # Image generation
    enable_posters: bool = True
    image_model: str = "dall-e-3"
    image_size: str = "1024x1792"

    # Pipeline
    generation_timeout_s: Optional[float] = 60.0
    parallel_fanout: bool = True
    max_workers: int = 8
    default_title: str = DEFAULT_MOVIE_TITLE

    # Storage (state_dir None keeps sessions in memory)
    state_dir: Optional[str] = None
    blob_dir: str = "data/posters"
    blob_base_url: str = "/posters"

    verbose: bool = False
