#!/usr/bin/env python3
"""
Flask REST API entry point for Movie Pitch Service.

Uses environment variables for configuration (see .env / config_loader).
"""
import logging
import os
import sys
from pathlib import Path

# Add service to path (src/ is in the same directory)
sys.path.insert(0, str(Path(__file__).parent / "src"))

from movie_pitch.api import create_app
from movie_pitch.app import MoviePitchApp
from movie_pitch.config_loader import load_config_from_env

# Setup logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[logging.StreamHandler()]
)
logger = logging.getLogger(__name__)

config = load_config_from_env()
if config.verbose:
    logging.getLogger("movie_pitch").setLevel(logging.DEBUG)

pitch_app = MoviePitchApp(config)
pitch_app.initialize()

app = create_app(pitch_app.service, blob_dir=str(pitch_app.blob_store.root_dir))


if __name__ == "__main__":
    port = int(os.environ.get("PORT", 7860))
    logger.info(f"Starting Movie Pitch Service on port {port}")
    app.run(host="0.0.0.0", port=port, threaded=True)
