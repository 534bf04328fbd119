#!/usr/bin/env python3
"""
Interactive CLI demo for Movie Pitch Service.

Drives one session from the command line: regenerate a concept from a
title, lock what you like, edit fields by hand, regenerate again.
"""
import logging
import os
import sys

# Imports assume PYTHONPATH=src is set (e.g., PYTHONPATH=src python demo/cli_demo.py)
from movie_pitch.app import MoviePitchApp
from movie_pitch.config_loader import load_config_from_env
from movie_pitch.exceptions import MoviePitchError
from movie_pitch.schemas import RegenerateResponse


def print_banner(session_id):
    """Print welcome banner."""
    print("\n" + "=" * 60)
    print("  Movie Pitch Service - Interactive CLI Demo")
    print("=" * 60)
    print(f"\nSession: {session_id}")
    print("\nCommands:")
    print("  regenerate <title>            Generate the concept from a title")
    print("  lock <field> / unlock <field> Fields: " + ", ".join(
        ["title", "description", "tagline", "cast", "posterUrl"]))
    print("  description <text>            Set and lock the description")
    print("  tagline <text>                Set and lock the tagline")
    print("  cast <Character=Actor; ...>   Set and lock the cast")
    print("  poster <url>                  Set and lock the poster URL")
    print("  state                         Show the current concept")
    print("\nType 'quit' or 'exit' to end the session.")
    print("-" * 60 + "\n")


def print_state(state):
    """Print formatted movie concept."""
    locked = set(state.to_dict()["lockedFields"])

    def mark(name):
        return " [locked]" if name in locked else ""

    print(f"\n🎬 Title{mark('title')}: {state.movie_title}")
    print(f"📝 Description{mark('description')}: {state.description or '-'}")
    print(f"💬 Tagline{mark('tagline')}: {state.tagline or '-'}")
    if state.cast:
        print(f"🎭 Cast{mark('cast')}:")
        for member in state.cast:
            print(f"     {member.actor} as {member.character}")
    else:
        print(f"🎭 Cast{mark('cast')}: -")
    print(f"🖼️  Poster{mark('posterUrl')}: {state.poster_url or '-'}")
    print("-" * 60)


def print_regenerate(response: RegenerateResponse):
    """Print per-field outcome of a regenerate run."""
    print_state(response.state)
    for movie_field, status in response.field_status.items():
        line = f"   {movie_field.value}: {status.value}"
        if movie_field in response.errors:
            line += f" ({response.errors[movie_field]})"
        print(line)
    print(f"⚡ Latency: {response.latency_ms}ms")
    print("-" * 60)


def parse_cast(text):
    """Parse 'Character=Actor; Character=Actor' into cast entries."""
    cast = []
    for entry in text.split(";"):
        if not entry.strip():
            continue
        character, _, actor = entry.partition("=")
        cast.append({"character": character.strip(), "actor": actor.strip()})
    return cast


def handle_command(service, session_id, command, argument):
    """Run one command. Returns False for unknown commands."""
    if command == "regenerate":
        print_regenerate(service.regenerate(session_id, argument))
    elif command == "lock":
        print_state(service.lock(session_id, argument).state)
    elif command == "unlock":
        print_state(service.unlock(session_id, argument).state)
    elif command == "description":
        print_state(service.update_description(session_id, argument).state)
    elif command == "tagline":
        print_state(service.update_tagline(session_id, argument).state)
    elif command == "cast":
        print_state(service.update_cast(session_id, parse_cast(argument)).state)
    elif command == "poster":
        print_state(service.update_poster_url(session_id, argument).state)
    elif command == "state":
        print_state(service.get_state(session_id))
    else:
        return False
    return True


def main():
    """Main CLI loop."""
    logging.basicConfig(level=logging.WARNING)
    session_id = os.getenv("PITCH_SESSION_ID", "cli-demo")
    print_banner(session_id)

    try:
        print("🚀 Initializing Movie Pitch Service...")
        pitch_app = MoviePitchApp(load_config_from_env())
        pitch_app.initialize()
        service = pitch_app.service
        print("✅ Ready!\n")
    except Exception as e:
        print(f"\n❌ Failed to initialize service: {e}")
        print("Please check your environment variables and configuration.")
        return 1

    try:
        while True:
            try:
                line = input("You: ").strip()
            except KeyboardInterrupt:
                print("\n\n👋 Interrupted. Goodbye!\n")
                break
            except EOFError:
                print("\n\n👋 Goodbye!\n")
                break

            if not line:
                continue

            if line.lower() in ['quit', 'exit', 'q']:
                print("\n👋 Thanks for using Movie Pitch Service! Goodbye!\n")
                break

            command, _, argument = line.partition(" ")
            try:
                if not handle_command(service, session_id, command.lower(), argument.strip()):
                    print(f"❓ Unknown command: {command}")
            except MoviePitchError as e:
                print(f"\n❌ Error: {e}")
                print("-" * 60)
    finally:
        pitch_app.close()

    return 0


if __name__ == "__main__":
    sys.exit(main())
