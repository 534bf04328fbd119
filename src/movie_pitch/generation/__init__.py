"""
Generation capability: protocol, adapters, prompts and context assembly.
"""
from .client import GenerationClient, ImageGenerator
from .langchain_client import LangChainGenerationClient
from .image_client import OpenAIImageGenerator
from .schemas import CastListSchema, CastMemberSchema

__all__ = [
    "GenerationClient",
    "ImageGenerator",
    "LangChainGenerationClient",
    "OpenAIImageGenerator",
    "CastListSchema",
    "CastMemberSchema",
]
