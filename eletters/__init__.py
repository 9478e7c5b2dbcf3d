"""eletters - drafting, layout and import for interactive letters."""

from eletters.config import ElettersConfig, load_config
from eletters.document import Letter, LetterValidationError, sanitize_letter, validate_structure
from eletters.drafter import Drafter, DraftSession, summarize, synthesize
from eletters.importer import ImportService
from eletters.layout import transform
from eletters.llm import LLMProvider, create_llm_provider
from eletters.storage import JsonDraftStore

__version__ = "0.1.0"

__all__ = [
    "DraftSession",
    "Drafter",
    "ElettersConfig",
    "ImportService",
    "JsonDraftStore",
    "LLMProvider",
    "Letter",
    "LetterValidationError",
    "create_llm_provider",
    "load_config",
    "sanitize_letter",
    "summarize",
    "synthesize",
    "transform",
    "validate_structure",
]
