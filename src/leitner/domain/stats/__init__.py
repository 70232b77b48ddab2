# Domain Stats Package
from .models import ProgressReport
from .ports import DeckRepository

__all__ = ["ProgressReport", "DeckRepository"]
