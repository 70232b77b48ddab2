# Application Stats Package
from .progress_calculator import ProgressCalculator
from .service import ProgressService

__all__ = ["ProgressCalculator", "ProgressService"]
