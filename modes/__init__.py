from .generator import run_generator
from .detect import run_detect

__all__ = [
    "run_generator",
    "run_detect",
]
