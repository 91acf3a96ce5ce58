"""CLI commands for bodylog."""

from .calc import calc
from .init import init
from .profile import profile
from .serve import serve
from .weight import weight

__all__ = [
    "calc",
    "init",
    "profile",
    "serve",
    "weight",
]
