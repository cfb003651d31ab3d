from .base import Base
from .connection import engine, SessionLocal

__all__ = ["Base", "engine", "SessionLocal"]
