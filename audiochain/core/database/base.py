# File: audiochain/core/database/base.py

from sqlalchemy.orm import declarative_base

# The shared registry. Journal models inherit from this.
Base = declarative_base()
