# File: mpvnotes/core/database/base.py

from sqlalchemy.orm import declarative_base

# The shared registry. Feature models (play history, ...) inherit from this.
Base = declarative_base()
