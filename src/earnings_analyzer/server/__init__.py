"""HTTP surface for the transcript analyzer."""

from .app import create_app

__all__ = ["create_app"]
