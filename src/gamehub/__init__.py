"""GameHub: account, character and chat backend for a small multiplayer game."""

__version__ = "0.1.0"
