"""Block Stack: a falling-block puzzle game engine."""

__version__ = "0.1.0"
