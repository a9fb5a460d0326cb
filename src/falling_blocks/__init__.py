"""Rules engine for a falling-block puzzle game."""

from .game import FallingBlockGame, GameConfig, Piece, TetrominoType

__all__ = ["FallingBlockGame", "GameConfig", "Piece", "TetrominoType"]
