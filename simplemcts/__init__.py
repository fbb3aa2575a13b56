"""Configurable Monte Carlo Tree Search for game AI: single-game search and batched self-play."""

__version__ = "0.1.1"

__all__ = ["batch", "config", "errors", "game", "mcts", "stats", "tree", "utils"]