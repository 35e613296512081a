"""
fourth_protocol/ai/__init__.py - Computer opponents for The Fourth Protocol

This module provides the alpha-beta search engine, its static evaluator and
a random opponent.
"""

from fourth_protocol.ai.evaluator import BoardEvaluator
from fourth_protocol.ai.minimax import MinimaxPlayer, SearchResult
from fourth_protocol.ai.random_player import RandomPlayer

__all__ = ['BoardEvaluator', 'MinimaxPlayer', 'RandomPlayer', 'SearchResult']
