"""
fourth_protocol - The Fourth Protocol board game with a minimax opponent

This package provides a four-in-a-row game played on a square grid with a
placement phase and a movement phase, where every piece kind follows its
own movement rules, together with an alpha-beta search engine that plays it.
"""

# Version number
__version__ = '0.1.0'
