"""
Footchess - Rule engine and automa for a football-themed board game.

Two sides of twelve pieces play on a 12x8 board and score by moving a
scoring piece into the opponent's goal. The package provides:
- Board layout and state
- Move validation and legal move generation
- A pure reducer applying moves
- A difficulty-tiered bot
- A serializable snapshot boundary
"""

__version__ = "0.1.0"
