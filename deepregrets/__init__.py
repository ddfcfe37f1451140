"""
Deep Regrets - Rules Engine

A deterministic rules engine for the Deep Regrets push-your-luck fishing
board game. The engine provides:
- Game state and setup from the card catalog
- A single reducer that applies every action
- Madness tiers, regrets and scoring
- Bot anglers and a game loop for automated play
"""

__version__ = "0.1.0"
