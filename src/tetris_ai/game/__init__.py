# src/tetris_ai/game/__init__.py
