# src/tetris_ai/cli/__init__.py
