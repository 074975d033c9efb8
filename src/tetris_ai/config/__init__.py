# src/tetris_ai/config/__init__.py
