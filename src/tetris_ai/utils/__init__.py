# src/tetris_ai/utils/__init__.py
