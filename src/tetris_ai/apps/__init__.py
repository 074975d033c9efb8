# src/tetris_ai/apps/__init__.py
