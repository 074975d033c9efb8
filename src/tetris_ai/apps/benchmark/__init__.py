# src/tetris_ai/apps/benchmark/__init__.py
