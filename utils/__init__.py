"""
Lightweight package marker for internal utils.

Ensures `from utils import ...` imports resolve when the tool is run
from various working directories (e.g., `python main.py`, pytest).
"""
