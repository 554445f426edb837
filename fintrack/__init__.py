"""
fintrack - Session and Scoped Persistence

The storage core of a personal finance tracker: authenticates users
against a local directory, issues session tokens, and keeps each user's
transactions, budgets and settings isolated inside one shared
key-value store.

DESIGN PRINCIPLES:
1. One flat, string-keyed store is the only persistence primitive
2. Every user's records live under their own key namespace
3. Every mutation is written through immediately
4. Corrupt stored data degrades to defaults, it never crashes the app
5. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "fintrack Team"
