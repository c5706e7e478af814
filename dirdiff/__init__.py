"""
dirdiff - Stage the differences between two directory trees.

Features:
- Content comparison using SHA-256 (or xxhash for speed)
- New and changed files copied to a separate diff directory
- Directories missing from the target created in place
- Target files are never modified or deleted
"""

__version__ = "1.0.0"
