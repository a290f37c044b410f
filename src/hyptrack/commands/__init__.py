"""
hyptrack.commands - CLI command implementations
"""

__all__ = [
    "cycles",
    "matrix_cmd",
    "roadmap",
    "tree",
]
