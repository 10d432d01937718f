"""
Hexkudo - Rendering Package
Printable puzzle images with matplotlib.
"""
from .puzzle_render import PuzzleRenderer, render_puzzle

__all__ = ['PuzzleRenderer', 'render_puzzle']
