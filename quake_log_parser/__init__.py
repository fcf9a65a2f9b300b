"""
Quake III Arena Log Parser

This package parses Quake III Arena server logs (games.log) into per-match
records of players, kill tallies and kill causes, and builds reports from them.
"""

__version__ = '0.1.0'
