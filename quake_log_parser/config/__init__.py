"""Configuration package for the Quake log parser."""
