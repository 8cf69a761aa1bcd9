"""Windowed front end drawing the terminal layout with pygame."""
