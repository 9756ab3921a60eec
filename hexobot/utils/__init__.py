"""Utility helpers for hexobot."""
