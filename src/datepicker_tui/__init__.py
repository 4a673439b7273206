"""Segmented date/time picker for the terminal."""
