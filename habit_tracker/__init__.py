"""Habit tracking REST backend."""
