"""Sprachcoach backend: listening evaluation and exercise generation helpers."""
