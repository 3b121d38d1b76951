"""Transforms that reduce dialect parse trees into diagram models."""
