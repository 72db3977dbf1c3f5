"""Infrastructure helpers backed by Django."""
