"""Application services: unit of work and message bus."""
