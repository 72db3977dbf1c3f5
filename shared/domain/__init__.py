"""Domain building blocks shared by every bounded context."""
