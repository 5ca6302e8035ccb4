"""Application services wired by the ServiceContainer."""
