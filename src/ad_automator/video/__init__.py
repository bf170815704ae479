"""Video ad generation."""
