"""Wire and configuration models."""
