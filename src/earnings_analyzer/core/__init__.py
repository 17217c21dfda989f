"""Core data types for the analysis pipeline."""
