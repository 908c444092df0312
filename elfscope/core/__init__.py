"""Core data models, error hierarchy, and inspection engine."""
