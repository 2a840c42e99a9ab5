"""Configuration, security and application wiring."""
