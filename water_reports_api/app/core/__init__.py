"""Configuration, persistence, logging and error types shared by all domains."""
