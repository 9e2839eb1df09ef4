"""Core configuration, error handling and observability."""
