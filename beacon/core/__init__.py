"""Dispatcher, event types, protocols and configuration."""
