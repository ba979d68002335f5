"""NotifyBot - IRC presence watcher with email notifications."""

__version__ = "0.2.0"
