#!/usr/bin/env python3
"""
Main entry point for NotifyBot
"""

from notifybot.main import run

if __name__ == "__main__":
    run()
