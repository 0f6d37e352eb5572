"""Decide clone/fetch actions for every repository of a GitHub organization."""

__version__ = "0.0.1"
