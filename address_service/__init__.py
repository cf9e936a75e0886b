"""Address Service - CRUD procedures over stored postal addresses."""

__version__ = "0.1.0"
