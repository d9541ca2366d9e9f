"""Mock Chari mobile-wallet API for development and integration testing."""

__version__ = "0.1.0"
