"""
Third-party integrations: satellite roof measurement, permit history,
AI assistant, speech-to-text.

Each client normalizes the upstream response into the plain dicts the
mobile app reads. Network failures raise IntegrationError.
"""

from .http import IntegrationError

__all__ = ["IntegrationError"]
