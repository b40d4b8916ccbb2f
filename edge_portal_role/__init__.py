"""Provision the Apigee Edge role used by the Drupal developer portal."""

__version__ = "1.0.0"
