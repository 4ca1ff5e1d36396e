"""Adapters — Discord transport and the translation service client."""
