"""Utility functions for plenty_client."""

from plenty_client.utils.env import env_value, load_env_file_if_present

__all__ = ["env_value", "load_env_file_if_present"]
