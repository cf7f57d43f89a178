"""Utility modules for the Afterbuy client."""
