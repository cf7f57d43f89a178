"""Configuration for the Afterbuy client."""
