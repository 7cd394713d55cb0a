"""Discover, resolve and publish .NET applications."""
