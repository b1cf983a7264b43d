"""Audit Cloudflare Images and require signed URLs on every hosted image."""

__version__ = "0.1.0"
