"""HTTP surface and chat boundary helpers."""
