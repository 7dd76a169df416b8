"""Backend packages for the Anicat catalog service."""
