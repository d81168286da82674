"""Seeded trap-platformer: level generator, physics and session core."""
