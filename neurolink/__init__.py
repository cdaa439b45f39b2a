"""Terminal infiltration puzzle game."""
