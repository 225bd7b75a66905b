"""Interactive full-screen menu for PLAYTOOLS."""
