"""Terminal application for hwglance."""
