"""Browser navigation and action workflows."""
