"""Session lifecycle, error register and variant capability set."""
