"""Pure release rules: versions, significance, tags, changelog text."""
