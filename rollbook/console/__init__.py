"""Interactive console: line I/O, validated prompts and role menus."""
