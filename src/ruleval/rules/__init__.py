"""Built-in rules: presence rules in ``presence``, value rules in ``values``."""
